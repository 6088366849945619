"""
Interface web (FastAPI) : API JSON du catalogue, des episodes et de la bibliotheque.
"""
