"""
AniTrack - Catalogue et suivi d'anime.

Ce package agrege les metadonnees AniList et Kitsu, les expose via une API JSON
et persiste l'etat utilisateur (watchlist, favoris, historique de visionnage).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, exceptions)
- services/ : Couche application (agrégation, normalisation, bibliothèque, épisodes)
- adapters/ : Clients API externes et CLI
- infrastructure/ : Persistance SQLModel
- web/ : Application FastAPI
"""

__version__ = "0.1.0"
