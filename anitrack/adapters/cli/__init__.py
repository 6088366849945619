"""Interface ligne de commande AniTrack (Typer + Rich)."""
