"""
Routes de l'API web.

- catalog : /api/anime (agregation), /api/anilist, /api/kitsu
- genres : collection des genres et anime par genre
- episodes : listes d'episodes et progression de visionnage
- library : bibliotheque locale, watchlist, favoris
- users : creation et consultation des utilisateurs
- health : etat du service
"""
