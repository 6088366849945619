"""
Ports (interfaces abstraites) du domaine.

- api_clients : contrat des fournisseurs de metadonnees (AniList, Kitsu)
- repositories : contrats de persistance de l'etat utilisateur
"""
