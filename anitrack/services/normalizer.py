"""
Normalisation des enregistrements Kitsu vers la forme canonique (AniList).

Les champs que Kitsu fournit directement (titres, images, synopsis, episodes,
statut, note) sont traduits sans perte ; la note Kitsu (0-10) est ramenee a
l'echelle AniList (0-100). Les genres et studios, qui demandent des appels
supplementaires, sont laisses vides plutot qu'inventes, sauf si le client
Kitsu a deja attache les genres au detail.
"""

from typing import Any, Optional

from anitrack.core.ports.api_clients import ProviderPayload


def parse_kitsu_date(value: Optional[str]) -> Optional[dict[str, Optional[int]]]:
    """Convertit une date Kitsu "YYYY-MM-DD" en FuzzyDate AniList."""
    if not value:
        return None
    parts = value.split("-")
    try:
        numbers = [int(part) for part in parts[:3]]
    except ValueError:
        return None
    numbers += [None] * (3 - len(numbers))
    return {"year": numbers[0], "month": numbers[1], "day": numbers[2]}


def kitsu_score_to_average(average_rating: Optional[str]) -> Optional[float]:
    """Note Kitsu (chaine, echelle 0-10) vers averageScore AniList (0-100)."""
    if average_rating in (None, ""):
        return None
    try:
        return float(average_rating) * 10
    except (TypeError, ValueError):
        return None


def kitsu_to_canonical(item: dict[str, Any]) -> dict[str, Any]:
    """
    Traduit une ressource anime Kitsu dans la forme canonique.

    Args:
        item: Ressource JSON:API ({id, attributes, genres?})

    Returns:
        Enregistrement canonique, avec kitsuId renseigne
    """
    attributes = item.get("attributes") or {}
    titles = attributes.get("titles") or {}
    canonical_title = attributes.get("canonicalTitle")
    poster = attributes.get("posterImage") or {}
    cover = attributes.get("coverImage") or {}
    start_date = parse_kitsu_date(attributes.get("startDate"))

    return {
        "id": item.get("id"),
        "title": {
            "english": canonical_title,
            "romaji": titles.get("en_jp") or canonical_title,
            "native": titles.get("ja_jp") or canonical_title,
        },
        "coverImage": {
            "large": poster.get("large"),
        },
        "bannerImage": cover.get("large"),
        "description": attributes.get("synopsis"),
        "episodes": attributes.get("episodeCount"),
        "status": attributes.get("status"),
        "genres": list(item.get("genres") or []),
        "averageScore": kitsu_score_to_average(attributes.get("averageRating")),
        "studios": {"nodes": []},
        "seasonYear": start_date["year"] if start_date else None,
        "startDate": start_date,
        "endDate": parse_kitsu_date(attributes.get("endDate")),
        "kitsuId": item.get("id"),
    }


def normalize_kitsu_payload(payload: ProviderPayload) -> ProviderPayload:
    """Traduit une liste (element par element) ou une ressource unique."""
    if isinstance(payload, list):
        return [kitsu_to_canonical(item) for item in payload]
    return kitsu_to_canonical(payload)
