"""
Routes des genres AniList.

?type=genres retourne la collection des genres ; ?type=anime&genre=X&page=N
retourne une page d'anime du genre.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...adapters.api.anilist_client import AniListClient
from ...core.exceptions import BadRequestError
from ..deps import get_anilist_client

router = APIRouter(prefix="/api")

_USAGE = "Invalid parameters. Use ?type=genres or ?type=anime&genre={name}"


@router.get("/genres")
async def genres(
    type: Optional[str] = None,
    genre: Optional[str] = None,
    page: Optional[str] = None,
    client: AniListClient = Depends(get_anilist_client),
):
    if type == "genres":
        return await client.get_genres()

    if type == "anime" and genre:
        try:
            page_number = int(page) if page else 1
        except ValueError:
            raise BadRequestError("Invalid page parameter") from None
        if page_number < 1:
            raise BadRequestError("Invalid page parameter")
        return await client.get_anime_by_genre(genre, page_number)

    raise BadRequestError(_USAGE)
