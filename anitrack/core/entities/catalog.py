"""
Catalog request entities.

A catalog request describes what a page asks the metadata providers for:
a list (trending, seasonal, popular, search) or a single record (detail).
Requests are validated once, before any provider is called, so that a bad
request never triggers a provider fallback.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from anitrack.core.exceptions import BadRequestError


class RequestKind(str, Enum):
    """Kinds of catalog request understood by every provider."""

    TRENDING = "trending"
    SEASONAL = "seasonal"
    POPULAR = "popular"
    SEARCH = "search"
    DETAIL = "detail"

    @property
    def is_list(self) -> bool:
        """True for kinds that return a list of records."""
        return self is not RequestKind.DETAIL


class Season(str, Enum):
    """Broadcast seasons, as named by AniList."""

    WINTER = "WINTER"
    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"


def current_season(today: Optional[date] = None) -> Season:
    """
    Return the broadcast season for a date.

    March-May is spring, June-August summer, September-November fall,
    and the remaining months winter.
    """
    month = (today or date.today()).month
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


@dataclass(frozen=True)
class CatalogQuery:
    """
    Validated catalog request.

    Attributes:
        kind: Request kind
        search: Search text (required for SEARCH)
        id: Provider record id (required for DETAIL)
        season: Season for SEASONAL (defaults to the current one)
        year: Year for SEASONAL (defaults to the current one)
    """

    kind: RequestKind
    search: Optional[str] = None
    id: Optional[str] = None
    season: Optional[Season] = None
    year: Optional[int] = None

    @classmethod
    def build(
        cls,
        kind: Optional[str],
        search: Optional[str] = None,
        id: Optional[str] = None,
        season: Optional[str] = None,
        year: Optional[str | int] = None,
    ) -> "CatalogQuery":
        """
        Validate raw request parameters.

        Raises:
            BadRequestError: invalid type, missing search text or missing id
        """
        try:
            request_kind = RequestKind((kind or "").lower())
        except ValueError:
            raise BadRequestError("Invalid type parameter") from None

        search = search.strip() if search else None
        if request_kind is RequestKind.SEARCH and not search:
            raise BadRequestError("Search query required")

        id = id.strip() if id else None
        if request_kind is RequestKind.DETAIL and not id:
            raise BadRequestError("Anime ID required")

        parsed_season = None
        parsed_year = None
        if request_kind is RequestKind.SEASONAL:
            if season:
                try:
                    parsed_season = Season(season.upper())
                except ValueError:
                    raise BadRequestError("Invalid season parameter") from None
            if year is not None and year != "":
                try:
                    parsed_year = int(year)
                except ValueError:
                    raise BadRequestError("Invalid year parameter") from None

        return cls(
            kind=request_kind,
            search=search if request_kind is RequestKind.SEARCH else None,
            id=id if request_kind is RequestKind.DETAIL else None,
            season=parsed_season,
            year=parsed_year,
        )

    def resolved_season(self, today: Optional[date] = None) -> tuple[Season, int]:
        """Season and year of a SEASONAL request, defaulting to today."""
        today = today or date.today()
        return self.season or current_season(today), self.year or today.year

    def cache_key(self, source: str) -> str:
        """Cache key of the request for one provider."""
        parts = [source, self.kind.value]
        if self.search:
            parts.append(self.search.lower())
        if self.id:
            parts.append(self.id)
        if self.kind is RequestKind.SEASONAL:
            season, year = self.resolved_season()
            parts.extend([season.value, str(year)])
        return ":".join(parts)


def display_title(record: dict[str, Any]) -> str:
    """Display title of a canonical record: english, then romaji, then native."""
    title = record.get("title") or {}
    return (
        title.get("english")
        or title.get("romaji")
        or title.get("native")
        or "Unknown Title"
    )
