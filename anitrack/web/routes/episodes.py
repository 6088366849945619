"""
Routes des episodes et de la progression de visionnage.

GET  /api/episodes?type=list&animeId=...
GET  /api/episodes?type=detail&episodeId=...
GET  /api/episodes?type=season&animeId=...&season=N
POST /api/episodes?episodeId=...  {userId, watchTime, completed}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...core.exceptions import BadRequestError
from ...services.episodes import EpisodeService
from ..deps import get_episode_service
from ..schemas import (
    AnimeSummaryOut,
    EpisodeDetailOut,
    EpisodeListOut,
    EpisodeOut,
    ProgressIn,
    ProgressSavedOut,
    SeasonEpisodesOut,
    WatchHistoryOut,
    WatchProgressOut,
)

router = APIRouter(prefix="/api")


@router.get("/episodes")
async def episodes(
    type: Optional[str] = None,
    anime_id: Optional[str] = Query(None, alias="animeId"),
    episode_id: Optional[str] = Query(None, alias="episodeId"),
    season: Optional[str] = None,
    service: EpisodeService = Depends(get_episode_service),
):
    if type == "list":
        listing = service.list_episodes(anime_id)
        return EpisodeListOut(
            anime_id=listing.anime_id,
            episodes_by_season={
                season_number: [EpisodeOut.model_validate(ep) for ep in season_episodes]
                for season_number, season_episodes in listing.episodes_by_season.items()
            },
            total_episodes=listing.total_episodes,
        )

    if type == "detail":
        detail = service.get_episode(episode_id)
        return EpisodeDetailOut(
            **EpisodeOut.model_validate(detail.episode).model_dump(),
            anime=AnimeSummaryOut.model_validate(detail.anime) if detail.anime else None,
            watch_history=(
                WatchProgressOut.model_validate(detail.watch_history)
                if detail.watch_history
                else None
            ),
        )

    if type == "season":
        season_episodes = service.list_season(anime_id, season)
        return SeasonEpisodesOut(
            anime_id=anime_id,
            season=int(season),
            episodes=[EpisodeOut.model_validate(ep) for ep in season_episodes],
            total_episodes=len(season_episodes),
        )

    raise BadRequestError("Invalid type parameter")


@router.post("/episodes", response_model=ProgressSavedOut)
async def record_progress(
    body: ProgressIn,
    episode_id: Optional[str] = Query(None, alias="episodeId"),
    service: EpisodeService = Depends(get_episode_service),
) -> ProgressSavedOut:
    """Enregistre la progression ; l'episode vient de la query string ou du corps."""
    history = service.record_progress(
        user_id=body.user_id,
        episode_id=episode_id or body.episode_id,
        watch_time=body.watch_time,
        completed=body.completed,
    )
    return ProgressSavedOut(watch_history=WatchHistoryOut.model_validate(history))
