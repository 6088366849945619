"""Route d'etat du service."""

from fastapi import APIRouter

from ..deps import app_version
from ..schemas import HealthOut

router = APIRouter()


@router.get("/health", response_model=HealthOut)
async def health() -> HealthOut:
    return HealthOut(version=app_version)
