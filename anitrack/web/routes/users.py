"""Routes des utilisateurs."""

from fastapi import APIRouter, Depends

from ...services.library import LibraryService
from ..deps import get_library_service
from ..schemas import UserIn, UserOut

router = APIRouter(prefix="/api")


@router.post("/users", response_model=UserOut, status_code=201)
async def create_user(
    body: UserIn,
    service: LibraryService = Depends(get_library_service),
):
    return service.create_user(body.email, body.username, avatar=body.avatar)


@router.get("/users/{user_id}", response_model=UserOut)
async def get_user(
    user_id: str,
    service: LibraryService = Depends(get_library_service),
):
    return service.get_user(user_id)
