from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from .. import dependencies
from ..schemas.user import DeleteResponse, RestoreResponse, UserCreate, UserResponse, UserUpdate
from ..services.user import UserService

router = APIRouter(prefix="/user", tags=["User"])


@router.get("", response_class=PlainTextResponse)
async def get_user(
    service: UserService = Depends(dependencies.get_user_service),
) -> str:
    return service.get_user()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: int,
    service: UserService = Depends(dependencies.get_user_service),
):
    return await service.find_one_by_id_or_fail(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(dependencies.get_user_service),
):
    return await service.create(payload.model_dump())


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    service: UserService = Depends(dependencies.get_user_service),
):
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    return await service.update_by_id(user_id, data)


@router.delete("/{user_id}", response_model=DeleteResponse)
async def delete_user(
    user_id: int,
    service: UserService = Depends(dependencies.get_user_service),
) -> DeleteResponse:
    return DeleteResponse(deleted=await service.delete_by_id(user_id))


@router.post("/{user_id}/restore", response_model=RestoreResponse)
async def restore_user(
    user_id: int,
    service: UserService = Depends(dependencies.get_user_service),
) -> RestoreResponse:
    return RestoreResponse(restored=await service.restore_by_id(user_id))
