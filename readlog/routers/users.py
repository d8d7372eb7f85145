from fastapi import APIRouter, Depends

from readlog.deps import get_current_user, get_user_service
from readlog.models import User
from readlog.schemas.common import Envelope, MessageResponse
from readlog.schemas.user import UserCreate, UserResponse, UserUpdate
from readlog.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Envelope[list[UserResponse]])
async def list_users(
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    result = await users.list_users()
    return Envelope(message="success", data=[UserResponse.model_validate(u) for u in result])


@router.get("/{user_id}", response_model=Envelope[UserResponse])
async def get_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    user = await users.get_user(user_id)
    return Envelope(message="success", data=UserResponse.model_validate(user))


@router.post("", response_model=Envelope[UserResponse], status_code=201)
async def create_user(
    data: UserCreate,
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    user = await users.create_user(data, actor)
    return Envelope(message="User created successfully", data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=Envelope[UserResponse])
async def update_user(
    user_id: int,
    data: UserUpdate,
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    user = await users.update_user(user_id, data, actor)
    return Envelope(message="User updated successfully", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    await users.hard_delete_user(user_id, actor)
    return MessageResponse(message="User deleted successfully")


@router.patch("/{user_id}/soft-delete", response_model=MessageResponse)
async def soft_delete_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
):
    await users.soft_delete_user(user_id, actor)
    return MessageResponse(message="User soft deleted successfully")
