from fastapi import APIRouter, Depends

from readlog.deps import get_auth_service, get_user_service
from readlog.schemas.auth import LoginRequest, LoginResponse
from readlog.schemas.common import Envelope
from readlog.schemas.user import RegisterRequest, UserResponse
from readlog.services.auth_service import AuthService
from readlog.services.user_service import UserService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    token = await auth.login(data)
    return LoginResponse(message="Success", token=token)


@router.post("/register", response_model=Envelope[UserResponse])
async def register(data: RegisterRequest, users: UserService = Depends(get_user_service)):
    user = await users.create_user(data)
    return Envelope(message="Success", data=UserResponse.model_validate(user))
