import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from readlog.config import Settings
from readlog.database import get_session
from readlog.models import User
from readlog.services.auth_service import AuthService
from readlog.services.reading_activity_service import ReadingActivityService
from readlog.services.user_book_service import UserBookService
from readlog.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    logger: logging.Logger = Depends(get_logger),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(session, logger.getChild("auth"), settings)


def get_user_service(
    session: AsyncSession = Depends(get_session),
    logger: logging.Logger = Depends(get_logger),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(session, logger.getChild("users"), settings)


def get_user_book_service(
    session: AsyncSession = Depends(get_session),
    logger: logging.Logger = Depends(get_logger),
) -> UserBookService:
    return UserBookService(session, logger.getChild("userbooks"))


def get_reading_activity_service(
    session: AsyncSession = Depends(get_session),
    logger: logging.Logger = Depends(get_logger),
) -> ReadingActivityService:
    return ReadingActivityService(session, logger.getChild("activities"))


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """The authenticated actor for the request."""
    return await auth.authenticate(token)
