import logging

from sqlalchemy.ext.asyncio import AsyncSession

from readlog.config import Settings
from readlog.errors import CredentialsError, NotFound
from readlog.models import User
from readlog.schemas.auth import LoginRequest
from readlog.security import create_access_token, decode_access_token, verify_password
from readlog.services.base import Service


class AuthService(Service):
    def __init__(self, session: AsyncSession, logger: logging.Logger, settings: Settings):
        super().__init__(session, logger)
        self.settings = settings

    async def login(self, data: LoginRequest) -> str:
        """Check credentials and issue a token, storing it on the user row."""
        self.logger.info("Login attempt for %s", data.username)
        with self.db_errors("Failed to fetch user"):
            users = await self.repo.find_where(
                User,
                User.username == data.username,
                order_by=[User.deleted_at.is_(None).desc(), User.id.desc()],
                include_deleted=True,
            )
        if not users:
            self.logger.warning("Login for unknown user %s", data.username)
            raise NotFound("Invalid credentials")

        user = users[0]
        if user.deleted_at is not None:
            self.logger.warning("Login for deleted user %s", user.id)
            raise CredentialsError("User deleted")
        if not verify_password(data.password, user.password):
            self.logger.warning("Invalid password for user %s", user.id)
            raise CredentialsError("Invalid credentials")

        token = create_access_token(user, self.settings)
        with self.db_errors("Failed to update token", user_id=user.id):
            await self.repo.update(user, {"token": token})
        self.logger.info("User %s logged in", user.id)
        return token

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer token to its live user.

        Only the token issued by the latest login is accepted; older tokens
        stop working even before they expire.
        """
        user_id = decode_access_token(token, self.settings)
        if user_id is None:
            raise CredentialsError("Could not validate credentials")
        with self.db_errors("Failed to fetch user", user_id=user_id):
            user = await self.repo.find_by_id(User, user_id)
        if user is None or user.token != token:
            raise CredentialsError("Could not validate credentials")
        return user
