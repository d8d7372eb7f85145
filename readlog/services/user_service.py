import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from readlog.config import Settings
from readlog.errors import Forbidden, NotFound, ValidationFailed
from readlog.models import User
from readlog.models.user import ROLE_ADMIN, ROLE_USER
from readlog.schemas.user import RegisterRequest, UserCreate, UserUpdate
from readlog.security import hash_password
from readlog.services.base import Service, soft_delete_entity
from readlog.validation import check_unique_user


class UserService(Service):
    def __init__(self, session: AsyncSession, logger: logging.Logger, settings: Settings):
        super().__init__(session, logger)
        self.settings = settings

    def _require_admin(self, actor: User | None, action: str) -> None:
        if actor is None or actor.role != ROLE_ADMIN:
            self.logger.warning("User %s attempted to %s", actor.id if actor else None, action)
            raise Forbidden(f"Only administrators can {action}")

    async def list_users(self) -> Sequence[User]:
        self.logger.info("Fetching all users")
        with self.db_errors("Failed to fetch users"):
            return await self.repo.find_where(User, order_by=[User.id])

    async def get_user(self, user_id: int) -> User:
        with self.db_errors("Failed to fetch user", user_id=user_id):
            user = await self.repo.find_by_id(User, user_id)
        if user is None:
            self.logger.warning("User %s not found", user_id)
            raise NotFound("User not found")
        return user

    async def create_user(self, data: RegisterRequest, actor: User | None = None) -> User:
        """Insert a new account after checking username/email uniqueness.

        ``actor`` is None for self-registration; the created_by column then
        stays empty.
        """
        requested_role = data.role if isinstance(data, UserCreate) else None
        if requested_role:
            self._require_admin(actor, "assign roles")

        with self.db_errors("Failed to create user"):
            errors = await check_unique_user(self.repo, data.username, data.email)
        if errors:
            raise ValidationFailed(errors)

        role = requested_role or ROLE_USER
        user = User(
            name=data.name,
            username=data.username,
            email=data.email,
            password=hash_password(data.password, self.settings.bcrypt_rounds),
            role=role,
            created_by=actor.id if actor else None,
        )
        with self.db_errors("Failed to create user"):
            user = await self.repo.create(user)
        self.logger.info("User %s created", user.id)
        return user

    async def update_user(self, user_id: int, data: UserUpdate, actor: User) -> User:
        user = await self.get_user(user_id)
        if data.role:
            self._require_admin(actor, "assign roles")
        if data.password and actor.id != user.id:
            self._require_admin(actor, "change another user's password")

        with self.db_errors("Failed to update user", user_id=user_id):
            errors = await check_unique_user(self.repo, data.username, data.email, exclude_id=user.id)
        if errors:
            raise ValidationFailed(errors)

        fields = {
            key: value
            for key, value in data.model_dump(include={"name", "username", "email", "role"}).items()
            if value
        }
        if data.password:
            if data.password != data.password_confirmation:
                self.logger.warning("Password confirmation does not match for user %s", user_id)
                raise ValidationFailed({"password_confirmation": "Password confirmation does not match"})
            fields["password"] = hash_password(data.password, self.settings.bcrypt_rounds)
        fields["updated_by"] = actor.id

        with self.db_errors("Failed to update user", user_id=user_id):
            user = await self.repo.update(user, fields)
        self.logger.info("User %s updated by %s", user_id, actor.id)
        return user

    async def hard_delete_user(self, user_id: int, actor: User) -> None:
        self._require_admin(actor, "permanently delete users")
        with self.db_errors("Failed to fetch user", user_id=user_id):
            user = await self.repo.find_by_id(User, user_id, include_deleted=True)
        if user is None:
            raise NotFound("User not found")
        with self.db_errors("Failed to delete user", user_id=user_id):
            await self.repo.hard_delete(user)
        self.logger.info("User %s hard deleted by %s", user_id, actor.id)

    async def soft_delete_user(self, user_id: int, actor: User) -> None:
        user = await self.get_user(user_id)
        await soft_delete_entity(self, user, actor.id, "user")
