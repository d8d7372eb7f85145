import logging

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from readlog.config import Settings
from readlog.models import User
from readlog.repository import Repository
from readlog.security import hash_password

SAMPLE_USERNAME = "sampleuser"
SAMPLE_EMAIL = "sampleuser@example.com"
SAMPLE_PASSWORD = "rahasia"


async def seed_user(session: AsyncSession, settings: Settings, logger: logging.Logger) -> User | None:
    """Insert the sample account unless its username or email is already in use."""
    repo = Repository(session)
    if await repo.exists_where(User, or_(User.username == SAMPLE_USERNAME, User.email == SAMPLE_EMAIL)):
        logger.info("Sample user already present")
        return None

    user = await repo.create(
        User(
            name="Sample User",
            username=SAMPLE_USERNAME,
            email=SAMPLE_EMAIL,
            password=hash_password(SAMPLE_PASSWORD, settings.bcrypt_rounds),
        )
    )
    logger.info("Seeded sample user %s", user.id)
    return user
