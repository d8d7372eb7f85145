"""Uniqueness predicates backing user registration and updates."""

from readlog.models import User
from readlog.repository import Repository


async def username_taken(repo: Repository, username: str, exclude_id: int | None = None) -> bool:
    criteria = [User.username == username]
    if exclude_id:
        criteria.append(User.id != exclude_id)
    return await repo.exists_where(User, *criteria)


async def email_taken(repo: Repository, email: str, exclude_id: int | None = None) -> bool:
    criteria = [User.email == email]
    if exclude_id:
        criteria.append(User.id != exclude_id)
    return await repo.exists_where(User, *criteria)


async def check_unique_user(
    repo: Repository,
    username: str | None,
    email: str | None,
    exclude_id: int | None = None,
) -> dict[str, str]:
    """Map field name to reason for every value already held by another live user."""
    errors = {}
    if username and await username_taken(repo, username, exclude_id):
        errors["username"] = "Username is already taken"
    if email and await email_taken(repo, email, exclude_id):
        errors["email"] = "Email is already registered"
    return errors
