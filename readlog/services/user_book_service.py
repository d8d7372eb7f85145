from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from readlog.errors import NotFound
from readlog.models import User, UserBook
from readlog.models.user_book import STATUS_FINISHED
from readlog.schemas.user_book import UserBookCreate, UserBookUpdate
from readlog.services.base import Service, soft_delete_entity


def _today():
    return datetime.now(UTC).date()


class UserBookService(Service):
    async def get_user_book(self, user_book_id: int) -> UserBook:
        with self.db_errors("Failed to fetch user book", user_book_id=user_book_id):
            book = await self.repo.find_by_id(UserBook, user_book_id)
        if book is None:
            self.logger.warning("User book %s not found", user_book_id)
            raise NotFound("User book not found")
        return book

    async def get_user_book_detail(self, user_book_id: int) -> UserBook:
        stmt = (
            select(UserBook)
            .where(UserBook.id == user_book_id, UserBook.deleted_at.is_(None))
            .options(selectinload(UserBook.reading_activities))
        )
        with self.db_errors("Failed to fetch user book", user_book_id=user_book_id):
            book = (await self.repo.session.execute(stmt)).scalar_one_or_none()
        if book is None:
            self.logger.warning("User book %s not found", user_book_id)
            raise NotFound("User book not found")
        return book

    async def list_user_books(self, user_id: int | None = None) -> Sequence[UserBook]:
        criteria = [UserBook.user_id == user_id] if user_id is not None else []
        with self.db_errors("Failed to fetch user books"):
            return await self.repo.find_where(UserBook, *criteria, order_by=[UserBook.created_at.desc(), UserBook.id.desc()])

    async def create_user_book(self, data: UserBookCreate, actor: User) -> UserBook:
        owner_id = data.user_id if data.user_id is not None else actor.id
        if owner_id != actor.id:
            with self.db_errors("Failed to fetch user", user_id=owner_id):
                owner = await self.repo.find_by_id(User, owner_id)
            if owner is None:
                raise NotFound("User not found")

        fields = data.model_dump(exclude={"user_id"})
        if fields["status"] == STATUS_FINISHED and fields["end_date"] is None:
            fields["end_date"] = _today()

        book = UserBook(user_id=owner_id, created_by=actor.id, **fields)
        with self.db_errors("Failed to create user book"):
            book = await self.repo.create(book)
        self.logger.info("User book %s created for user %s", book.id, owner_id)
        return book

    async def update_user_book(self, user_book_id: int, data: UserBookUpdate, actor: User) -> UserBook:
        """Apply the fields present in ``data``.

        Finishing a book without an explicit end date stamps today's date,
        unless the book already has one. ``current_page`` is never checked
        against ``total_pages``.
        """
        book = await self.get_user_book(user_book_id)

        fields = {key: value for key, value in data.model_dump().items() if value not in (None, "")}
        if fields.get("status") == STATUS_FINISHED and "end_date" not in fields and book.end_date is None:
            fields["end_date"] = _today()
        fields["updated_by"] = actor.id

        with self.db_errors("Failed to update user book", user_book_id=user_book_id):
            book = await self.repo.update(book, fields)
        self.logger.info("User book %s updated by %s", user_book_id, actor.id)
        return book

    async def soft_delete_user_book(self, user_book_id: int, actor: User) -> None:
        book = await self.get_user_book(user_book_id)
        await soft_delete_entity(self, book, actor.id, "user book")
