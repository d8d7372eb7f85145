"""Reading activities and the progress they push onto their user book.

Logging an activity sets the book's ``current_page`` to the activity's
``end_page`` in the same transaction. The page is taken from the latest
logged activity, not summed, so activities are expected to arrive in
reading order; an out-of-order entry moves ``current_page`` backwards and
nothing here prevents that. Editing or deleting an activity leaves
``current_page`` alone.
"""

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from readlog.errors import NotFound, PersistenceError, ValidationFailed
from readlog.models import ReadingActivity, User, UserBook
from readlog.schemas.reading_activity import ReadingActivityCreate, ReadingActivityUpdate
from readlog.services.base import Service

ACTIVITY_ORDER = (
    ReadingActivity.reading_date.desc(),
    ReadingActivity.created_at.desc(),
    ReadingActivity.id.desc(),
)


class ReadingActivityService(Service):
    async def _get_user_book(self, user_book_id: int) -> UserBook:
        with self.db_errors("Failed to fetch user book", user_book_id=user_book_id):
            book = await self.repo.find_by_id(UserBook, user_book_id)
        if book is None:
            self.logger.warning("User book %s not found", user_book_id)
            raise NotFound("User book not found")
        return book

    async def _advance_progress(self, book: UserBook, end_page: int) -> None:
        await self.repo.update(book, {"current_page": end_page})

    async def log_activity(self, data: ReadingActivityCreate, actor: User) -> ReadingActivity:
        book = await self._get_user_book(data.user_book_id)
        self.logger.info("Logging activity on user book %s for %s", book.id, actor.id)

        activity = ReadingActivity(**data.model_dump())
        try:
            async with self.repo.transaction():
                await self.repo.create(activity)
                await self._advance_progress(book, data.end_page)
        except SQLAlchemyError:
            self.logger.exception("Failed to log activity on user book %s", data.user_book_id)
            raise PersistenceError("Failed to log activity") from None

        self.logger.info("Activity %s logged, user book %s at page %s", activity.id, data.user_book_id, data.end_page)
        return activity

    async def get_activity(self, activity_id: int) -> ReadingActivity:
        with self.db_errors("Failed to fetch reading activity", activity_id=activity_id):
            activity = await self.repo.find_by_id(ReadingActivity, activity_id)
        if activity is None:
            self.logger.warning("Reading activity %s not found", activity_id)
            raise NotFound("Reading activity not found")
        return activity

    async def list_for_user_book(self, user_book_id: int) -> Sequence[ReadingActivity]:
        await self._get_user_book(user_book_id)
        with self.db_errors("Failed to fetch reading activities", user_book_id=user_book_id):
            return await self.repo.find_where(
                ReadingActivity,
                ReadingActivity.user_book_id == user_book_id,
                order_by=ACTIVITY_ORDER,
            )

    async def update_activity(self, activity_id: int, data: ReadingActivityUpdate, actor: User) -> ReadingActivity:
        activity = await self.get_activity(activity_id)

        fields = {key: value for key, value in data.model_dump().items() if value not in (None, "")}
        start_page = fields.get("start_page", activity.start_page)
        end_page = fields.get("end_page", activity.end_page)
        if end_page <= start_page:
            raise ValidationFailed({"end_page": "end_page must be greater than start_page"})

        with self.db_errors("Failed to update reading activity", activity_id=activity_id):
            activity = await self.repo.update(activity, fields)
        self.logger.info("Reading activity %s updated by %s", activity_id, actor.id)
        return activity

    async def delete_activity(self, activity_id: int, actor: User) -> None:
        activity = await self.get_activity(activity_id)
        with self.db_errors("Failed to delete reading activity", activity_id=activity_id):
            await self.repo.hard_delete(activity)
        self.logger.info("Reading activity %s deleted by %s", activity_id, actor.id)
