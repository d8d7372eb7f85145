from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from readlog.database import Base
from readlog.models.audit import TimestampMixin


class ReadingActivity(TimestampMixin, Base):
    __tablename__ = "reading_activities"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_book_id: Mapped[int] = mapped_column(ForeignKey("user_books.id"), index=True)
    pages_read: Mapped[int] = mapped_column(Integer, nullable=False)
    start_page: Mapped[int] = mapped_column(Integer, nullable=False)
    end_page: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    reading_date: Mapped[date] = mapped_column(Date, nullable=False)

    user_book: Mapped["UserBook"] = relationship(back_populates="reading_activities")
