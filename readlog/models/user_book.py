from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from readlog.database import Base
from readlog.models.audit import ActorAuditMixin

STATUS_READING = "reading"
STATUS_FINISHED = "finished"


class UserBook(ActorAuditMixin, Base):
    __tablename__ = "user_books"
    __table_args__ = (CheckConstraint("status IN ('reading', 'finished')", name="ck_user_books_status"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    publisher: Mapped[str | None] = mapped_column(String(255))
    cover: Mapped[str | None] = mapped_column(String(255))
    total_pages: Mapped[int] = mapped_column(Integer, nullable=False)
    current_page: Mapped[int] = mapped_column(Integer, default=0)
    motivation_read: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_READING)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)

    user: Mapped["User"] = relationship(back_populates="user_books")
    reading_activities: Mapped[list["ReadingActivity"]] = relationship(
        back_populates="user_book",
        passive_deletes=True,
        order_by="[ReadingActivity.reading_date.desc(), ReadingActivity.created_at.desc(), ReadingActivity.id.desc()]",
    )
