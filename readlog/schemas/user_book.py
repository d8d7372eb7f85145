import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from readlog.schemas.reading_activity import ReadingActivityResponse

Status = Literal["reading", "finished"]


class UserBookCreate(BaseModel):
    user_id: int | None = Field(None, description="Owner; defaults to the authenticated user")
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    publisher: str | None = Field(None, max_length=255)
    cover: str | None = Field(None, max_length=255, description="URL or path of the cover image")
    total_pages: int = Field(..., gt=0)
    current_page: int = Field(0, ge=0)
    motivation_read: str | None = None
    status: Status = "reading"
    start_date: dt.date
    end_date: dt.date | None = None


class UserBookUpdate(BaseModel):
    title: str | None = Field(None, max_length=255)
    author: str | None = Field(None, max_length=255)
    publisher: str | None = Field(None, max_length=255)
    cover: str | None = Field(None, max_length=255)
    total_pages: int | None = Field(None, gt=0)
    current_page: int | None = Field(None, ge=0)
    motivation_read: str | None = None
    status: Status | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class UserBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    author: str
    publisher: str | None
    cover: str | None
    total_pages: int
    current_page: int
    motivation_read: str | None
    status: str
    start_date: dt.date
    end_date: dt.date | None
    created_at: dt.datetime
    created_by: int | None
    updated_at: dt.datetime
    updated_by: int | None
    deleted_at: dt.datetime | None
    deleted_by: int | None


class UserBookDetail(UserBookResponse):
    reading_activities: list[ReadingActivityResponse] = []
