import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ReadingActivityCreate(BaseModel):
    user_book_id: int
    pages_read: int = Field(..., gt=0)
    start_page: int = Field(..., ge=0)
    end_page: int = Field(..., gt=0)
    notes: str | None = None
    reading_date: dt.date

    @field_validator("end_page")
    @classmethod
    def after_start_page(cls, value: int, info: ValidationInfo) -> int:
        start = info.data.get("start_page")
        if start is not None and value <= start:
            raise ValueError("end_page must be greater than start_page")
        return value


class ReadingActivityUpdate(BaseModel):
    """None leaves a field unchanged; so does an empty notes string."""

    pages_read: int | None = Field(None, gt=0)
    start_page: int | None = Field(None, ge=0)
    end_page: int | None = Field(None, gt=0)
    notes: str | None = None
    reading_date: dt.date | None = None


class ReadingActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_book_id: int
    pages_read: int
    start_page: int
    end_page: int
    notes: str | None
    reading_date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime
