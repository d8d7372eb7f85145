from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    message: str
    data: T | None = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: dict[str, str] | None = None
