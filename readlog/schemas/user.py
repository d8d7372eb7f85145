from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

ALPHANUMERIC = r"^[A-Za-z0-9]+$"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=100, pattern=ALPHANUMERIC)
    email: EmailStr
    password: str = Field(..., min_length=6, pattern=ALPHANUMERIC)
    password_confirmation: str = Field(..., min_length=6)

    @field_validator("password_confirmation")
    @classmethod
    def matches_password(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("Password confirmation does not match")
        return value


class UserCreate(RegisterRequest):
    role: Literal["admin", "user"] | None = None


class UserUpdate(BaseModel):
    """Empty strings and omitted fields both leave the stored value alone."""

    name: str | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=100, pattern=r"^[A-Za-z0-9]*$")
    email: EmailStr | None = None
    password: str | None = Field(None, pattern=r"^([A-Za-z0-9]{6,})?$")
    password_confirmation: str | None = None
    role: Literal["admin", "user", ""] | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_unset(cls, value):
        return value or None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uid: str
    name: str
    username: str
    email: str
    role: str
    created_at: datetime
    created_by: int | None
    updated_at: datetime
    updated_by: int | None
    deleted_at: datetime | None
    deleted_by: int | None
