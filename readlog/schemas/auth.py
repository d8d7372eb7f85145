from pydantic import BaseModel, Field

from readlog.schemas.user import ALPHANUMERIC


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, pattern=ALPHANUMERIC)
    password: str = Field(..., min_length=6, pattern=ALPHANUMERIC)


class LoginResponse(BaseModel):
    message: str
    token: str
