# File: auth_api/schemas/user.py

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Basic credentials are "username:password"; a colon in either part could
# never be split back apart at sign-in.
NO_COLON = r"^[^:]*$"


class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=255, pattern=NO_COLON)


class UserCreate(UserBase):
    password: str = Field(min_length=1, pattern=NO_COLON)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    user: UserRead
    token: str
