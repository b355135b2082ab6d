"""User Pydantic schemas: registration, login, profile output."""

from typing import Literal, Optional, Union

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class UserRegister(CamelModel):
    """Fields submitted on registration."""
    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class UserLogin(CamelModel):
    username: str
    password: str


class PasswordChange(CamelModel):
    old_password: str
    new_password: str = Field(min_length=8, max_length=128)


class AdminUserUpdate(CamelModel):
    """Empty strings leave the field unchanged."""
    username: Optional[str] = None
    email: Optional[Union[EmailStr, Literal[""]]] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    """Public user representation returned by the API."""
    id: str
    username: str
    email: str
    create_at: int
    update_at: int


class MeOut(UserOut):
    is_admin: bool = False


class Token(CamelModel):
    token: str
