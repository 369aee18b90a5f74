"""
Pydantic models for user data.

Passwords are accepted on registration and login only; ``UserRead``
never carries them.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    login: str = Field(..., min_length=1, max_length=64, examples=["alice"])
    full_name: Optional[str] = Field(None, examples=["Alice Liddell"])


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, examples=["strongpassword"])


class UserLogin(BaseModel):
    login: str
    password: str


class UserRead(UserBase):
    id: int

    model_config = {
        "from_attributes": True,
    }
