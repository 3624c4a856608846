"""User Schemas — Pydantic models for registration, login and profile endpoints.

Invariants:
    - No response model has a password field
    - email kept exactly as submitted (case-sensitive uniqueness)

Design Decisions:
    - str with length bounds over EmailStr: the stored value must match what
      the user typed, with no normalization applied
"""

from pydantic import BaseModel, Field, field_validator


class UserRegister(BaseModel):
    """Registration payload."""
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class UserLogin(BaseModel):
    email: str
    password: str


class PasswordChange(BaseModel):
    """Profile password change."""
    current_password: str
    new_password: str = Field(min_length=1, max_length=128)
    confirm_password: str


class UserPublic(BaseModel):
    id: int
    username: str
    email: str


class UserMasked(BaseModel):
    id: int
    username: str
    masked_email: str
