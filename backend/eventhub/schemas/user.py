"""
Pydantic schemas for auth request/response validation.

Validation failures carry the exact message returned to the client; the
request validation handler turns the first one into a 400.
"""

import re
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from eventhub.core.config import get_settings

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def check_email(value: Optional[str]) -> str:
    """Check the trimmed value against the pattern but return it as sent."""
    if not value or not EMAIL_PATTERN.match(value.strip()):
        raise PydanticCustomError("invalid_email", "Please enter a valid email address")
    return value


def check_password(value: Optional[str]) -> str:
    min_length = get_settings().MIN_PASSWORD_LENGTH
    if not value or len(value) < min_length:
        raise PydanticCustomError(
            "short_password",
            "Password must be at least {min_length} characters long",
            {"min_length": min_length},
        )
    return value


def check_name(value: Optional[str]) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("missing_name", "Name is required")
    return value.strip()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserCreate(BaseModel):
    # Field order is validation order: email, then password, then name
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)
    name: Optional[str] = Field(None, max_length=100, validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return check_name(value)


class UserLogin(BaseModel):
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password(value)


class GuestLogin(BaseModel):
    email: Optional[str] = Field(None, validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return check_email(value)


class GuestConvert(BaseModel):
    password: Optional[str] = Field(None, validate_default=True)
    name: Optional[str] = Field(None, max_length=100, validate_default=True)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return check_name(value)


class UserSummary(BaseModel):
    """Public view of a user, keyed the way the browser client expects."""

    id: int = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str
    email: str
    is_guest: bool = Field(
        validation_alias=AliasChoices("isGuest", "is_guest"), serialization_alias="isGuest"
    )

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    id: int = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    user: UserSummary
    token: str


class ProfileResponse(BaseModel):
    user: UserSummary
