"""User schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    full_name: str = Field("", max_length=255)
    is_active: bool = False

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class EmailAddressResponse(BaseModel):
    """One of a user's email addresses, with its derived primary flag."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    is_activated: bool
    is_primary: bool
