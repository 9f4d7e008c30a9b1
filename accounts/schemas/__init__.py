"""Pydantic schemas."""

from accounts.schemas.user import EmailAddressResponse, UserCreate

__all__ = ["UserCreate", "EmailAddressResponse"]
