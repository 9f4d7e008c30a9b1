"""Enums for model fields."""

from enum import IntEnum


class UserType(IntEnum):
    """Kind of account stored in the users table."""

    INDIVIDUAL = 0  # Historic reason to make it start at 0.
    ORGANIZATION = 1


class AccessMode(IntEnum):
    """Repository access levels granted to a user."""

    READ = 1
    WRITE = 2
    ADMIN = 3
    OWNER = 4
