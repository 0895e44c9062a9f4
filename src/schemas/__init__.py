"""Pydantic schemas for API requests and responses."""

from src.schemas.user import UserPayload, UserResponse

__all__ = [
    "UserPayload",
    "UserResponse",
]
