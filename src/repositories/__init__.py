"""Persistence layer."""

from src.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
