"""User directory service."""

import logging
from typing import Protocol

from sqlalchemy.orm import Session

from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.schemas.user import UserPayload

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    """Operations the users API needs, independent of how users are stored."""

    def list_all(self, limit: int | None = None) -> list[User]: ...

    def search(self, term: str, limit: int | None = None) -> list[User]: ...

    def get_by_id(self, user_id: int) -> User | None: ...

    def create(self, payload: UserPayload) -> User: ...

    def update(self, user_id: int, payload: UserPayload) -> User | None: ...

    def delete(self, user_id: int) -> bool: ...


class UserService:
    """Database-backed ``UserDirectory``."""

    def __init__(self, db: Session, repository: UserRepository | None = None):
        self.db = db
        self.repository = repository or UserRepository(db)

    def list_all(self, limit: int | None = None) -> list[User]:
        return self.repository.list_all(limit=limit)

    def search(self, term: str, limit: int | None = None) -> list[User]:
        """Search by name or email; a blank term lists everyone."""
        if not term or not term.strip():
            return self.repository.list_all(limit=limit)
        return self.repository.search(term, limit=limit)

    def get_by_id(self, user_id: int) -> User | None:
        return self.repository.get_by_id(user_id)

    def create(self, payload: UserPayload) -> User:
        user = self.repository.create(payload)
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user_id: int, payload: UserPayload) -> User | None:
        user = self.repository.update(user_id, payload)
        if user is not None:
            logger.info(f"Updated user {user_id}")
        return user

    def delete(self, user_id: int) -> bool:
        deleted = self.repository.delete(user_id)
        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted
