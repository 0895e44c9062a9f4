"""SQLAlchemy storage for user records."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Query, Session

from src.exceptions import StorageUnavailableError
from src.models.user import User
from src.schemas.user import UserPayload
from src.services.passwords import get_password_hash

logger = logging.getLogger(__name__)


class UserRepository:
    """Translates between ``User`` rows and the users table.

    Owns the id sequence (assigned by the database) and nothing else: no
    business rules live here.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage(self) -> Iterator[None]:
        """Turn driver-level failures into ``StorageUnavailableError``."""
        try:
            yield
        except DBAPIError as e:
            self.db.rollback()
            logger.error(f"Storage error: {e}")
            raise StorageUnavailableError() from e

    @staticmethod
    def _limited(query: Query, limit: int | None) -> Query:
        if limit is not None:
            query = query.limit(limit)
        return query

    def list_all(self, limit: int | None = None) -> list[User]:
        """Return every user, ordered by id."""
        with self._storage():
            query = self.db.query(User).order_by(User.id)
            return self._limited(query, limit).all()

    def search(self, term: str, limit: int | None = None) -> list[User]:
        """Return users whose name or email contains ``term``, ignoring case.

        Wildcard characters in ``term`` are matched literally.
        """
        needle = term.strip()
        with self._storage():
            query = (
                self.db.query(User)
                .filter(
                    or_(
                        User.name.icontains(needle, autoescape=True),
                        User.email.icontains(needle, autoescape=True),
                    )
                )
                .order_by(User.id)
            )
            return self._limited(query, limit).all()

    def get_by_id(self, user_id: int) -> User | None:
        with self._storage():
            return self.db.query(User).filter(User.id == user_id).first()

    def create(self, payload: UserPayload) -> User:
        """Insert a new user; id and created_at are filled in by the store."""
        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=get_password_hash(payload.password),
        )
        with self._storage():
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def update(self, user_id: int, payload: UserPayload) -> User | None:
        """Replace every mutable field of a user. Returns None if it doesn't exist."""
        user = self.get_by_id(user_id)
        if user is None:
            return None

        user.name = payload.name
        user.email = payload.email
        user.password_hash = get_password_hash(payload.password)
        user.touch()

        with self._storage():
            self.db.commit()
            self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        """Hard delete a user. Returns whether a record was removed."""
        user = self.get_by_id(user_id)
        if user is None:
            return False

        with self._storage():
            self.db.delete(user)
            self.db.commit()
        return True
