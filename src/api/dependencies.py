"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.user_service import UserDirectory, UserService


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserDirectory:
    """Get user directory service with dependencies."""
    return UserService(db)
