"""Errors raised by the user directory and mapped to HTTP responses."""


class UserDirectoryError(Exception):
    """Base class for user directory errors."""

    message = "User directory error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class UserNotFoundError(UserDirectoryError):
    """The requested user id does not exist."""

    message = "User not found"

    def __init__(self, user_id: int | None = None, message: str | None = None):
        self.user_id = user_id
        super().__init__(message)


class StorageUnavailableError(UserDirectoryError):
    """The relational store could not be reached."""

    message = "Storage unavailable"
