"""User schemas."""

from datetime import datetime
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def check_email_shape(value: str) -> str:
    """Reject malformed addresses but keep the submitted spelling as-is."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


Email = Annotated[str, Field(max_length=100), AfterValidator(check_email_shape)]


class UserPayload(BaseModel):
    """Full user record submitted on create and on replace."""

    name: str = Field(..., min_length=1, max_length=100)
    email: Email
    password: str = Field(..., min_length=6, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value


class UserResponse(BaseModel):
    """User response. The password is never echoed back."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime | None
