from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.user_store import User

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 20
BIOGRAPHY_MIN_LENGTH = 2
BIOGRAPHY_MAX_LENGTH = 200


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    first_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    biography: str = Field(..., min_length=BIOGRAPHY_MIN_LENGTH, max_length=BIOGRAPHY_MAX_LENGTH)

    def to_user(self) -> User:
        return User(first_name=self.first_name, last_name=self.last_name, biography=self.biography)


def _check_length(value: Optional[str], *, min_length: int, max_length: int) -> Optional[str]:
    # Empty means "not supplied"; only a real value is held to the bounds.
    if value and not (min_length <= len(value) <= max_length):
        raise ValueError(f"length must be between {min_length} and {max_length} characters")
    return value


class UpdateUserRequest(BaseModel):
    """Replacement values for a user.

    Every field is optional, but the update is a wholesale replace: whatever is
    omitted (or sent as null / "") ends up stored as an empty string.
    """

    model_config = ConfigDict(strict=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    biography: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _name_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_length(v, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)

    @field_validator("biography")
    @classmethod
    def _biography_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_length(v, min_length=BIOGRAPHY_MIN_LENGTH, max_length=BIOGRAPHY_MAX_LENGTH)

    def to_user(self) -> User:
        return User(
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            biography=self.biography or "",
        )


class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    biography: str


class CreateUserResponse(BaseModel):
    id: str


class Envelope(BaseModel):
    """Wire envelope shared by every JSON response. Unset keys are left out."""

    message: Optional[str] = None
    data: Optional[Any] = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def describe_validation_error(err: ValidationError) -> str:
    """Flatten a pydantic error into `field: reason; field: reason`."""
    parts: list[str] = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "body"
        msg = str(e.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts)
