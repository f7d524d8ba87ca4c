from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from app.deps import get_user_store
from app.models import (
    CreateUserRequest,
    CreateUserResponse,
    Envelope,
    UpdateUserRequest,
    UserResponse,
    describe_validation_error,
)
from app.user_store import InMemoryUserStore, User, UserNotFoundError

logger = logging.getLogger("users_api")

router = APIRouter(prefix="/api/users", tags=["users"])


def respond(envelope: Envelope, status_code: int) -> Response:
    """Serialize an envelope; a payload that can't be encoded becomes a plain 500."""
    try:
        return JSONResponse(envelope.to_json(), status_code=status_code)
    except (PydanticSerializationError, TypeError, ValueError):
        logger.exception("error encoding response")
        return PlainTextResponse("something went wrong", status_code=500)


def parse_user_id(raw: str) -> Optional[uuid.UUID]:
    """Parse a path id; only the hyphenated, braced, urn and 32-hex spellings count."""
    try:
        parsed = uuid.UUID(raw)
    except ValueError:
        return None
    # uuid.UUID() also tolerates stray hyphens, signs and underscores.
    if raw.lower() not in (str(parsed), "{%s}" % parsed, parsed.urn, parsed.hex):
        return None
    return parsed


def _to_response(user_id: uuid.UUID, user: User) -> UserResponse:
    return UserResponse(
        id=str(user_id),
        first_name=user.first_name,
        last_name=user.last_name,
        biography=user.biography,
    )


@router.get("")
@router.get("/", include_in_schema=False)
def list_users(store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    users = [_to_response(user_id, user) for user_id, user in store.list()]
    return respond(Envelope(data=users), 200)


@router.post("")
@router.post("/", include_in_schema=False)
def create_user(
    payload: Any = Body(default=None),
    store: InMemoryUserStore = Depends(get_user_store),
) -> Response:
    if payload is None:
        return respond(Envelope(message="invalid request"), 422)

    try:
        body = CreateUserRequest.model_validate(payload)
    except ValidationError as e:
        return respond(Envelope(message=f"Invalid input: {describe_validation_error(e)}"), 422)

    user_id = store.create(user=body.to_user())
    return respond(Envelope(data=CreateUserResponse(id=str(user_id))), 201)


@router.get("/{user_id}")
def get_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    parsed = parse_user_id(user_id)
    if parsed is None:
        return respond(Envelope(message="invalid user id"), 400)

    try:
        user = store.get(user_id=parsed)
    except UserNotFoundError:
        return respond(Envelope(message="could not find user"), 404)

    return respond(Envelope(data=_to_response(parsed, user)), 200)


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: Any = Body(default=None),
    store: InMemoryUserStore = Depends(get_user_store),
) -> Response:
    parsed = parse_user_id(user_id)
    if parsed is None:
        return respond(Envelope(message="invalid uuid"), 400)

    if payload is None:
        return respond(Envelope(message="invalid request"), 422)

    try:
        body = UpdateUserRequest.model_validate(payload)
    except ValidationError as e:
        return respond(Envelope(message=f"Invalid input: {describe_validation_error(e)}"), 422)

    try:
        store.update(user_id=parsed, user=body.to_user())
    except UserNotFoundError:
        return respond(Envelope(message="could not update user"), 500)

    return Response(status_code=204)


@router.delete("/{user_id}")
def delete_user(user_id: str, store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    parsed = parse_user_id(user_id)
    if parsed is None:
        return respond(Envelope(message="invalid uuid"), 400)

    try:
        store.delete(user_id=parsed)
    except UserNotFoundError:
        return respond(Envelope(message="could not delete user"), 500)

    return Response(status_code=204)
