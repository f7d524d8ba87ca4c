from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, List, Tuple

logger = logging.getLogger("users_api.store")


@dataclass(frozen=True)
class User:
    first_name: str
    last_name: str
    biography: str


class UserNotFoundError(LookupError):
    def __init__(self, user_id: uuid.UUID):
        super().__init__(f"could not find user {user_id}")
        self.user_id = user_id


class InMemoryUserStore:
    """Thread-safe in-memory user store.

    Storage semantics:
    - Stored only in the API process memory (cleared on restart).
    - Not shared across multiple API instances.
    - Every operation holds the same lock for its whole duration, reads included.

    No validation happens here; callers are expected to hand in well-formed
    records.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[uuid.UUID, User] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def create(self, *, user: User) -> uuid.UUID:
        user_id = uuid.uuid4()
        with self._lock:
            self._users[user_id] = user
        logger.debug("created user %s", user_id)
        return user_id

    def get(self, *, user_id: uuid.UUID) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list(self) -> List[Tuple[uuid.UUID, User]]:
        with self._lock:
            return list(self._users.items())

    def update(self, *, user_id: uuid.UUID, user: User) -> None:
        with self._lock:
            if user_id not in self._users:
                raise UserNotFoundError(user_id)
            self._users[user_id] = user
        logger.debug("updated user %s", user_id)

    def delete(self, *, user_id: uuid.UUID) -> None:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                raise UserNotFoundError(user_id)
        logger.debug("deleted user %s", user_id)
