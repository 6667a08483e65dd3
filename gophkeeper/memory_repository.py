"""A user repository kept in memory."""

from __future__ import annotations

import dataclasses
import threading
import uuid

from gophkeeper.auth import (
    User,
    UserIsNotRegisteredError,
    UserPasswordIsEmptyError,
    UserRepository,
    UserWithEmailIsRegisteredError,
)


class InMemoryUserRepository(UserRepository):
    """Thread-safe user storage keyed by e-mail."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def register(self, user: User) -> uuid.UUID:
        with self._lock:
            if not user.password:
                raise UserPasswordIsEmptyError()
            if user.email in self._users:
                raise UserWithEmailIsRegisteredError()
            user_id = uuid.uuid4()
            self._users[user.email] = dataclasses.replace(user, id=user_id)
            return user_id

    def find_by_email(self, email: str) -> User:
        with self._lock:
            try:
                return self._users[email]
            except KeyError:
                raise UserIsNotRegisteredError() from None