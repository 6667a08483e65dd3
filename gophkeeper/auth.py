"""Users, password hashing and the authentication service."""

from __future__ import annotations

import abc
import uuid
from dataclasses import dataclass, field

import bcrypt

PASSWORD_MAX_LENGTH_IN_BYTES = 72
DEFAULT_COST = 10
NIL_UUID = uuid.UUID(int=0)


class AuthError(Exception):
    """Base class for authentication errors."""


class InvalidPasswordError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid password")


class UserWithEmailIsRegisteredError(AuthError):
    def __init__(self) -> None:
        super().__init__("user with email has already been registered")


class UserPasswordIsEmptyError(AuthError):
    def __init__(self) -> None:
        super().__init__("user password is empty")


class UserIsNotRegisteredError(AuthError):
    def __init__(self) -> None:
        super().__init__("user is not registered")


class PasswordTooLongError(AuthError):
    def __init__(self) -> None:
        super().__init__(
            f"password length exceeds {PASSWORD_MAX_LENGTH_IN_BYTES} bytes"
        )


@dataclass
class User:
    """A user account: e-mail, password (plain or hashed) and identifier."""

    email: str = ""
    password: str = ""
    id: uuid.UUID = field(default=NIL_UUID)

    def hash_password(self) -> None:
        """Replace the plain password with its bcrypt hash."""
        raw = self.password.encode()
        if len(raw) > PASSWORD_MAX_LENGTH_IN_BYTES:
            raise PasswordTooLongError()
        hashed = bcrypt.hashpw(raw, bcrypt.gensalt(rounds=DEFAULT_COST))
        self.password = hashed.decode()

    def compare_password(self, password: str) -> bool:
        """Tell whether ``password`` matches the stored hash."""
        try:
            return bcrypt.checkpw(password.encode(), self.password.encode())
        except ValueError:
            return False


class UserRepository(abc.ABC):
    """Storage of registered users."""

    @abc.abstractmethod
    def register(self, user: User) -> uuid.UUID:
        """Store a new user and return its identifier."""

    @abc.abstractmethod
    def find_by_email(self, email: str) -> User:
        """Return the user registered with ``email``."""


class AuthService:
    """Registers users and checks their credentials."""

    def __init__(self, repo: UserRepository) -> None:
        self._repo = repo

    def register(self, user: User) -> uuid.UUID:
        user.hash_password()
        return self._repo.register(user)

    def login(self, user: User) -> uuid.UUID:
        found = self._repo.find_by_email(user.email)
        if not found.compare_password(user.password):
            raise InvalidPasswordError()
        return found.id