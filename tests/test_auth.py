import bcrypt
import pytest

from gophkeeper.auth import (
    NIL_UUID,
    PASSWORD_MAX_LENGTH_IN_BYTES,
    AuthService,
    InvalidPasswordError,
    PasswordTooLongError,
    User,
    UserIsNotRegisteredError,
)
from gophkeeper.memory_repository import InMemoryUserRepository

EMAIL = "user@example.com"


def _matches(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def test_hash_password():
    password = "password"
    sut = User(password=password)

    sut.hash_password()

    assert sut.password != password
    assert _matches(password, sut.password)
    assert sut.compare_password(password) is True


def test_hash_empty_password():
    password = ""
    sut = User(password=password)

    sut.hash_password()

    assert _matches(password, sut.password)
    assert sut.compare_password(password) is True


def test_hash_password_longer_than_limit():
    password = "password" * 10
    assert len(password) > PASSWORD_MAX_LENGTH_IN_BYTES
    sut = User(password=password)

    with pytest.raises(PasswordTooLongError):
        sut.hash_password()
    assert sut.password == password


def test_compare_equal_passwords():
    password = "password"
    sut = User(password=password)
    sut.hash_password()

    assert sut.compare_password("password") is True


def test_compare_different_passwords():
    password = "password"
    sut = User(password=password)
    sut.hash_password()

    assert sut.compare_password("secret") is False


def test_compare_with_unhashed_password_is_false():
    password = "password"
    sut = User(password=password)

    assert sut.compare_password("password") is False


def test_service_register_and_login():
    repo = InMemoryUserRepository()
    service = AuthService(repo)
    password = "password"

    user_id = service.register(User(email=EMAIL, password=password))

    assert user_id != NIL_UUID
    stored = repo.find_by_email(EMAIL)
    assert stored.id == user_id
    assert stored.password != password
    assert service.login(User(email=EMAIL, password=password)) == user_id


def test_service_login_with_wrong_password():
    service = AuthService(InMemoryUserRepository())
    password = "password"
    service.register(User(email=EMAIL, password=password))

    wrong = "secret"
    with pytest.raises(InvalidPasswordError):
        service.login(User(email=EMAIL, password=wrong))


def test_service_login_unregistered_user():
    service = AuthService(InMemoryUserRepository())
    password = "password"

    with pytest.raises(UserIsNotRegisteredError):
        service.login(User(email=EMAIL, password=password))