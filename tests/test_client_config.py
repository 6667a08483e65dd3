import pytest

from gophkeeper.client_config import (
    ClientConfig,
    ClientConfigError,
    from_args,
    new_client_config,
)


def test_new_without_options():
    assert new_client_config() == ClientConfig(server_address="")


def test_from_args_shorthand():
    got = new_client_config(from_args(["app", "-s", "http://localhost:8081"]))

    assert got == ClientConfig(server_address="http://localhost:8081")


def test_from_args_full_name():
    got = new_client_config(
        from_args(["app", "--serveraddress", "http://localhost:8080"])
    )

    assert got == ClientConfig(server_address="http://localhost:8080")


def test_from_args_unknown_flag():
    with pytest.raises(ClientConfigError):
        new_client_config(from_args(["app", "--flag", "http://localhost:8080"]))


def test_from_args_last_value_wins():
    got = new_client_config(from_args(["app", "-s", "a:1", "-s", "b:2"]))

    assert got.server_address == "b:2"