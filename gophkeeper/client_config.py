"""Client configuration read from command-line flags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from gophkeeper.config import ConfigError, _FlagError, _FlagSpec, _Settings, _string

SERVER_ADDRESS = "serveraddress"

_CLIENT_FLAGS = (_FlagSpec(SERVER_ADDRESS, "s", "server address"),)


class ClientConfigError(ConfigError):
    """Raised when the client configuration cannot be read."""


@dataclass
class ClientConfig:
    server_address: str = ""


ClientConfigOption = Callable[[_Settings], None]


def new_client_config(*args: ClientConfigOption) -> ClientConfig:
    """Build the client configuration, applying the options in order."""
    settings = _Settings()
    try:
        for option in args:
            option(settings)
        return ClientConfig(server_address=_string(settings, SERVER_ADDRESS))
    except ConfigError as exc:
        raise ClientConfigError(f"new config: {exc}") from exc


def from_args(args: Sequence[str]) -> ClientConfigOption:
    """An option that reads the client settings from command-line arguments."""

    def apply(settings: _Settings) -> None:
        try:
            settings.bind_flags(args, _CLIENT_FLAGS)
        except _FlagError as exc:
            raise ClientConfigError(f"from args: {exc}") from exc

    return apply