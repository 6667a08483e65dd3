"""Server configuration built from defaults, a YAML document and flags."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import IO, Any, Callable, Iterable, Mapping, Sequence, Union

import yaml

CONFIG_TAG = "config"
SERVER_ADDRESS = "server.address"
SERVER_CERT_FILE = "server.certfile"
SERVER_KEY_FILE = "server.keyfile"
POSTGRES_DATA_SOURCE_NAME = "postgres.datasourcename"
VAULT_MASTER_KEY = "vault.masterkey"
JWT_SIGN_KEY = "jwtauth.signkey"
JWT_TOKEN_EXPIRY_IN = "jwtauth.tokenexpiryin"

DEFAULT_SERVER_ADDRESS = "localhost:8080"
DEFAULT_CERT_FILE = "servercert.crt"
DEFAULT_KEY_FILE = "servercert.key"
DEFAULT_CONFIG_FILE_PATH = "config.yml"

_SECTIONS = ("server", "postgres", "vault", "jwtauth")


class ConfigError(Exception):
    """Raised when the configuration cannot be read or decoded."""


class _FlagError(ValueError):
    """A command-line flag could not be parsed."""


@dataclass
class ServerConfig:
    address: str = ""
    cert_file: str = ""
    key_file: str = ""


@dataclass
class PostgresConfig:
    data_source_name: str = ""


@dataclass
class JWTAuthConfig:
    sign_key: str = ""
    token_expiry_in: timedelta = field(default_factory=timedelta)


@dataclass
class VaultConfig:
    master_key: str = ""


@dataclass
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    vault: VaultConfig = field(default_factory=VaultConfig)
    jwt_auth: JWTAuthConfig = field(default_factory=JWTAuthConfig)


@dataclass
class ConfigFile:
    name: str = ""


@dataclass(frozen=True)
class _FlagSpec:
    name: str
    shorthand: str
    usage: str
    default: str = ""


_SERVER_FLAGS = (
    _FlagSpec(CONFIG_TAG, "c", "config file path"),
    _FlagSpec(SERVER_ADDRESS, "a", "server address"),
    _FlagSpec(VAULT_MASTER_KEY, "k", "vault master key"),
)


def _parse_flags(args: Sequence[str], specs: Iterable[_FlagSpec]) -> dict[str, str]:
    """Return the values of the flags that appear in ``args``."""
    specs = tuple(specs)
    by_name = {spec.name: spec for spec in specs}
    by_short = {spec.shorthand: spec for spec in specs if spec.shorthand}
    values: dict[str, str] = {}
    remaining = iter(args)
    for arg in remaining:
        if arg == "--":
            break
        if not arg.startswith("-") or arg == "-":
            continue
        if arg.startswith("--"):
            name, sep, value = arg[2:].partition("=")
            if not name or name.startswith(("-", "=")):
                raise _FlagError(f"bad flag syntax: {arg}")
            spec = by_name.get(name)
            if spec is None:
                if name == "help":
                    raise _FlagError("help requested")
                raise _FlagError(f"unknown flag: --{name}")
            if not sep:
                value = next(remaining, None)
                if value is None:
                    raise _FlagError(f"flag needs an argument: --{name}")
        else:
            short, tail = arg[1], arg[2:]
            spec = by_short.get(short)
            if spec is None:
                if short == "h":
                    raise _FlagError("help requested")
                raise _FlagError(f"unknown shorthand flag: {short!r} in {arg}")
            if tail.startswith("=") and len(tail) > 1:
                value = tail[1:]
            elif tail:
                value = tail
            else:
                value = next(remaining, None)
                if value is None:
                    raise _FlagError(f"flag needs an argument: {short!r} in {arg}")
        values[spec.name] = value
    return values


def _flatten(data: Mapping[Any, Any], prefix: str = "") -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{str(key).lower()}"
        if isinstance(value, Mapping):
            result.update(_flatten(value, name + "."))
        else:
            result[name] = value
    return result


@dataclass
class _Settings:
    """Layered key/value settings: flags over config over defaults."""

    defaults: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)
    flags: dict[str, str] = field(default_factory=dict)
    flag_defaults: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        for layer in (self.flags, self.config, self.defaults, self.flag_defaults):
            if key in layer:
                return layer[key]
        return None

    def bind_flags(self, args: Sequence[str], specs: Iterable[_FlagSpec]) -> None:
        specs = tuple(specs)
        values = _parse_flags(args, specs)
        for spec in specs:
            self.flag_defaults[spec.name] = spec.default
            if spec.name in values:
                self.flags[spec.name] = values[spec.name]
            else:
                self.flags.pop(spec.name, None)


ConfigOption = Callable[[_Settings], None]


def _string(settings: _Settings, key: str) -> str:
    value = settings.get(key)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list)):
        raise ConfigError(f"'{key}' expected a string")
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


_DURATION_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def _parse_duration(text: str) -> timedelta:
    body = text
    negative = body.startswith("-")
    if body[:1] in ("-", "+"):
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ConfigError(f"invalid duration {text!r}")
    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ConfigError(f"invalid duration {text!r}")
        try:
            total += Decimal(match[1]) * _DURATION_UNITS_NS[match[2]]
        except InvalidOperation as exc:
            raise ConfigError(f"invalid duration {text!r}") from exc
        pos = match.end()
    if negative:
        total = -total
    return timedelta(microseconds=float(total / 1000))


def _duration(settings: _Settings, key: str) -> timedelta:
    value = settings.get(key)
    if value is None or value == "":
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' expected a duration")
    if isinstance(value, (int, float)):
        return timedelta(microseconds=value / 1000)
    if isinstance(value, str):
        return _parse_duration(value)
    raise ConfigError(f"'{key}' expected a duration")


def _decode_config(settings: _Settings) -> Config:
    for section in _SECTIONS:
        if settings.get(section) is not None:
            raise ConfigError(f"'{section}' expected a map")
    return Config(
        server=ServerConfig(
            address=_string(settings, SERVER_ADDRESS),
            cert_file=_string(settings, SERVER_CERT_FILE),
            key_file=_string(settings, SERVER_KEY_FILE),
        ),
        postgres=PostgresConfig(
            data_source_name=_string(settings, POSTGRES_DATA_SOURCE_NAME)
        ),
        vault=VaultConfig(master_key=_string(settings, VAULT_MASTER_KEY)),
        jwt_auth=JWTAuthConfig(
            sign_key=_string(settings, JWT_SIGN_KEY),
            token_expiry_in=_duration(settings, JWT_TOKEN_EXPIRY_IN),
        ),
    )


def new_config(*args: ConfigOption) -> Config:
    """Build the server configuration, applying the options in order."""
    settings = _Settings(
        defaults={
            SERVER_ADDRESS: DEFAULT_SERVER_ADDRESS,
            SERVER_CERT_FILE: DEFAULT_CERT_FILE,
            SERVER_KEY_FILE: DEFAULT_KEY_FILE,
        }
    )
    try:
        for option in args:
            option(settings)
        return _decode_config(settings)
    except ConfigError as exc:
        raise ConfigError(f"new config: {exc}") from exc


def from_yaml(stream: Union[IO[str], IO[bytes], str, bytes]) -> ConfigOption:
    """An option that reads settings from a YAML document."""

    def apply(settings: _Settings) -> None:
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise ConfigError(f"from yaml: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError("from yaml: document is not a mapping")
        settings.config = _flatten(data)

    return apply


def from_args(args: Sequence[str]) -> ConfigOption:
    """An option that reads settings from command-line arguments."""

    def apply(settings: _Settings) -> None:
        try:
            settings.bind_flags(args, _SERVER_FLAGS)
        except _FlagError as exc:
            raise ConfigError(f"from args: {exc}") from exc

    return apply


def new_config_file(args: Sequence[str]) -> ConfigFile:
    """Find the path of the configuration file named on the command line."""
    settings = _Settings(defaults={CONFIG_TAG: DEFAULT_CONFIG_FILE_PATH})
    try:
        settings.bind_flags(args, _SERVER_FLAGS)
        return ConfigFile(name=_string(settings, CONFIG_TAG))
    except (_FlagError, ConfigError) as exc:
        raise ConfigError(f"new config file: {exc}") from exc