"""Client-side cache of the user's secrets for offline viewing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass
class Secret:
    """A stored secret as seen by the client."""

    id: str = ""
    name: str = ""
    data: str = ""


@dataclass
class CachedSecret:
    """A cached secret and whether its data has been fetched."""

    secret: Secret
    data_cached: bool = False


class SecretsCache:
    """Secrets keyed by identifier."""

    def __init__(self) -> None:
        self._secrets: dict[str, CachedSecret] = {}

    def cache_secrets(self, secrets: Iterable[Secret]) -> None:
        """Replace the cached list, keeping entries already known."""
        fresh: dict[str, CachedSecret] = {}
        for secret in secrets:
            known = self._secrets.get(secret.id)
            fresh[secret.id] = known if known is not None else CachedSecret(secret)
        self._secrets = fresh

    def list_secrets(self) -> list[Secret]:
        return [cached.secret for cached in self._secrets.values()]

    def cache_secret(self, secret: Secret) -> None:
        """Store a secret together with its data."""
        self._secrets[secret.id] = CachedSecret(secret, data_cached=True)

    def get_secret(self, secret_id: str) -> Optional[CachedSecret]:
        """Return the cached entry for ``secret_id``, or None."""
        return self._secrets.get(secret_id)

    def remove_secret(self, secret_id: str) -> None:
        self._secrets.pop(secret_id, None)