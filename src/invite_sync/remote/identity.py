"""Identity providers supply session keys and the user's data container."""

from __future__ import annotations

from abc import ABC, abstractmethod

from invite_sync.exceptions import IdentityServiceError
from invite_sync.remote.models import IdentityKey


class IdentityProvider(ABC):
    """Source of the signed-in user's key material."""

    @abstractmethod
    def current_key(self) -> IdentityKey | None:
        """Key for the current session, or None when nobody is signed in."""
        ...

    @abstractmethod
    async def container_id(self) -> str:
        """Opaque ID of the user's remote data namespace.

        Raises:
            IdentityServiceError: The container could not be resolved.
        """
        ...


class StaticIdentityProvider(IdentityProvider):
    """Provider with fixed values, for hosts that resolve identity up front."""

    def __init__(self, key: IdentityKey | None, container_id: str | None = None):
        self._key = key
        self._container_id = container_id

    def current_key(self) -> IdentityKey | None:
        return self._key

    async def container_id(self) -> str:
        if not self._container_id:
            raise IdentityServiceError("No data container associated with this session")
        return self._container_id
