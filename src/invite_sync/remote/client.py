"""Identity service API: contact upload and registration status lookup."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

import httpx

from invite_sync.config import InviteSyncConfig
from invite_sync.exceptions import ConfigError, IdentityServiceError
from invite_sync.remote.models import IdentityKey, RemoteStatus

logger = logging.getLogger(__name__)


class RemoteIdentityService(ABC):
    """Interface to the service that knows which numbers are registered."""

    @abstractmethod
    async def upload_contacts(
        self, key: IdentityKey, container_id: str, canonical_phones: Iterable[str]
    ) -> None:
        """Store the numbers under the user's container.

        Raises:
            IdentityServiceError: The upload was rejected or did not complete.
        """
        ...

    @abstractmethod
    async def fetch_contact_status(self, key: IdentityKey, container_id: str) -> list[RemoteStatus]:
        """Registration/invite status of every number in the container.

        Raises:
            IdentityServiceError: The lookup failed.
        """
        ...


def _auth_headers(key: IdentityKey) -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "User-Agent": "InviteSync/1.0",
        "X-Owner-Key": key.public_key,
    }
    if key.token:
        headers["Authorization"] = f"Bearer {key.token}"
    return headers


def _parse_status(item: dict) -> RemoteStatus:
    return RemoteStatus(
        canonical_phone=str(item["phone_number"]),
        registered=bool(item.get("is_registered", False)),
        invited=bool(item.get("is_invited", False)),
    )


class HttpIdentityService(RemoteIdentityService):
    """httpx-backed identity service client.

    Args:
        config: Supplies ``base_url`` and ``timeout``.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        config: InviteSyncConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not config.base_url:
            raise ConfigError(
                "Identity service URL is required. "
                "Pass it directly or set INVITE_SYNC_BASE_URL in your environment."
            )
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def upload_contacts(
        self, key: IdentityKey, container_id: str, canonical_phones: Iterable[str]
    ) -> None:
        phones = sorted(set(canonical_phones))
        path = f"/v1/containers/{container_id}/contacts"
        logger.debug(f"Uploading {len(phones)} numbers to {path}")
        try:
            async with self._client() as client:
                response = await client.post(
                    path,
                    json={"phone_numbers": phones},
                    headers=_auth_headers(key),
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise IdentityServiceError(f"Contact upload failed: {e}") from e

    async def fetch_contact_status(self, key: IdentityKey, container_id: str) -> list[RemoteStatus]:
        path = f"/v1/containers/{container_id}/contacts"
        logger.debug(f"Fetching contact status from {path}")
        try:
            async with self._client() as client:
                response = await client.get(path, headers=_auth_headers(key))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise IdentityServiceError(f"Contact status fetch failed: {e}") from e
        except ValueError as e:
            raise IdentityServiceError(f"Malformed contact status response: {e}") from e

        try:
            return [_parse_status(item) for item in data.get("contacts", [])]
        except (AttributeError, KeyError, TypeError) as e:
            raise IdentityServiceError(f"Malformed contact status response: {e}") from e
