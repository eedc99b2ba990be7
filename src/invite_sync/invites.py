"""Invite allowance service and outbound invite message dispatch."""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod

import httpx

from invite_sync.config import InviteSyncConfig
from invite_sync.exceptions import ConfigError, InviteServiceError
from invite_sync.remote.models import IdentityKey

logger = logging.getLogger(__name__)


class InviteOutcome(enum.Enum):
    """Result of an invite action as reported to the UI."""

    SENT = "sent"
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_PHONE = "invalid_phone"
    FAILED = "failed"


class WhitelistResult(enum.Enum):
    """Server answer to a whitelist request."""

    SENT = "OK"
    QUOTA_EXCEEDED = "INVITE_COUNT_EXCEEDED"


class InviteQuotaService(ABC):
    """Spends invite allowance on a phone number."""

    @abstractmethod
    async def whitelist(self, canonical_phone: str) -> WhitelistResult:
        """Reserve an invite for ``canonical_phone``.

        Raises:
            InviteServiceError: The request did not complete.
        """
        ...

    @abstractmethod
    async def invite_count(self) -> int:
        """Remaining invite allowance."""
        ...


class MessageDispatcher(ABC):
    """Hands the invite text to whatever channel delivers it (SMS, share sheet...)."""

    @abstractmethod
    def dispatch(self, canonical_phone: str, message: str) -> None:
        ...


class HttpInviteService(InviteQuotaService):
    """httpx-backed invite service client."""

    def __init__(
        self,
        config: InviteSyncConfig,
        key: IdentityKey,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not config.base_url:
            raise ConfigError(
                "Invite service URL is required. "
                "Pass it directly or set INVITE_SYNC_BASE_URL in your environment."
            )
        self.config = config
        self.key = key
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json", "X-Owner-Key": self.key.public_key}
        if self.key.token:
            headers["Authorization"] = f"Bearer {self.key.token}"
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers=headers,
            transport=self._transport,
        )

    async def whitelist(self, canonical_phone: str) -> WhitelistResult:
        try:
            async with self._client() as client:
                response = await client.post(
                    "/v1/invites/whitelist",
                    json={"phone_number": canonical_phone},
                )
                response.raise_for_status()
                data = response.json()
            return WhitelistResult(data["result"])
        except httpx.HTTPError as e:
            raise InviteServiceError(f"Invite whitelist failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise InviteServiceError(f"Unexpected whitelist response: {e}") from e

    async def invite_count(self) -> int:
        try:
            async with self._client() as client:
                response = await client.get("/v1/invites/count")
                response.raise_for_status()
                return int(response.json()["invite_count"])
        except httpx.HTTPError as e:
            raise InviteServiceError(f"Invite count request failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise InviteServiceError(f"Unexpected invite count response: {e}") from e
