"""Upload local numbers and fetch their registration/invite status."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from invite_sync.exceptions import RemoteMatchError, RemoteServiceError
from invite_sync.remote.client import RemoteIdentityService
from invite_sync.remote.models import IdentityKey, RemoteStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match attempt: statuses on success, the error otherwise."""

    ok: bool
    statuses: list[RemoteStatus] = field(default_factory=list)
    error: RemoteServiceError | None = None


class RemoteMatcher:
    """Two-step exchange with the identity service. Single attempt, no retry."""

    def __init__(self, service: RemoteIdentityService):
        self.service = service

    async def match(
        self, key: IdentityKey, container_id: str, canonical_phones: Iterable[str]
    ) -> list[RemoteStatus]:
        """Upload ``canonical_phones`` then fetch status for the container.

        Raises:
            RemoteMatchError: Either step failed. No partial result is returned.
        """
        phones = set(canonical_phones)
        try:
            await self.service.upload_contacts(key, container_id, phones)
        except RemoteServiceError as e:
            raise RemoteMatchError(f"Upload step failed: {e}") from e

        try:
            statuses = await self.service.fetch_contact_status(key, container_id)
        except RemoteServiceError as e:
            raise RemoteMatchError(f"Status step failed: {e}") from e

        logger.info(f"Matched {len(phones)} numbers, {len(statuses)} statuses returned")
        return statuses

    async def try_match(
        self, key: IdentityKey, container_id: str, canonical_phones: Iterable[str]
    ) -> MatchResult:
        """Like :meth:`match`, but returns a failed :class:`MatchResult` instead of raising."""
        try:
            statuses = await self.match(key, container_id, canonical_phones)
        except RemoteMatchError as e:
            return MatchResult(ok=False, error=e)
        return MatchResult(ok=True, statuses=statuses)
