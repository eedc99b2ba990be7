"""Coordinates contact loading, remote matching and invites for one session."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Sequence
from dataclasses import replace

from invite_sync.config import InviteSyncConfig
from invite_sync.contacts.loader import LocalContactLoader
from invite_sync.contacts.models import ContactRecord
from invite_sync.contacts.phone import MIN_CUSTOM_INVITE_LENGTH, make_e164
from invite_sync.exceptions import ConfigError, InviteServiceError, RemoteServiceError
from invite_sync.invites import InviteOutcome, InviteQuotaService, MessageDispatcher, WhitelistResult
from invite_sync.remote.identity import IdentityProvider
from invite_sync.remote.matcher import MatchResult, RemoteMatcher
from invite_sync.sync.merge import filter_contacts, mark_invited, merge_contacts
from invite_sync.sync.state import StateStore, SyncState

logger = logging.getLogger(__name__)


class SyncPhase(enum.Enum):
    """Where the most recent sync cycle is, or how it ended."""

    IDLE = "idle"
    LOADING_LOCAL = "loading_local"
    UPLOADING_REMOTE = "uploading_remote"
    MERGED = "merged"
    LOCAL_ONLY = "local_only"


class PermissionOutcome(enum.Enum):
    """What the UI should do after the user answers the contacts prompt."""

    SYNC_STARTED = "sync_started"
    UNCHANGED = "unchanged"
    DENIED = "denied"
    SETTINGS_REQUIRED = "settings_required"


class SyncOrchestrator:
    """Runs sync cycles and invite actions, publishing results to a :class:`StateStore`.

    Cycles are not mutually exclusive. Each one publishes a complete contact
    list when it finishes, so the last cycle to finish determines what is shown.

    Args:
        loader: Local address-book loader.
        matcher: Remote registration matcher.
        identity: Supplies the session key and data container.
        invites: Invite allowance service. Required for invite actions.
        dispatcher: Delivers the invite text once an invite is reserved.
        config: Message text and region hint for custom input.
        store: State store to publish into; a fresh one by default.
    """

    def __init__(
        self,
        loader: LocalContactLoader,
        matcher: RemoteMatcher,
        identity: IdentityProvider,
        invites: InviteQuotaService | None = None,
        dispatcher: MessageDispatcher | None = None,
        config: InviteSyncConfig | None = None,
        store: StateStore | None = None,
    ):
        self.loader = loader
        self.matcher = matcher
        self.identity = identity
        self.invites = invites
        self.dispatcher = dispatcher
        self.config = config or InviteSyncConfig()
        self.store = store or StateStore()
        self.phase = SyncPhase.IDLE

    @property
    def state(self) -> SyncState:
        return self.store.get()

    # -- permission -------------------------------------------------------

    def mark_permission_requested(self) -> None:
        self.store.update(lambda s: replace(s, permission_requested=True))

    async def request_permission_result(self, granted: bool) -> PermissionOutcome:
        """Record the user's answer and start a sync cycle on a new grant."""
        previous = self.state
        if granted and previous.permission_granted is True:
            return PermissionOutcome.UNCHANGED

        self.store.update(lambda s: replace(s, permission_granted=granted))
        if granted:
            await self.run_cycle(reset_loading=True)
            return PermissionOutcome.SYNC_STARTED
        if previous.permission_requested:
            return PermissionOutcome.SETTINGS_REQUIRED
        return PermissionOutcome.DENIED

    async def refresh(self) -> SyncPhase | None:
        """Start a fresh cycle regardless of earlier grants.

        The current list stays visible: ``loading`` is not raised again.
        """
        return await self.run_cycle()

    # -- sync cycle -------------------------------------------------------

    async def run_cycle(self, reset_loading: bool = False) -> SyncPhase | None:
        """Load, match and publish. Returns the terminal phase.

        Returns None without touching state when no identity is available.
        Remote failures end in ``LOCAL_ONLY`` rather than raising. Only a
        new permission grant passes ``reset_loading`` to show the spinner again.
        """
        key = self.identity.current_key()
        if key is None:
            logger.info("No identity key for this session, skipping contact sync")
            return None

        self.phase = SyncPhase.LOADING_LOCAL
        if reset_loading:
            self.store.update(lambda s: s if s.loading else replace(s, loading=True))
        local = await asyncio.to_thread(self.loader.load)

        if not local:
            self._publish_contacts(merge_contacts(local))
            return self._finish(SyncPhase.LOCAL_ONLY)

        self.phase = SyncPhase.UPLOADING_REMOTE
        result = await self._match(key, local)
        if result.ok:
            self._publish_contacts(merge_contacts(local, result.statuses))
            return self._finish(SyncPhase.MERGED)

        logger.warning(f"Remote contact match failed, showing local contacts only: {result.error}")
        self._publish_contacts(merge_contacts(local))
        return self._finish(SyncPhase.LOCAL_ONLY)

    async def _match(self, key, local: Sequence[ContactRecord]) -> MatchResult:
        try:
            container_id = await self.identity.container_id()
        except RemoteServiceError as e:
            return MatchResult(ok=False, error=e)
        phones = {c.canonical_phone for c in local}
        return await self.matcher.try_match(key, container_id, phones)

    def _finish(self, phase: SyncPhase) -> SyncPhase:
        self.phase = phase
        logger.info(f"Contact sync finished: {phase.value}, {len(self.state.all_contacts)} contacts")
        return phase

    def _publish_contacts(self, contacts: Sequence[ContactRecord]) -> None:
        self.store.update(
            lambda s: replace(
                s,
                all_contacts=tuple(contacts),
                filtered_contacts=tuple(filter_contacts(contacts, s.filter_text)),
                loading=False,
            )
        )

    # -- view operations --------------------------------------------------

    def set_filter_text(self, text: str) -> SyncState:
        return self.store.update(
            lambda s: replace(
                s,
                filter_text=text,
                filtered_contacts=tuple(filter_contacts(s.all_contacts, text)),
            )
        )

    def mark_invited_locally(self, canonical_phone: str) -> SyncState:
        def _transition(s: SyncState) -> SyncState:
            contacts = mark_invited(s.all_contacts, canonical_phone)
            if contacts == list(s.all_contacts):
                return s
            return replace(
                s,
                all_contacts=tuple(contacts),
                filtered_contacts=tuple(filter_contacts(contacts, s.filter_text)),
            )

        return self.store.update(_transition)

    # -- invites ----------------------------------------------------------

    def _require_invites(self) -> InviteQuotaService:
        if self.invites is None:
            raise ConfigError("An invite service is required for invite actions")
        return self.invites

    async def send_invite(self, canonical_phone: str) -> InviteOutcome:
        """Reserve an invite, hand off the message and mark the contact invited."""
        invites = self._require_invites()
        try:
            result = await invites.whitelist(canonical_phone)
        except InviteServiceError as e:
            logger.warning(f"Invite for {canonical_phone} failed: {e}")
            return InviteOutcome.FAILED

        if result is WhitelistResult.QUOTA_EXCEEDED:
            logger.warning(f"No invites left, {canonical_phone} not invited")
            return InviteOutcome.QUOTA_EXCEEDED

        if self.dispatcher is not None:
            self.dispatcher.dispatch(canonical_phone, self.config.invite_message())
        self.mark_invited_locally(canonical_phone)
        logger.info(f"Invite sent to {canonical_phone}")
        return InviteOutcome.SENT

    async def invite_custom_input(self, raw: str, region: str | None = None) -> InviteOutcome:
        """Invite a number typed by the user rather than picked from the list."""
        phone = make_e164(raw, region or self.config.default_region)
        if len(phone) < MIN_CUSTOM_INVITE_LENGTH:
            logger.info(f"Rejected custom invite input {raw!r}")
            return InviteOutcome.INVALID_PHONE
        return await self.send_invite(phone)

    async def refresh_invite_count(self) -> int | None:
        """Publish the remaining invite allowance. None if it could not be read."""
        invites = self._require_invites()
        try:
            count = await invites.invite_count()
        except InviteServiceError as e:
            logger.warning(f"Could not read invite count: {e}")
            return None
        self.store.update(lambda s: replace(s, invite_count=count))
        return count
