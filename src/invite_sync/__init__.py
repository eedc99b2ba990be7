"""Address-book sync and invite matching against a remote identity service."""

from invite_sync.config import InviteSyncConfig
from invite_sync.contacts import ContactRecord, LocalContactLoader, RawContact, normalize_phone
from invite_sync.invites import InviteOutcome
from invite_sync.remote import IdentityKey, RemoteMatcher, RemoteStatus
from invite_sync.sync import StateStore, SyncOrchestrator, SyncPhase, SyncState

__all__ = [
    "InviteSyncConfig",
    "ContactRecord",
    "LocalContactLoader",
    "RawContact",
    "normalize_phone",
    "InviteOutcome",
    "IdentityKey",
    "RemoteMatcher",
    "RemoteStatus",
    "StateStore",
    "SyncOrchestrator",
    "SyncPhase",
    "SyncState",
]
