"""Sync pipeline: merge, filter, published state and orchestration."""

from invite_sync.sync.merge import filter_contacts, mark_invited, merge_contacts
from invite_sync.sync.orchestrator import PermissionOutcome, SyncOrchestrator, SyncPhase
from invite_sync.sync.state import StateStore, SyncState

__all__ = [
    "filter_contacts",
    "mark_invited",
    "merge_contacts",
    "PermissionOutcome",
    "SyncOrchestrator",
    "SyncPhase",
    "StateStore",
    "SyncState",
]
