"""Remote identity service access."""

from invite_sync.remote.client import HttpIdentityService, RemoteIdentityService
from invite_sync.remote.identity import IdentityProvider, StaticIdentityProvider
from invite_sync.remote.matcher import MatchResult, RemoteMatcher
from invite_sync.remote.models import IdentityKey, RemoteStatus

__all__ = [
    "HttpIdentityService",
    "RemoteIdentityService",
    "IdentityProvider",
    "StaticIdentityProvider",
    "MatchResult",
    "RemoteMatcher",
    "IdentityKey",
    "RemoteStatus",
]
