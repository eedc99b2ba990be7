"""Data models exchanged with the remote identity service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityKey:
    """Session key material identifying the current user to the service."""

    public_key: str
    token: str = ""


@dataclass(frozen=True)
class RemoteStatus:
    """Registration and invite status of one uploaded number."""

    canonical_phone: str
    registered: bool = False
    invited: bool = False
