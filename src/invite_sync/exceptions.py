"""Unified exception hierarchy for invite-sync."""


class InviteSyncError(Exception):
    """Base exception for all invite-sync errors."""


class ConfigError(InviteSyncError):
    """Missing or invalid configuration."""


# Contacts
class ContactSourceError(InviteSyncError):
    """The local address book could not be read."""


# Remote
class RemoteServiceError(InviteSyncError):
    """Base exception for remote service calls."""


class IdentityServiceError(RemoteServiceError):
    """Contact upload, status fetch or container lookup failed."""


class RemoteMatchError(RemoteServiceError):
    """Matching local numbers against the identity service failed."""


class InviteServiceError(RemoteServiceError):
    """Invite whitelist or invite count request failed."""
