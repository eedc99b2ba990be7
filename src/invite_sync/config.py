"""Configuration for the sync pipeline and its HTTP clients."""

from __future__ import annotations

import os
from dataclasses import dataclass

from invite_sync.exceptions import ConfigError

DEFAULT_TIMEOUT = 10.0
DEFAULT_REGION = "US"
DEFAULT_DOWNLOAD_URL = "getcode.com/download"
DEFAULT_MESSAGE = "I'm inviting you to try Code. Download it here: {url}"


@dataclass(frozen=True)
class InviteSyncConfig:
    """Settings shared by the remote clients and the orchestrator.

    Args:
        base_url: Root URL of the identity and invite API.
        timeout: Per-request timeout in seconds.
        default_region: ISO 3166-1 region used to read custom invite input
            that has no country code.
        download_url: Link substituted into the invite message.
        message_template: Invite text with a ``{url}`` placeholder.
    """

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    default_region: str = DEFAULT_REGION
    download_url: str = DEFAULT_DOWNLOAD_URL
    message_template: str = DEFAULT_MESSAGE

    @classmethod
    def from_env(cls, require_base_url: bool = False) -> InviteSyncConfig:
        """Build a config from ``INVITE_SYNC_*`` environment variables."""
        base_url = os.environ.get("INVITE_SYNC_BASE_URL", "").strip()
        if require_base_url and not base_url:
            raise ConfigError(
                "Identity service URL is required. "
                "Pass it directly or set INVITE_SYNC_BASE_URL in your environment."
            )

        raw_timeout = os.environ.get("INVITE_SYNC_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigError(f"Invalid INVITE_SYNC_TIMEOUT: {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigError(f"INVITE_SYNC_TIMEOUT must be positive, got {timeout}")

        return cls(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            default_region=os.environ.get("INVITE_SYNC_DEFAULT_REGION", DEFAULT_REGION).upper(),
            download_url=os.environ.get("INVITE_SYNC_DOWNLOAD_URL", DEFAULT_DOWNLOAD_URL),
            message_template=os.environ.get("INVITE_SYNC_MESSAGE", DEFAULT_MESSAGE),
        )

    def invite_message(self) -> str:
        """Invite text with the download link filled in."""
        return self.message_template.replace("{url}", self.download_url)
