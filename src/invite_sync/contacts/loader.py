"""Turn raw address-book entries into deduplicated contact records."""

from __future__ import annotations

import logging

from invite_sync.contacts.models import ContactRecord
from invite_sync.contacts.phone import format_phone, normalize_phone
from invite_sync.contacts.source import ContactSource
from invite_sync.exceptions import ContactSourceError

logger = logging.getLogger(__name__)


def compute_initials(name: str) -> str:
    """First letters of the first two words, or the first letter of a single word.

    >>> compute_initials("Alice Smith")
    'AS'
    >>> compute_initials("Bo")
    'B'
    """
    if len(name) >= 3 and " " in name:
        return "".join(part[:1] for part in name.split(" ")[:2])
    if name:
        return name[:1]
    return ""


class LocalContactLoader:
    """Load, normalize and deduplicate contacts from a :class:`ContactSource`.

    Args:
        source: Address-book source, expected to yield entries by name ascending.
        region: Optional region hint passed to the phone normalizer.
    """

    def __init__(self, source: ContactSource, region: str | None = None):
        self.source = source
        self.region = region

    def load(self) -> list[ContactRecord]:
        """Return one record per canonical number, first-seen wins.

        Never raises: an unreadable source yields an empty list.
        """
        try:
            entries = self.source.enumerate()
        except ContactSourceError as e:
            logger.warning(f"Contact source unavailable, treating as empty: {e}")
            return []

        records: dict[str, ContactRecord] = {}
        for entry in entries:
            name = entry.display_name
            if not name or not entry.phone_numbers:
                continue

            initials = compute_initials(name)
            for raw in entry.phone_numbers:
                canonical = normalize_phone(raw, self.region)
                if canonical is None:
                    continue
                if canonical in records:
                    logger.debug(f"Skipping duplicate number {canonical} for {name!r}")
                    continue
                records[canonical] = ContactRecord(
                    id=entry.identifier,
                    name=name,
                    canonical_phone=canonical,
                    formatted_phone=format_phone(canonical),
                    initials=initials,
                )

        logger.info(f"Loaded {len(records)} local contacts from {len(entries)} entries")
        return list(records.values())
