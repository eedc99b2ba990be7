"""Pure transformations over contact lists: merge, filter and invite marking."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from invite_sync.contacts.models import ContactRecord
from invite_sync.contacts.phone import normalize_phone
from invite_sync.remote.models import RemoteStatus

logger = logging.getLogger(__name__)


def sort_key(contact: ContactRecord) -> tuple[bool, bool, str, str]:
    """Registered first, then invited, then by name; phone breaks exact ties."""
    return (not contact.registered, not contact.invited, contact.name, contact.canonical_phone)


def merge_contacts(
    local: Sequence[ContactRecord],
    remote: Iterable[RemoteStatus] | None = None,
) -> list[ContactRecord]:
    """Apply remote status onto local records and sort them.

    With ``remote`` None or empty every record ends up unregistered and
    uninvited, still sorted by the same key.
    """
    lookup: dict[str, RemoteStatus] = {}
    for status in remote or ():
        key = normalize_phone(status.canonical_phone) or status.canonical_phone
        lookup[key] = status

    merged = []
    for contact in local:
        status = lookup.get(contact.canonical_phone)
        if status is None:
            merged.append(contact.with_status(registered=False, invited=False))
        else:
            merged.append(contact.with_status(registered=status.registered, invited=status.invited))
    return sorted(merged, key=sort_key)


def filter_contacts(contacts: Sequence[ContactRecord], filter_text: str) -> list[ContactRecord]:
    """Case-insensitive name match or verbatim phone substring match."""
    if not filter_text or not filter_text.strip():
        return list(contacts)
    needle = filter_text.lower()
    return [
        c for c in contacts
        if needle in c.name.lower() or filter_text in c.canonical_phone
    ]


def mark_invited(contacts: Sequence[ContactRecord], canonical_phone: str) -> list[ContactRecord]:
    """Copy of ``contacts`` with the first record for ``canonical_phone`` marked invited.

    A number that is not in the list (e.g. typed in by hand) leaves it unchanged.
    """
    updated = list(contacts)
    for index, contact in enumerate(updated):
        if contact.canonical_phone == canonical_phone:
            updated[index] = contact.with_status(registered=contact.registered, invited=True)
            return updated
    logger.debug(f"{canonical_phone} not in loaded contacts, nothing to mark")
    return updated
