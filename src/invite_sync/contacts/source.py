"""Address-book sources that feed the local contact loader."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from invite_sync.contacts.models import RawContact
from invite_sync.exceptions import ContactSourceError

logger = logging.getLogger(__name__)

try:
    import objc  # noqa: F401
    from Contacts import (
        CNContactStore,
        CNContactFetchRequest,
        CNContactGivenNameKey,
        CNContactFamilyNameKey,
        CNContactPhoneNumbersKey,
        CNContactIdentifierKey,
        CNContactSortOrderGivenName,
    )
    _PYOBJC_AVAILABLE = True
except ImportError:
    _PYOBJC_AVAILABLE = False


def _sort_key(entry: RawContact) -> str:
    return entry.display_name or ""


class ContactSource(ABC):
    """Yields raw address-book entries ordered by display name ascending."""

    @abstractmethod
    def enumerate(self) -> list[RawContact]:
        """Return every entry, or an empty list when there are none.

        Raises:
            ContactSourceError: The address book could not be accessed.
        """
        ...


class InMemoryContactSource(ContactSource):
    """Source backed by a list, e.g. contacts exported by a host application."""

    def __init__(self, entries: Iterable[RawContact] = ()):
        # Stable sort keeps the given order among equal names.
        self._entries = sorted(entries, key=_sort_key)

    def enumerate(self) -> list[RawContact]:
        return list(self._entries)


class MacOSContactSource(ContactSource):
    """Read contacts from macOS Contacts.app via CNContactStore."""

    def __init__(self):
        if not _PYOBJC_AVAILABLE:
            raise ImportError(
                "MacOSContactSource requires macOS and pyobjc-framework-Contacts. "
                "Install with: pip install invite-sync[macos]"
            )

    def enumerate(self) -> list[RawContact]:
        store = CNContactStore.alloc().init()

        keys_to_fetch = [
            CNContactGivenNameKey,
            CNContactFamilyNameKey,
            CNContactPhoneNumbersKey,
            CNContactIdentifierKey,
        ]

        request = CNContactFetchRequest.alloc().initWithKeysToFetch_(keys_to_fetch)
        request.setSortOrder_(CNContactSortOrderGivenName)
        entries: list[RawContact] = []

        def _handle_contact(contact, stop):
            first = contact.givenName() or ""
            last = contact.familyName() or ""
            name = f"{first} {last}".strip() or None

            phones = []
            for phone_value in contact.phoneNumbers():
                number = phone_value.value().stringValue()
                if number:
                    phones.append(str(number))

            entries.append(
                RawContact(
                    display_name=name,
                    phone_numbers=phones,
                    identifier=str(contact.identifier()),
                )
            )

        success, error = store.enumerateContactsWithFetchRequest_error_usingBlock_(
            request, None, _handle_contact
        )

        if not success:
            err_msg = str(error) if error else "Unknown error"
            raise ContactSourceError(f"Failed to fetch contacts: {err_msg}")

        logger.info(f"Fetched {len(entries)} contacts from macOS Contacts")
        return sorted(entries, key=_sort_key)
