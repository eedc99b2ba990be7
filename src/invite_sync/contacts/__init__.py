"""Local address-book loading and phone normalization."""

from invite_sync.contacts.loader import LocalContactLoader, compute_initials
from invite_sync.contacts.models import ContactRecord, RawContact
from invite_sync.contacts.phone import format_phone, make_e164, normalize_phone
from invite_sync.contacts.source import ContactSource, InMemoryContactSource, MacOSContactSource

__all__ = [
    "LocalContactLoader",
    "compute_initials",
    "ContactRecord",
    "RawContact",
    "format_phone",
    "make_e164",
    "normalize_phone",
    "ContactSource",
    "InMemoryContactSource",
    "MacOSContactSource",
]
