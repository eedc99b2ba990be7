"""Data models for local address-book contacts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class RawContact:
    """One entry as yielded by a contact source, before normalization."""

    display_name: str | None
    phone_numbers: list[str] = field(default_factory=list)
    identifier: str = ""


@dataclass(frozen=True)
class ContactRecord:
    """A normalized contact keyed by its canonical phone number."""

    id: str
    name: str
    canonical_phone: str
    formatted_phone: str = ""
    initials: str = ""
    invited: bool = False
    registered: bool = False

    def with_status(self, registered: bool, invited: bool) -> ContactRecord:
        return replace(self, registered=registered, invited=invited)
