"""Phone number normalization for address-book and custom invite input."""

from __future__ import annotations

import logging
import re

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

logger = logging.getLogger(__name__)

CANONICAL_PATTERN = re.compile(r"^\+[1-9]\d{7,14}$")
MIN_CUSTOM_INVITE_LENGTH = 8

_STRIP_CHARS = str.maketrans("", "", " ()-")


def _clean(raw: str) -> str:
    """Drop spaces, parentheses and hyphens; make sure there is a leading '+'."""
    cleaned = raw.strip().translate(_STRIP_CHARS)
    if cleaned and not cleaned.startswith("+"):
        cleaned = f"+{cleaned}"
    return cleaned


def is_canonical(value: str) -> bool:
    return bool(CANONICAL_PATTERN.match(value))


def normalize_phone(raw: str | None, region: str | None = None) -> str | None:
    """Normalize a device phone string to canonical international form.

    Args:
        raw: Phone number as stored in the address book.
        region: Optional ISO region hint. When given, a number without a
            country code is resolved against it the way the device's own
            normalized-number column would be.

    Returns:
        A string matching ``^\\+[1-9]\\d{7,14}$``, or None if the number is rejected.
    """
    if not raw or not raw.strip():
        return None
    # Vanity numbers like 1-800-FLOWERS are not dialable digits as stored.
    if any(ch.isalpha() for ch in raw):
        logger.debug(f"Rejected phone number with letters: {raw!r}")
        return None

    candidate = None
    if region and not raw.strip().startswith("+"):
        try:
            parsed = phonenumbers.parse(raw, region.upper())
            candidate = phonenumbers.format_number(parsed, PhoneNumberFormat.E164)
        except NumberParseException:
            candidate = None

    if candidate is None:
        candidate = _clean(raw)

    if not is_canonical(candidate):
        logger.debug(f"Rejected phone number: {raw!r}")
        return None
    return candidate


def format_phone(canonical: str) -> str:
    """Human-readable international format, e.g. ``+1 555-123-4567``."""
    try:
        parsed = phonenumbers.parse(canonical, None)
    except NumberParseException:
        return canonical
    return phonenumbers.format_number(parsed, PhoneNumberFormat.INTERNATIONAL)


def make_e164(raw: str, region: str | None = None) -> str:
    """Best-effort E.164 conversion of free-text input.

    Unlike :func:`normalize_phone` this never rejects; callers check the
    result length themselves. Unparseable input falls back to its digits
    with a leading '+'.
    """
    try:
        parsed = phonenumbers.parse(raw, region.upper() if region else None)
        return phonenumbers.format_number(parsed, PhoneNumberFormat.E164)
    except NumberParseException:
        digits = re.sub(r"\D", "", raw)
        return f"+{digits}" if digits else ""
