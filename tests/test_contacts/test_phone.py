"""Tests for phone normalization."""

import pytest

from invite_sync.contacts.phone import format_phone, is_canonical, make_e164, normalize_phone


def test_normalize_strips_formatting():
    assert normalize_phone("+1 (555) 123-4567") == "+15551234567"


def test_normalize_adds_plus():
    assert normalize_phone("15551234567") == "+15551234567"


@pytest.mark.parametrize("raw", ["+15551234567", "+447911123456", "4915112345678"])
def test_normalize_is_idempotent(raw):
    once = normalize_phone(raw)
    assert once is not None
    assert normalize_phone(once) == once


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        None,
        "123",            # too short
        "+0123456789",    # leading zero after '+'
        "+1234567890123456",  # too long
        "555.123.4567",   # dots are not stripped
        "call me",
    ],
)
def test_normalize_rejects(raw):
    assert normalize_phone(raw) is None


def test_normalize_with_region_hint():
    assert normalize_phone("(555) 123-4567", region="US") == "+15551234567"


def test_region_hint_does_not_accept_vanity_letters():
    assert normalize_phone("1-800-FLOWERS", region="US") is None
    assert normalize_phone("1-800-FLOWERS") is None


def test_region_hint_ignored_for_international_numbers():
    assert normalize_phone("+44 7911 123456", region="US") == "+447911123456"


def test_is_canonical():
    assert is_canonical("+15551234567")
    assert not is_canonical("15551234567")


def test_format_phone_international():
    assert format_phone("+15551234567") == "+1 555-123-4567"


def test_format_phone_falls_back_to_input():
    assert format_phone("not a number") == "not a number"


def test_make_e164_uses_region():
    assert make_e164("555 123 4567", "US") == "+15551234567"


def test_make_e164_short_input_stays_short():
    assert len(make_e164("123", "US")) < 8


def test_make_e164_unparseable_keeps_digits():
    assert make_e164("x") == ""
