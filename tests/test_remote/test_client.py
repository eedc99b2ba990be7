"""Tests for the httpx identity service client."""

import asyncio
import json

import httpx
import pytest

from invite_sync.config import InviteSyncConfig
from invite_sync.exceptions import ConfigError, IdentityServiceError
from invite_sync.remote.client import HttpIdentityService
from invite_sync.remote.models import IdentityKey, RemoteStatus

CONFIG = InviteSyncConfig(base_url="https://api.example.com")
KEY = IdentityKey(public_key="owner-pub", token="tok")


def make_service(handler):
    return HttpIdentityService(CONFIG, transport=httpx.MockTransport(handler))


def test_requires_base_url():
    with pytest.raises(ConfigError, match="URL is required"):
        HttpIdentityService(InviteSyncConfig())


def test_upload_sends_sorted_unique_numbers():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["owner"] = request.headers["X-Owner-Key"]
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(204)

    service = make_service(handler)
    asyncio.run(service.upload_contacts(KEY, "c1", ["+15559876543", "+15551234567", "+15551234567"]))

    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/containers/c1/contacts"
    assert seen["body"] == {"phone_numbers": ["+15551234567", "+15559876543"]}
    assert seen["owner"] == "owner-pub"
    assert seen["auth"] == "Bearer tok"


def test_upload_http_error():
    service = make_service(lambda request: httpx.Response(500))
    with pytest.raises(IdentityServiceError, match="upload failed"):
        asyncio.run(service.upload_contacts(KEY, "c1", ["+15551234567"]))


def test_upload_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    service = make_service(handler)
    with pytest.raises(IdentityServiceError):
        asyncio.run(service.upload_contacts(KEY, "c1", ["+15551234567"]))


def test_fetch_parses_statuses():
    payload = {
        "contacts": [
            {"phone_number": "+15551234567", "is_registered": True, "is_invited": False},
            {"phone_number": "+15559876543", "is_invited": True},
        ]
    }
    service = make_service(lambda request: httpx.Response(200, json=payload))
    statuses = asyncio.run(service.fetch_contact_status(KEY, "c1"))
    assert statuses == [
        RemoteStatus("+15551234567", registered=True, invited=False),
        RemoteStatus("+15559876543", registered=False, invited=True),
    ]


def test_fetch_empty():
    service = make_service(lambda request: httpx.Response(200, json={}))
    assert asyncio.run(service.fetch_contact_status(KEY, "c1")) == []


def test_fetch_malformed_json():
    service = make_service(lambda request: httpx.Response(200, content=b"not json"))
    with pytest.raises(IdentityServiceError, match="Malformed"):
        asyncio.run(service.fetch_contact_status(KEY, "c1"))


def test_fetch_missing_phone_number():
    service = make_service(lambda request: httpx.Response(200, json={"contacts": [{"is_registered": True}]}))
    with pytest.raises(IdentityServiceError, match="Malformed"):
        asyncio.run(service.fetch_contact_status(KEY, "c1"))


def test_fetch_http_error():
    service = make_service(lambda request: httpx.Response(403))
    with pytest.raises(IdentityServiceError, match="fetch failed"):
        asyncio.run(service.fetch_contact_status(KEY, "c1"))
