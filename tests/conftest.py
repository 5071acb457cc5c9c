"""Shared fixtures for the SauceNAO client tests."""

from __future__ import annotations

import json
from email.message import Message
from email.parser import BytesParser
from email.policy import default
from pathlib import Path
from typing import Any

import httpx
import pytest

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def response_bytes() -> bytes:
    return (TESTDATA / "response.json").read_bytes()


@pytest.fixture
def response_payload(response_bytes: bytes) -> dict[str, Any]:
    return json.loads(response_bytes)


@pytest.fixture
def danbooru_payload(response_payload: dict[str, Any]) -> dict[str, Any]:
    return response_payload["results"][0]["data"]


def _multipart_parts(request: httpx.Request) -> list[Message]:
    content_type = request.headers["Content-Type"].encode("ascii")
    raw = b"Content-Type: " + content_type + b"\r\n\r\n" + request.read()
    message = BytesParser(policy=default).parsebytes(raw)
    assert message.get_content_type() == "multipart/form-data"
    return list(message.iter_parts())


@pytest.fixture
def parse_multipart():
    """Parse a multipart request body back into its parts."""

    return _multipart_parts
