"""Shared pytest fixtures for fluxtool tests."""

from __future__ import annotations

import base64
import os
import tempfile
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# Minimal JPEG markers; content is never parsed as an image.
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def jpeg_base64() -> str:
    return base64.b64encode(JPEG_BYTES).decode("ascii")


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point `tempfile.gettempdir()` at an isolated directory."""
    root = tmp_path / "tmproot"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def umask_022():
    """Run the test under umask 022, restoring the previous mask afterwards."""
    previous = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(previous)


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> tuple[str, str]:
    monkeypatch.setenv("CLOUDFLARE_ACCOUNT_ID", "acct-123")
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "token-abc")
    return "acct-123", "token-abc"


def _make_http_response(
    status_code: int = 200,
    json_body: Any = None,
    text: str | None = None,
    reason: str = "OK",
) -> MagicMock:
    """Build a stand-in for `requests.Response`.

    When `json_body` is None and `text` is given, `.json()` raises ValueError.
    """
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.ok = status_code < 400
    response.headers = {"content-type": "application/json"}
    if json_body is None and text is not None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text
    else:
        response.json.return_value = json_body
        response.text = ""
    return response


@pytest.fixture
def make_http_response():
    return _make_http_response

