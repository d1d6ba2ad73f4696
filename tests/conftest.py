"""Shared fixtures and HTTP test doubles."""

import threading
from pathlib import Path

import pytest

from fieldagent.config import ClientConfig


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, text: str = "", json_data=None):
        self.status_code = status_code
        self.text = text
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class RecordingPut:
    """Replacement for requests.put that records calls and answers per URL."""

    def __init__(self, statuses: dict[str, int] | None = None, errors: dict[str, Exception] | None = None):
        self.statuses = statuses or {}
        self.errors = errors or {}
        self.calls: list[dict] = []
        self._lock = threading.Lock()

    def __call__(self, url, data=None, headers=None, timeout=None):
        with self._lock:
            self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if url in self.errors:
            raise self.errors[url]
        return FakeResponse(self.statuses.get(url, 200), text="storage says no")


@pytest.fixture
def recording_put(monkeypatch):
    put = RecordingPut()
    monkeypatch.setattr("fieldagent.upload.uploader.requests.put", put)
    return put


@pytest.fixture
def client_config():
    return ClientConfig(endpoint="https://api.example.com/", auth_token="secret-token")


@pytest.fixture
def make_file(tmp_path):
    """Create a file under tmp_path and return its path."""

    def _make(name: str, content: bytes = b"data") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make
