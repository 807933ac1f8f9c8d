from __future__ import annotations

import io
import urllib.error

import pytest

from report_import import net
from report_import.exceptions import FetchError


class _FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self.status = status
        self.headers = {"Content-Type": "text/plain; charset=utf-8"}
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_http_get_rejects_non_http_scheme():
    with pytest.raises(FetchError):
        net.http_get("file:///etc/passwd")
    with pytest.raises(FetchError):
        net.http_get("https:///no-host")


def test_fetch_text_and_json(monkeypatch: pytest.MonkeyPatch):
    bodies = {
        "https://r.test/report.txt": "【每日收益快照】".encode("utf-8"),
        "https://r.test/history.json": b'{"entries": []}',
    }
    monkeypatch.setattr(net.urllib.request, "urlopen", lambda req, timeout: _FakeResponse(bodies[req.full_url]))
    assert net.fetch_text("https://r.test/report.txt") == "【每日收益快照】"
    assert net.fetch_json("https://r.test/history.json") == {"entries": []}


def test_http_error_status_is_fatal(monkeypatch: pytest.MonkeyPatch):
    def raise_404(req, timeout):
        raise urllib.error.HTTPError(req.full_url, 404, "Not Found", {}, io.BytesIO(b""))

    monkeypatch.setattr(net.urllib.request, "urlopen", raise_404)
    with pytest.raises(FetchError) as e:
        net.http_get("https://r.test/report_20250131.txt")
    assert "(404)" in str(e.value)


def test_non_success_status_without_exception_is_fatal(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(net.urllib.request, "urlopen", lambda req, timeout: _FakeResponse(b"", status=304))
    with pytest.raises(FetchError):
        net.http_get("https://r.test/x")


def test_invalid_json_raises_fetch_error(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(net.urllib.request, "urlopen", lambda req, timeout: _FakeResponse(b"<html>"))
    with pytest.raises(FetchError):
        net.fetch_json("https://r.test/history.json")
