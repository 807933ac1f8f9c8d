from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional

from report_import.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    content: bytes
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _describe(url: str) -> str:
    u = urllib.parse.urlparse(url)
    return f"host={(u.hostname or '').lower()} path={u.path or '/'}"


def _assert_url_allowed(url: str) -> None:
    u = urllib.parse.urlparse(url)
    if (u.scheme or "").lower() not in {"http", "https"}:
        raise FetchError(f"Blocked request: only http(s):// URLs are supported ({url}).")
    if not u.hostname:
        raise FetchError(f"Blocked request: missing hostname ({url}).")


def http_get(url: str, *, timeout_s: float = 30.0) -> HttpResponse:
    """
    Single-shot HTTP GET.

    Any non-success status or connection failure raises FetchError; there is no
    retry, the daily import simply fails and is re-run.
    """
    _assert_url_allowed(url)
    logger.debug("GET %s", url)
    req = urllib.request.Request(url, method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            status = int(getattr(resp, "status", 200))
            content_type = resp.headers.get("Content-Type")
            content = resp.read()
    except urllib.error.HTTPError as e:
        status = int(getattr(e, "code", 0) or 0)
        raise FetchError(f"Failed to fetch {url} ({status}) {_describe(url)}") from e
    except urllib.error.URLError as e:
        reason = getattr(e, "reason", None)
        raise FetchError(f"Failed to fetch {url}: {reason if reason is not None else e}") from e
    except OSError as e:
        raise FetchError(f"Failed to fetch {url}: {type(e).__name__}: {e}") from e

    out = HttpResponse(status_code=status, content=content, content_type=content_type)
    if not out.ok:
        raise FetchError(f"Failed to fetch {url} ({status}) {_describe(url)}")
    logger.debug("GET %s -> %s (%d bytes)", url, status, len(content))
    return out


def fetch_text(url: str, *, timeout_s: float = 30.0) -> str:
    resp = http_get(url, timeout_s=timeout_s)
    return resp.content.decode("utf-8", errors="replace")


def fetch_json(url: str, *, timeout_s: float = 30.0) -> Any:
    text = fetch_text(url, timeout_s=timeout_s)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}") from e
