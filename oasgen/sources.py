"""Reading discovery documents from a live server or from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

_LOGGER = get_logger("sources")


def load_discovery(source: str, *, timeout: float = 30.0) -> Any:
    """Return the decoded discovery document at ``source``.

    ``source`` is either an http(s) URL of the server's discovery endpoint or
    a path to a JSON file.
    """
    if source.startswith(("http://", "https://")):
        return fetch_discovery(source, timeout=timeout)
    return read_discovery_file(Path(source))


def fetch_discovery(url: str, *, timeout: float = 30.0) -> Any:
    _LOGGER.debug("Fetching discovery document from %s", url)
    request = Request(url, headers={"Accept": "application/json"}, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
        message = detail.strip() or exc.reason
        raise RuntimeError(
            f"Discovery request to {url} failed with status {exc.code}: {message}"
        ) from exc
    except URLError as exc:
        raise RuntimeError(f"Discovery request to {url} failed: {exc.reason}") from exc
    return _decode(raw.decode("utf-8"), url)


def read_discovery_file(path: Path) -> Any:
    path = path.expanduser()
    _LOGGER.debug("Reading discovery document from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Discovery document not found: {path}") from exc
    return _decode(text, str(path))


def _decode(text: str, origin: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Discovery document from {origin} is not valid JSON: {exc}") from exc


__all__ = ["fetch_discovery", "load_discovery", "read_discovery_file"]
