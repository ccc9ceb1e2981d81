from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

import httpx

from .config_schema import FetchConfig
from .errors import FetchError


class Fetcher(Protocol):
    def fetch(self, location: str) -> str: ...


def is_http_location(location: str) -> bool:
    return urlsplit((location or "").strip()).scheme in ("http", "https")


@dataclass(frozen=True)
class FileFetcher:
    """Reads a local data file, resolving relative paths against base_dir."""

    base_dir: Path = Path(".")

    def fetch(self, location: str) -> str:
        path = Path(location)
        if not path.is_absolute():
            path = self.base_dir / path

        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise FetchError(f"File not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Failed to read {path}: {e}") from e


@dataclass(frozen=True)
class HttpFetcher:
    timeout_seconds: float = 10.0
    user_agent: str = "post_feed/0.1"
    transport: httpx.BaseTransport | None = None

    def fetch(self, location: str) -> str:
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = client.get(location, headers={"User-Agent": self.user_agent})
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {location} failed: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"HTTP error! Status: {response.status_code}",
                status_code=response.status_code,
            )
        return response.text


def fetcher_for(
    data_file: str,
    *,
    fetch_cfg: FetchConfig | None = None,
    base_dir: str | Path | None = None,
) -> Fetcher:
    if is_http_location(data_file):
        cfg = fetch_cfg or FetchConfig()
        return HttpFetcher(timeout_seconds=cfg.timeout_seconds, user_agent=cfg.user_agent)
    return FileFetcher(base_dir=Path(base_dir) if base_dir is not None else Path("."))
