from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from .post import PostDate

_FALLBACK_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m",
    "%Y",
)


def _as_utc(value: datetime) -> datetime:
    # Naive values carry no zone in the source; treat them as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_iso(text: str) -> datetime | None:
    s = text
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def _parse_rfc2822(text: str) -> datetime | None:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def _parse_fallback(text: str) -> datetime | None:
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_date_text(text: str) -> datetime | None:
    s = (text or "").strip()
    if not s:
        return None

    parsed = _parse_iso(s) or _parse_rfc2822(s) or _parse_fallback(s)
    if parsed is None:
        return None
    try:
        return _as_utc(parsed)
    except OverflowError:
        # An offset can push a year-1 or year-9999 value past datetime bounds.
        return None


def parse_post_date(value: Any) -> PostDate:
    """
    Convert a raw source date into a PostDate.

    Strings are tried as ISO 8601, then RFC 2822, then a few human layouts.
    Numbers are epoch milliseconds. Anything unparseable is returned as an
    invalid PostDate that still carries its raw text.
    """
    if isinstance(value, str):
        raw = value.strip()
        return PostDate(raw=raw, value=parse_date_text(raw))

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        raw = str(value)
        try:
            parsed = datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return PostDate(raw=raw, value=None)
        return PostDate(raw=raw, value=parsed)

    if value is None:
        return PostDate()

    return PostDate(raw=str(value), value=None)
