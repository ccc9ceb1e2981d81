from __future__ import annotations

from typing import Any, Mapping

from .dates import parse_post_date
from .post import Post, PostImage


def _coerce_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ""


def _coerce_tags(value: Any) -> tuple[str, ...]:
    # Tags are kept exactly as given, empty strings and duplicates included.
    if isinstance(value, str):
        return (value,)

    if not isinstance(value, (list, tuple)):
        return ()

    return tuple(item for item in value if isinstance(item, str))


def _coerce_image(value: Any) -> PostImage | None:
    if not isinstance(value, Mapping):
        return None
    return PostImage(
        src=_coerce_str(value.get("src")),
        alt=_coerce_str(value.get("alt")),
    )


def normalize_post(fields: Mapping[str, Any]) -> Post:
    """
    Apply the default-value policy to one raw post field map.

    Both the JSON and XML parsers funnel through here:
    - missing or non-string title/content -> ""
    - date -> PostDate, invalid-but-present when unparseable
    - img (or image) mapping -> PostImage with "" defaults, else no image
    - tags -> tuple of the string items as given, non-strings dropped
    """
    image_raw = fields.get("img")
    if image_raw is None:
        image_raw = fields.get("image")

    return Post(
        title=_coerce_str(fields.get("title")),
        date=parse_post_date(fields.get("date")),
        content=_coerce_text(fields.get("content")),
        image=_coerce_image(image_raw),
        tags=_coerce_tags(fields.get("tags")),
    )
