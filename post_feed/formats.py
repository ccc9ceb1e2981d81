from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Callable, Iterator
from urllib.parse import urlsplit

from .errors import MalformedInputError, UnsupportedFormatError
from .normalize import normalize_post
from .post import Corpus


class SourceFormat(str, Enum):
    JSON = "json"
    XML = "xml"


_EXTENSIONS = {
    ".json": SourceFormat.JSON,
    ".xml": SourceFormat.XML,
}


def _location_path(data_file: str) -> str:
    parts = urlsplit(data_file)
    if parts.scheme in ("http", "https"):
        return parts.path
    return data_file


def detect_format(data_file: str) -> SourceFormat:
    """
    Pick the source format from the data file extension.

    The extension is the only discriminator; the content is never sniffed.
    """
    suffix = PurePosixPath(_location_path((data_file or "").strip())).suffix.lower()
    fmt = _EXTENSIONS.get(suffix)
    if fmt is None:
        raise UnsupportedFormatError(
            f"Unsupported file type {suffix or '<none>'!r} for {data_file!r}. "
            "Please use .json or .xml."
        )
    return fmt


def parse_json_posts(text: str) -> Corpus:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedInputError("Invalid JSON: document is nested too deeply") from e

    if isinstance(data, dict):
        items: list[Any] = [data]
    elif isinstance(data, list):
        items = data
    else:
        raise MalformedInputError(
            f"JSON must be an array of posts or a single post object, got {type(data).__name__}"
        )

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise MalformedInputError(
                f"JSON post at index {index} must be an object, got {type(item).__name__}"
            )

    return tuple(normalize_post(item) for item in items)


def _local_name(tag: Any) -> str | None:
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _iter_named(element: ET.Element, name: str) -> Iterator[ET.Element]:
    # Matches on the local name so namespaced documents select the same elements.
    for el in element.iter():
        if _local_name(el.tag) == name:
            yield el


def _child_named(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text_of(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return "".join(element.itertext())


def _xml_tags(post_el: ET.Element) -> list[str]:
    out: list[str] = []
    seen: set[int] = set()
    for tags_el in _iter_named(post_el, "tags"):
        for tag_el in _iter_named(tags_el, "tag"):
            if id(tag_el) in seen:
                continue
            seen.add(id(tag_el))
            out.append(_text_of(tag_el) or "")
    return out


def _xml_image(post_el: ET.Element) -> dict[str, str | None] | None:
    for img_el in _iter_named(post_el, "img"):
        image_el = next(_iter_named(img_el, "image"), None)
        if image_el is None:
            continue
        return {
            "src": _text_of(next(_iter_named(image_el, "src"), None)),
            "alt": _text_of(next(_iter_named(image_el, "alt"), None)),
        }
    return None


def parse_xml_posts(text: str) -> Corpus:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedInputError(f"Invalid XML: {e}") from e
    except RecursionError as e:
        raise MalformedInputError("Invalid XML: document is nested too deeply") from e

    posts = []
    for post_el in _iter_named(root, "Post"):
        fields = {
            "title": _text_of(_child_named(post_el, "Title")),
            "date": _text_of(_child_named(post_el, "Date")),
            "content": _text_of(_child_named(post_el, "Content")),
            "tags": _xml_tags(post_el),
            "img": _xml_image(post_el),
        }
        posts.append(normalize_post(fields))
    return tuple(posts)


PARSERS: dict[SourceFormat, Callable[[str], Corpus]] = {
    SourceFormat.JSON: parse_json_posts,
    SourceFormat.XML: parse_xml_posts,
}


def parse_posts(text: str, fmt: SourceFormat) -> Corpus:
    return PARSERS[fmt](text)
