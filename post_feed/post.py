from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PostDate:
    """
    A post date as given by the source, plus its parsed value.

    `value` is None when the raw text could not be parsed; such dates are kept
    as an invalid-date sentinel rather than dropping the post.
    """

    raw: str = ""
    value: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class PostImage:
    src: str = ""
    alt: str = ""


@dataclass(frozen=True)
class Post:
    """A normalized, format-agnostic post record."""

    title: str = ""
    date: PostDate = field(default_factory=PostDate)
    content: str = ""
    image: PostImage | None = None
    tags: tuple[str, ...] = ()


Corpus = tuple[Post, ...]


def post_to_dict(post: Post) -> dict[str, object]:
    return {
        "title": post.title,
        "date": post.date.value.isoformat() if post.date.value is not None else None,
        "date_raw": post.date.raw,
        "content": post.content,
        "image": (
            {"src": post.image.src, "alt": post.image.alt}
            if post.image is not None
            else None
        ),
        "tags": list(post.tags),
    }
