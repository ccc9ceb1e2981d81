from __future__ import annotations

from typing import Iterable, Literal

from .post import Post

TagOrder = Literal["first_seen", "lexical"]


def build_tag_set(corpus: Iterable[Post], *, order: TagOrder = "first_seen") -> tuple[str, ...]:
    """
    Union of every post's tags, each tag once.

    `first_seen` keeps the order tags first appear in the corpus; `lexical`
    sorts them.
    """
    if order not in ("first_seen", "lexical"):
        raise ValueError(f"unknown tag order: {order!r}")

    out: list[str] = []
    seen: set[str] = set()
    for post in corpus:
        for tag in post.tags:
            if tag in seen:
                continue
            seen.add(tag)
            out.append(tag)

    if order == "lexical":
        out.sort()
    return tuple(out)
