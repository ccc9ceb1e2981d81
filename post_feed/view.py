from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Iterable, Sequence

from .post import Corpus, Post

ALL_TAGS = "all"


class SortOrder(str, Enum):
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"


@dataclass(frozen=True)
class ViewState:
    sort_order: SortOrder = SortOrder.DATE_DESC
    active_tag: str = ALL_TAGS


def compare_post_dates(a: Post, b: Post, order: SortOrder) -> int:
    """
    Tri-state date comparator.

    An invalid date compares equal to everything, so it never forces a move.
    Only the direction flips between orders; equal dates always return 0.
    """
    left = a.date.value
    right = b.date.value
    if left is None or right is None:
        return 0

    if left < right:
        result = -1
    elif left > right:
        result = 1
    else:
        return 0

    return -result if order == SortOrder.DATE_DESC else result


def filter_posts(posts: Iterable[Post], active_tag: str) -> Corpus:
    if active_tag == ALL_TAGS:
        return tuple(posts)
    return tuple(post for post in posts if active_tag in post.tags)


def sort_posts(posts: Sequence[Post], order: SortOrder) -> Corpus:
    """
    Stable date sort that pins invalid-dated posts to their entry slots.

    Valid-dated posts are sorted among the remaining slots; ties keep their
    entry order in both directions.
    """
    slots = [i for i, post in enumerate(posts) if post.date.is_valid]
    ordered = sorted(
        (posts[i] for i in slots),
        key=cmp_to_key(lambda a, b: compare_post_dates(a, b, order)),
    )

    out = list(posts)
    for slot, post in zip(slots, ordered):
        out[slot] = post
    return tuple(out)


def compute_display_list(corpus: Sequence[Post], state: ViewState) -> Corpus:
    """Return sort(filter(corpus, active_tag), sort_order). Never raises."""
    return sort_posts(filter_posts(corpus, state.active_tag), SortOrder(state.sort_order))
