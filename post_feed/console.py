from __future__ import annotations

import json
import sys
from typing import Literal, Sequence, TextIO

from .board import LoadStatus
from .post import Post, post_to_dict

NO_POSTS_MESSAGE = "No posts found with this tag."


def format_post_date(post: Post) -> str:
    if post.date.value is None:
        return "Invalid Date"
    return post.date.value.date().isoformat()


def format_post(post: Post) -> str:
    lines = [post.title, format_post_date(post)]
    if post.content:
        lines.append(post.content)
    if post.image is not None and post.image.src:
        alt = f" ({post.image.alt})" if post.image.alt else ""
        lines.append(f"image: {post.image.src}{alt}")
    if post.tags:
        lines.append("tags: " + ", ".join(post.tags))
    return "\n".join(lines)


class ConsoleRenderer:
    """
    Writes board output to text streams for the CLI.

    `mode` selects which view the renderer prints: the post list or the tag
    list. Error statuses always go to the error stream, and the empty views
    that follow a failed load are not printed.
    """

    def __init__(
        self,
        *,
        mode: Literal["posts", "tags"] = "posts",
        as_json: bool = False,
        out: TextIO | None = None,
        err: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        self._mode = mode
        self._as_json = bool(as_json)
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._verbose = bool(verbose)
        self._failed = False

    def show_status(self, status: LoadStatus) -> None:
        self._failed = status.state == "error"
        if status.state == "error":
            print(f"Error: {status.message}", file=self._err)
        elif status.state == "loading" and self._verbose:
            print(status.message, file=self._err)

    def show_tags(self, tags: Sequence[str]) -> None:
        if self._mode != "tags" or self._failed:
            return
        if self._as_json:
            print(json.dumps(list(tags), ensure_ascii=False), file=self._out)
            return
        for tag in tags:
            print(tag, file=self._out)

    def show_posts(self, posts: Sequence[Post]) -> None:
        if self._mode != "posts" or self._failed:
            return
        if self._as_json:
            payload = [post_to_dict(post) for post in posts]
            print(json.dumps(payload, indent=2, ensure_ascii=False), file=self._out)
            return
        if not posts:
            print(NO_POSTS_MESSAGE, file=self._out)
            return
        print("\n\n".join(format_post(post) for post in posts), file=self._out)
