from __future__ import annotations

import unittest

from post_feed.post import Post
from post_feed.tag_index import build_tag_set


class TestBuildTagSet(unittest.TestCase):
    def test_first_seen_order_without_duplicates(self) -> None:
        corpus = (
            Post(title="a", tags=("news", "games", "news")),
            Post(title="b", tags=()),
            Post(title="c", tags=("art", "games")),
        )
        self.assertEqual(build_tag_set(corpus), ("news", "games", "art"))

    def test_lexical_order(self) -> None:
        corpus = (Post(tags=("b", "a")), Post(tags=("C", "a")))
        self.assertEqual(build_tag_set(corpus, order="lexical"), ("C", "a", "b"))

    def test_empty_corpus(self) -> None:
        self.assertEqual(build_tag_set(()), ())

    def test_tags_are_case_sensitive(self) -> None:
        corpus = (Post(tags=("Tag",)), Post(tags=("tag",)))
        self.assertEqual(build_tag_set(corpus), ("Tag", "tag"))

    def test_unknown_order(self) -> None:
        with self.assertRaises(ValueError):
            build_tag_set((), order="random")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
