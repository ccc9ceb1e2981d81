from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from threading import Lock
from typing import Literal, Protocol, Sequence

from .config import config_sha256
from .config_schema import AppConfig
from .errors import FetchError, LoadError, LoadInProgressError
from .fetch import Fetcher, fetcher_for
from .formats import detect_format, parse_posts
from .post import Corpus, Post
from .run_log import RunLogger
from .tag_index import build_tag_set
from .view import SortOrder, ViewState, compute_display_list

StatusState = Literal["idle", "loading", "error", "ready"]


@dataclass(frozen=True)
class LoadStatus:
    state: StatusState
    message: str | None = None
    error_type: str | None = None
    status_code: int | None = None

    @classmethod
    def idle(cls) -> "LoadStatus":
        return cls(state="idle")

    @classmethod
    def loading(cls) -> "LoadStatus":
        return cls(state="loading", message="Loading posts...")

    @classmethod
    def ready(cls) -> "LoadStatus":
        return cls(state="ready")

    @classmethod
    def failed(cls, exc: LoadError, *, data_file: str) -> "LoadStatus":
        return cls(
            state="error",
            message=f"Failed to load data from '{data_file}'. {exc}",
            error_type=type(exc).__name__,
            status_code=getattr(exc, "status_code", None),
        )


class Renderer(Protocol):
    def show_status(self, status: LoadStatus) -> None: ...

    def show_tags(self, tags: Sequence[str]) -> None: ...

    def show_posts(self, posts: Sequence[Post]) -> None: ...


class PostBoard:
    """
    Owns the corpus and view state, and pushes derived views to a renderer.

    The corpus and tag set are replaced only as a whole at the end of a
    successful load. Every view change recomputes the display list from
    scratch. A load requested while another is in flight is rejected.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        renderer: Renderer,
        fetcher: Fetcher | None = None,
        logger: RunLogger | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self._config = config
        self._renderer = renderer
        self._fetcher = fetcher or fetcher_for(
            config.data_file,
            fetch_cfg=config.fetch,
            base_dir=base_dir,
        )
        self._log = logger
        self._load_lock = Lock()

        self._corpus: Corpus = ()
        self._tags: tuple[str, ...] = ()
        self._view = ViewState(
            sort_order=config.view.sort_order,
            active_tag=config.view.active_tag,
        )
        self._display: Corpus = ()
        self._status = LoadStatus.idle()

        if self._log is not None:
            self._log.set_source(config.data_file)

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def tags(self) -> tuple[str, ...]:
        return self._tags

    @property
    def view_state(self) -> ViewState:
        return self._view

    @property
    def display_list(self) -> Corpus:
        return self._display

    @property
    def status(self) -> LoadStatus:
        return self._status

    def load(self) -> LoadStatus:
        """
        Fetch, parse and publish the corpus, then push the initial view.

        Load failures are reported through the returned (and rendered) status
        rather than raised; the corpus is left empty in that case.
        """
        if not self._load_lock.acquire(blocking=False):
            raise LoadInProgressError("A load is already in progress")
        try:
            return self._load()
        finally:
            self._load_lock.release()

    reload = load

    def set_sort_order(self, order: SortOrder | str) -> Corpus:
        self._view = replace(self._view, sort_order=SortOrder(order))
        return self._refresh()

    def set_active_tag(self, tag: str) -> Corpus:
        self._view = replace(self._view, active_tag=tag)
        return self._refresh()

    def _load(self) -> LoadStatus:
        data_file = self._config.data_file
        self._set_status(LoadStatus.loading())
        self._info("load_started", data_file=data_file)

        try:
            fmt = detect_format(data_file)
            text = self._fetch(data_file)
            corpus = parse_posts(text, fmt)
            tags = build_tag_set(corpus, order=self._config.tag_order)
        except LoadError as e:
            self._corpus = ()
            self._tags = ()
            self._display = ()
            if self._log is not None:
                self._log.exception("load_failed", exc=e, data_file=data_file)
            self._set_status(LoadStatus.failed(e, data_file=data_file))
            self._renderer.show_tags(self._tags)
            self._renderer.show_posts(self._display)
            return self._status

        self._corpus = corpus
        self._tags = tags
        invalid = [i for i, post in enumerate(corpus) if not post.date.is_valid]
        self._info(
            "load_completed",
            data_file=data_file,
            format=fmt.value,
            posts=len(corpus),
            tags=len(tags),
            invalid_dates=len(invalid),
            config_sha256=config_sha256(self._config),
        )
        if invalid and self._log is not None:
            self._log.warning("invalid_dates", data_file=data_file, post_indexes=invalid[:50])

        self._set_status(LoadStatus.ready())
        self._renderer.show_tags(self._tags)
        self._refresh()
        return self._status

    def _fetch(self, data_file: str) -> str:
        try:
            return self._fetcher.fetch(data_file)
        except LoadError:
            raise
        except Exception as e:
            raise FetchError(f"Fetch failed: {e}") from e

    def _refresh(self) -> Corpus:
        self._display = compute_display_list(self._corpus, self._view)
        self._info(
            "view_recomputed",
            sort_order=self._view.sort_order.value,
            active_tag=self._view.active_tag,
            count=len(self._display),
        )
        self._renderer.show_posts(self._display)
        return self._display

    def _set_status(self, status: LoadStatus) -> None:
        self._status = status
        self._renderer.show_status(status)

    def _info(self, event: str, **data: object) -> None:
        if self._log is not None:
            self._log.info(event, **data)
