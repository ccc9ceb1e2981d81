from __future__ import annotations

from .board import LoadStatus, PostBoard, Renderer
from .config import config_sha256, load_config
from .config_schema import AppConfig
from .errors import (
    ConfigError,
    FetchError,
    LoadError,
    LoadInProgressError,
    MalformedInputError,
    UnsupportedFormatError,
)
from .formats import SourceFormat, detect_format, parse_posts
from .post import Corpus, Post, PostDate, PostImage
from .tag_index import build_tag_set
from .view import ALL_TAGS, SortOrder, ViewState, compute_display_list

__all__ = [
    "ALL_TAGS",
    "AppConfig",
    "ConfigError",
    "Corpus",
    "FetchError",
    "LoadError",
    "LoadInProgressError",
    "LoadStatus",
    "MalformedInputError",
    "Post",
    "PostBoard",
    "PostDate",
    "PostImage",
    "Renderer",
    "SortOrder",
    "SourceFormat",
    "UnsupportedFormatError",
    "ViewState",
    "build_tag_set",
    "compute_display_list",
    "config_sha256",
    "detect_format",
    "load_config",
    "parse_posts",
]
