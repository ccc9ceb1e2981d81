from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .board import PostBoard
from .config import data_base_dir, load_config, with_overrides
from .config_schema import AppConfig
from .console import ConsoleRenderer
from .errors import ConfigError
from .run_log import RunLogger
from .view import SortOrder


def _add_source_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument(
        "--config",
        help="Path to YAML config file.",
    )
    cmd.add_argument(
        "--data-file",
        help="Override the configured data file (.json or .xml path or URL).",
    )
    cmd.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of text.",
    )
    cmd.add_argument(
        "--log",
        help="Write a JSONL event log to this path.",
    )
    cmd.add_argument(
        "--verbose",
        action="store_true",
        help="Print loading status to stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="post_feed")

    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser(
        "show",
        help="Load posts and print the filtered, sorted list.",
    )
    _add_source_args(show)
    show.add_argument(
        "--tag",
        help="Only show posts carrying this tag ('all' shows every post).",
    )
    show.add_argument(
        "--sort",
        choices=[order.value for order in SortOrder],
        help="Sort order by date.",
    )
    show.set_defaults(_mode="posts")

    tags = subparsers.add_parser(
        "tags",
        help="Load posts and print every distinct tag.",
    )
    _add_source_args(tags)
    tags.set_defaults(_mode="tags")

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _resolve_config(args: argparse.Namespace) -> tuple[AppConfig, Path]:
    cfg = load_config(args.config) if args.config else AppConfig()
    # A data file given on the command line is relative to the working directory.
    base_dir = data_base_dir(None if args.data_file else args.config)
    cfg = with_overrides(
        cfg,
        data_file=args.data_file,
        active_tag=getattr(args, "tag", None),
        sort_order=getattr(args, "sort", None),
    )
    return cfg, base_dir


def _run(args: argparse.Namespace, log: RunLogger | None) -> int:
    cfg, base_dir = _resolve_config(args)
    renderer = ConsoleRenderer(
        mode=args._mode,
        as_json=bool(args.json),
        verbose=bool(args.verbose),
    )
    board = PostBoard(cfg, renderer=renderer, logger=log, base_dir=base_dir)
    status = board.load()
    return 3 if status.state == "error" else 0


def _cmd(args: argparse.Namespace) -> int:
    if not args.log:
        return _run(args, None)

    with RunLogger.open(args.log, overwrite=True) as log:
        log.info("command_started", command=args.command, config_path=args.config)
        try:
            return _run(args, log)
        except Exception as e:
            log.exception("command_failed", exc=e)
            raise


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        return int(_cmd(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
