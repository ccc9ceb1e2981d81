from __future__ import annotations

import hashlib
import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config_schema import AppConfig
from .errors import ConfigError
from .view import SortOrder


def load_config(path: str | Path) -> AppConfig:
    """
    Read a post_feed YAML file into an AppConfig.

    An empty file gives the defaults (posts.xml, newest first, every tag).
    Problems are reported as ConfigError, one line per bad setting.
    """
    p = Path(path)

    if not p.is_file():
        raise ConfigError(f"Config file not found: {p}")

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read post_feed config {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"post_feed config {p} is not valid YAML: {e}") from e

    if data is None:
        return AppConfig()

    if not isinstance(data, dict):
        raise ConfigError(
            f"post_feed config {p} must be a mapping of settings, got {type(data).__name__}"
        )

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_describe_invalid_settings(e, p)) from e


def data_base_dir(config_path: str | Path | None) -> Path:
    """Directory that a relative data_file is read from."""
    if config_path is None:
        return Path.cwd()
    return Path(config_path).resolve().parent


def with_overrides(
    config: AppConfig,
    *,
    data_file: str | None = None,
    active_tag: str | None = None,
    sort_order: SortOrder | str | None = None,
) -> AppConfig:
    """Return a copy of config with the given command-line choices applied."""
    update: dict[str, object] = {}
    if data_file and data_file.strip():
        update["data_file"] = data_file.strip()

    view_update: dict[str, object] = {}
    if active_tag:
        view_update["active_tag"] = active_tag
    if sort_order:
        view_update["sort_order"] = SortOrder(sort_order)
    if view_update:
        update["view"] = config.view.model_copy(update=view_update)

    if not update:
        return config
    return config.model_copy(update=update)


def config_sha256(config: AppConfig) -> str:
    """Stable hash of the settings, written with each load_completed event."""
    payload = json.dumps(
        config.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def _describe_invalid_settings(err: ValidationError, path: Path) -> str:
    lines = [f"Invalid post_feed settings in {path}:"]
    for item in err.errors():
        where = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        lines.append(f"- {where}: {item.get('msg', 'invalid value')}")
    return "\n".join(lines)
