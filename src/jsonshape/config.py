from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from jsonshape.render import RenderOptions, RenderOrder

DEFAULT_CONFIG_NAME = "jsonshape.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

logger = logging.getLogger(__name__)


def config_path_for(root: Path | None = None, config_path: Path | None = None) -> Path:
    if config_path is not None:
        return config_path
    return (root or Path.cwd()) / DEFAULT_CONFIG_NAME


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    """Read the config table; a missing or unreadable file is an empty table."""
    path = config_path_for(root, config_path)
    if not path.is_file():
        logger.debug("no config at %s", path)
        return {}
    logger.debug("loading config from %s", path)
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring config %s: %s", path, exc)
        return {}


def render_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("render", {})
    return section if isinstance(section, dict) else {}


def _as_int(value: TomlValue, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _as_order(value: TomlValue) -> RenderOrder:
    if value is None:
        return RenderOrder.INNERMOST
    if isinstance(value, str):
        normalized = value.strip().lower()
        for order in RenderOrder:
            if order.value == normalized:
                return order
    logger.warning(
        "ignoring render order %r; expected one of %s",
        value,
        ", ".join(order.value for order in RenderOrder),
    )
    return RenderOrder.INNERMOST


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def render_options(section: TomlTable | None) -> RenderOptions:
    if not isinstance(section, dict):
        return RenderOptions()
    default = RenderOptions()
    return RenderOptions(
        order=_as_order(section.get("order")),
        max_value_chars=max(0, _as_int(section.get("max_value_chars"), default.max_value_chars)),
    )
