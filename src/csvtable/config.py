"""
Configuration for csvtable.

Delimiters, encoding and parse mode, each resolved in this order (later wins):
1. dataclass defaults below
2. ~/.config/csvtable/config.toml, when present
3. CSVTABLE_* environment variables
4. arguments given to CsvParser or on the command line
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class DelimiterConfig:
    """Field and row separators.

    The row default is a single newline. Older documentation of this format
    mentions CRLF; pass row="\\r\\n" explicitly for such files.
    """
    field: str = ";"
    row: str = "\n"


@dataclass
class IOConfig:
    """Text encoding and the file read_row() opens."""
    encoding: str = "utf-8"
    default_file: str = "default.csv"  # used by CsvParser.read_row


@dataclass
class ParseConfig:
    """Field-splitting behaviour."""
    legacy_offsets: bool = False  # reproduce the one-past-delimiter-start scan


@dataclass
class LoggingConfig:
    debug: bool = False


@dataclass
class Config:
    """Everything a CsvParser or the CLI reads when no argument is given."""
    delimiters: DelimiterConfig = field(default_factory=DelimiterConfig)
    io: IOConfig = field(default_factory=IOConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def unescape_delimiter(value: str) -> str:
    r"""Turn backslash escapes typed on a shell ('\t', '\r\n') into characters."""
    if "\\" not in value:
        return value
    # latin-1 round trip keeps non-ASCII characters intact through unicode_escape
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")


def _to_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _toml_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _to_bool(value)
    raise TypeError(f"expected a boolean, got {value!r}")


def get_config_path() -> Path:
    """Location of config.toml, under $XDG_CONFIG_HOME when that is set."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "csvtable" / "config.toml"
    return Path.home() / ".config" / "csvtable" / "config.toml"


def load_config() -> Config:
    """
    Build a Config from defaults, config.toml and CSVTABLE_* variables.

    A config file that can't be read or holds bad values is skipped with a
    warning; environment overrides still apply on top of the defaults.
    """
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Copy known keys of the [delimiters], [io], [parse] and [logging] tables."""
    if "delimiters" in data:
        d = data["delimiters"]
        if "field" in d:
            config.delimiters.field = str(d["field"])
        if "row" in d:
            config.delimiters.row = str(d["row"])

    if "io" in data:
        io = data["io"]
        if "encoding" in io:
            config.io.encoding = str(io["encoding"])
        if "default_file" in io:
            config.io.default_file = str(io["default_file"])

    if "parse" in data:
        p = data["parse"]
        if "legacy_offsets" in p:
            config.parse.legacy_offsets = _toml_bool(p["legacy_offsets"])

    if "logging" in data:
        lg = data["logging"]
        if "debug" in lg:
            config.logging.debug = _toml_bool(lg["debug"])

    return config


def _apply_env(config: Config) -> Config:
    """Override settings from CSVTABLE_* variables, skipping values that don't convert."""
    env_map: dict[str, tuple[str, str, Callable[[str], object]]] = {
        "CSVTABLE_FIELD_DELIMITER": ("delimiters", "field", unescape_delimiter),
        "CSVTABLE_ROW_DELIMITER": ("delimiters", "row", unescape_delimiter),
        "CSVTABLE_ENCODING": ("io", "encoding", str),
        "CSVTABLE_DEFAULT_FILE": ("io", "default_file", str),
        "CSVTABLE_LEGACY_OFFSETS": ("parse", "legacy_offsets", _to_bool),
        "CSVTABLE_DEBUG": ("logging", "debug", _to_bool),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Cached by get_config(), cleared by reset_config()
_config: Config | None = None


def get_config() -> Config:
    """Return the cached Config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
