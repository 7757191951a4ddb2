"""Configuration for code generation.

``config.ini`` holds the checked-in defaults. Local overrides go to
``config.runtime.ini`` so the main file keeps its comments and
stays reviewable. Environment variables (``WORDTABLE_INDENT``,
``WORDTABLE_QUOTES``, ``WORDTABLE_LOG_LEVEL``) override both; the CLI and the
server load a ``.env`` file into the environment first.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .jsast import QUOTES

logger = logging.getLogger(__name__)

SECTION = "WORDTABLE"
CONFIG_MAIN_PATH = Path(__file__).resolve().parents[1] / "config.ini"
CONFIG_RUNTIME_PATH = Path(__file__).resolve().parents[1] / "config.runtime.ini"

DEFAULT_INDENT = 4
DEFAULT_QUOTES = "single"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    indent: int = DEFAULT_INDENT
    quotes: str = DEFAULT_QUOTES
    log_level: str = DEFAULT_LOG_LEVEL


def load_base_config(path: Optional[Path] = None) -> configparser.ConfigParser:
    """Load only the static configuration."""
    cfg = configparser.ConfigParser()
    cfg.read(path or CONFIG_MAIN_PATH, encoding="utf-8-sig")
    return cfg


def load_runtime_config(path: Optional[Path] = None) -> configparser.ConfigParser:
    """Load only the runtime overrides."""
    cfg = configparser.ConfigParser()
    runtime_path = path or CONFIG_RUNTIME_PATH
    if runtime_path.exists():
        cfg.read(runtime_path, encoding="utf-8-sig")
    return cfg


def load_merged_config(
    main_path: Optional[Path] = None, runtime_path: Optional[Path] = None
) -> configparser.ConfigParser:
    """Combine static and runtime configuration."""
    base = load_base_config(main_path)
    runtime = load_runtime_config(runtime_path)
    for section in runtime.sections():
        if not base.has_section(section):
            base.add_section(section)
        for key, value in runtime.items(section):
            base.set(section, key, value)
    return base


def _indent_option(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid indent %r, using %d", raw, DEFAULT_INDENT)
        return DEFAULT_INDENT
    if value < 0:
        logger.warning("Ignoring negative indent %d, using %d", value, DEFAULT_INDENT)
        return DEFAULT_INDENT
    return value


def _quotes_option(raw: str) -> str:
    value = raw.strip().lower()
    if value not in QUOTES:
        logger.warning("Ignoring unknown quote style %r, using %s", raw, DEFAULT_QUOTES)
        return DEFAULT_QUOTES
    return value


def load_settings(
    cfg: Optional[configparser.ConfigParser] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Return render settings from ``cfg`` with environment overrides applied."""
    if cfg is None:
        cfg = load_merged_config()
    if environ is None:
        environ = os.environ

    indent = environ.get("WORDTABLE_INDENT") or cfg.get(
        SECTION, "indent", fallback=str(DEFAULT_INDENT)
    )
    quotes = environ.get("WORDTABLE_QUOTES") or cfg.get(
        SECTION, "quotes", fallback=DEFAULT_QUOTES
    )
    log_level = environ.get("WORDTABLE_LOG_LEVEL") or cfg.get(
        SECTION, "log_level", fallback=DEFAULT_LOG_LEVEL
    )
    return Settings(
        indent=_indent_option(indent),
        quotes=_quotes_option(quotes),
        log_level=log_level.strip().upper(),
    )
