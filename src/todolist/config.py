# src/todolist/config.py

"""
Application configuration.

Settings come from the environment (TODOLIST_*); CLI flags override them.
Unknown values fall back to defaults rather than failing start-up.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Final


ID_MODES: Final[tuple[str, ...]] = ("random", "counter")
SEED_MODES: Final[tuple[str, ...]] = ("samples", "empty")

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class AppConfig:
    id_mode: str = "random"
    seed: str = "samples"
    color: bool = True
    log_level: str = "WARNING"


def _choice(raw: Any, allowed: tuple[str, ...], default: str) -> str:
    v = str(raw or "").strip().lower()
    return v if v in allowed else default


def _flag(raw: Any, default: bool) -> bool:
    v = str(raw or "").strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _level(raw: Any, default: str) -> str:
    v = str(raw or "").strip().upper()
    return v if isinstance(logging.getLevelName(v), int) else default


def load_config(env: dict[str, str] | None = None) -> AppConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    return AppConfig(
        id_mode=_choice(e.get("TODOLIST_ID_MODE"), ID_MODES, "random"),
        seed=_choice(e.get("TODOLIST_SEED"), SEED_MODES, "samples"),
        color=_flag(e.get("TODOLIST_COLOR"), True),
        log_level=_level(e.get("TODOLIST_LOG_LEVEL"), "WARNING"),
    )


def configure_logging(level: str = "WARNING") -> None:
    """Send package logs to stderr at `level`."""
    root = logging.getLogger("todolist")
    root.setLevel(_level(level, "WARNING"))
    if not any(getattr(h, "_todolist", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._todolist = True  # type: ignore[attr-defined]
        root.addHandler(handler)


__all__ = ["AppConfig", "configure_logging", "load_config"]
