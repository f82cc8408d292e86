from __future__ import annotations

import logging

import pytest

from todolist.config import configure_logging, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("TODOLIST_ID_MODE", "TODOLIST_SEED", "TODOLIST_COLOR", "TODOLIST_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg.id_mode == "random"
    assert cfg.seed == "samples"
    assert cfg.color is True
    assert cfg.log_level == "WARNING"


def test_env_overrides() -> None:
    cfg = load_config(
        {
            "TODOLIST_ID_MODE": "Counter",
            "TODOLIST_SEED": "empty",
            "TODOLIST_COLOR": "0",
            "TODOLIST_LOG_LEVEL": "debug",
        }
    )
    assert cfg.id_mode == "counter"
    assert cfg.seed == "empty"
    assert cfg.color is False
    assert cfg.log_level == "DEBUG"


def test_unknown_values_fall_back() -> None:
    cfg = load_config(
        {
            "TODOLIST_ID_MODE": "uuid",
            "TODOLIST_SEED": "lots",
            "TODOLIST_COLOR": "maybe",
            "TODOLIST_LOG_LEVEL": "loud",
        }
    )
    assert cfg.id_mode == "random"
    assert cfg.seed == "samples"
    assert cfg.color is True
    assert cfg.log_level == "WARNING"


def test_configure_logging_is_idempotent() -> None:
    logger = logging.getLogger("todolist")
    configure_logging("debug")
    configure_logging("info")

    marked = [h for h in logger.handlers if getattr(h, "_todolist", False)]
    assert len(marked) == 1
    assert logger.level == logging.INFO
