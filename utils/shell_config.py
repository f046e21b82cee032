from __future__ import annotations

"""Environment-driven configuration for the settings navigation shell."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .path_utils import get_base_dir, resolve_path

logger = logging.getLogger(__name__)

ICON_SIZE_ENV = "SETTINGS_SHELL_ICON_SIZE"
BUTTON_RATIO_ENV = "SETTINGS_SHELL_BUTTON_RATIO"
ICON_DIR_ENV = "SETTINGS_SHELL_ICON_DIR"
LOG_LEVEL_ENV = "SETTINGS_SHELL_LOG_LEVEL"
ACCOUNTS_ENV = "SETTINGS_SHELL_ACCOUNTS"

DEFAULT_ICON_SIZE = 32
# golden ratio
DEFAULT_BUTTON_RATIO = 1.618

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ShellConfig:
    """Settings that tune the navigation toolbar and logging."""

    icon_size: int = DEFAULT_ICON_SIZE
    button_ratio: float = DEFAULT_BUTTON_RATIO
    icon_dir: Path = field(default_factory=lambda: get_base_dir() / "ui" / "icons")
    log_level: str = "INFO"
    seed_accounts: Tuple[str, ...] = ()

    def icon_path(self, name: str) -> str:
        return str(self.icon_dir / name)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> ShellConfig:
    """Build a :class:`ShellConfig` from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    kwargs = {}

    icon_dir = env.get(ICON_DIR_ENV)
    if icon_dir:
        kwargs["icon_dir"] = resolve_path(icon_dir)

    level = (env.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
    if level not in _LEVELS:
        logger.warning("Unknown %s=%r, using INFO", LOG_LEVEL_ENV, level)
        level = "INFO"

    accounts = tuple(
        name.strip() for name in (env.get(ACCOUNTS_ENV) or "").split(",") if name.strip()
    )

    return ShellConfig(
        icon_size=_int_env(env, ICON_SIZE_ENV, DEFAULT_ICON_SIZE),
        button_ratio=_float_env(env, BUTTON_RATIO_ENV, DEFAULT_BUTTON_RATIO),
        log_level=level,
        seed_accounts=accounts,
        **kwargs,
    )


__all__ = ["ShellConfig", "load_config"]
