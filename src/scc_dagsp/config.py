"""Runtime configuration for analysis runs (environment + CLI overrides)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional
import logging
import os

from .errors import InvalidArgumentError

_SOURCE_ENV = "SCC_DAGSP_SOURCE"
_TARGET_ENV = "SCC_DAGSP_TARGET"
_PATH_MODE_ENV = "SCC_DAGSP_PATH_MODE"
_LOG_LEVEL_ENV = "SCC_DAGSP_LOG_LEVEL"

PATH_MODES = ("longest", "shortest")

LOGGER = logging.getLogger(__name__)


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidArgumentError(f"{name} must be an integer, got {raw!r}") from None


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip().lower() or None


@dataclass(frozen=True)
class AnalysisConfig:
    source: Optional[int] = None
    target: Optional[int] = None
    longest: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        cfg = cls()
        source = _env_int(_SOURCE_ENV)
        if source is not None:
            cfg = replace(cfg, source=source)
        target = _env_int(_TARGET_ENV)
        if target is not None:
            cfg = replace(cfg, target=target)
        mode = _env_str(_PATH_MODE_ENV)
        if mode is not None:
            cfg = replace(cfg, longest=_parse_path_mode(mode))
        level = _env_str(_LOG_LEVEL_ENV)
        if level is not None:
            cfg = replace(cfg, log_level=_parse_log_level(level))
        LOGGER.debug("AnalysisConfig.from_env %s", cfg)
        return cfg

    def override(
        self,
        *,
        source: Optional[int] = None,
        target: Optional[int] = None,
        path_mode: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "AnalysisConfig":
        """Apply CLI values on top; ``None`` leaves a field untouched."""
        cfg = self
        if source is not None:
            cfg = replace(cfg, source=source)
        if target is not None:
            cfg = replace(cfg, target=target)
        if path_mode is not None:
            cfg = replace(cfg, longest=_parse_path_mode(path_mode))
        if log_level is not None:
            cfg = replace(cfg, log_level=_parse_log_level(log_level))
        return cfg

    @property
    def path_mode(self) -> str:
        return "longest" if self.longest else "shortest"


def _parse_path_mode(mode: str) -> bool:
    mode = mode.strip().lower()
    if mode not in PATH_MODES:
        raise InvalidArgumentError(f"path mode must be one of {PATH_MODES}, got {mode!r}")
    return mode == "longest"


def _parse_log_level(level: str) -> str:
    name = level.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise InvalidArgumentError(f"unknown log level {level!r}")
    return name


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=_parse_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
