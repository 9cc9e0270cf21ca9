"""Configuration helpers for vet case change handling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vetcase_events.domains.changes.adapters.snapshot_adapter import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
)

_DEFAULT_COLLECTION = "vetCases"
_DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")
_ENV_LOADED = False


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


@dataclass(frozen=True)
class CaseEventsConfig:
    """Holds runtime settings for change handling."""

    collection_name: str = _DEFAULT_COLLECTION
    max_snapshot_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = _DEFAULT_LOG_LEVEL
    dispatch_enabled: bool = True

    def __post_init__(self) -> None:
        if not self.collection_name or "/" in self.collection_name:
            raise ConfigError(
                f"collection_name must be a non-empty name without '/', got {self.collection_name!r}"
            )
        if not 1 <= self.max_snapshot_depth <= MAX_DEPTH_LIMIT:
            raise ConfigError(
                f"max_snapshot_depth must be between 1 and {MAX_DEPTH_LIMIT}, "
                f"got {self.max_snapshot_depth}"
            )
        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @property
    def document_pattern(self) -> str:
        """Document path pattern the write trigger listens on."""
        return f"{self.collection_name}/{{vetCaseId}}"

    def with_overrides(
        self,
        *,
        collection_name: Optional[str] = None,
        max_snapshot_depth: Optional[int] = None,
        log_level: Optional[str] = None,
        dispatch_enabled: Optional[bool] = None,
    ) -> "CaseEventsConfig":
        """Return a copy with the provided overrides applied."""

        cfg = self
        if collection_name:
            cfg = replace(cfg, collection_name=collection_name)
        if max_snapshot_depth is not None:
            cfg = replace(cfg, max_snapshot_depth=max_snapshot_depth)
        if log_level:
            cfg = replace(cfg, log_level=log_level)
        if dispatch_enabled is not None:
            cfg = replace(cfg, dispatch_enabled=dispatch_enabled)
        return cfg


def load_config(
    *,
    collection_name: Optional[str] = None,
    max_snapshot_depth: Optional[int] = None,
    log_level: Optional[str] = None,
    dispatch_enabled: Optional[bool] = None,
) -> CaseEventsConfig:
    """Load configuration from environment variables and overrides.

    Environment variables (overridden by explicit arguments):
        VETCASE_COLLECTION, VETCASE_MAX_DEPTH, VETCASE_LOG_LEVEL,
        VETCASE_DISPATCH_ENABLED
    """

    _ensure_env_loaded()
    resolved_collection = (
        collection_name
        or os.getenv("VETCASE_COLLECTION", "").strip()
        or _DEFAULT_COLLECTION
    )

    resolved_depth = max_snapshot_depth
    if resolved_depth is None:
        raw_depth = os.getenv("VETCASE_MAX_DEPTH", "").strip()
        resolved_depth = _parse_int("VETCASE_MAX_DEPTH", raw_depth) if raw_depth else DEFAULT_MAX_DEPTH

    resolved_level = (
        log_level
        or os.getenv("VETCASE_LOG_LEVEL", "").strip()
        or _DEFAULT_LOG_LEVEL
    )

    resolved_dispatch = dispatch_enabled
    if resolved_dispatch is None:
        raw_dispatch = os.getenv("VETCASE_DISPATCH_ENABLED", "").strip()
        resolved_dispatch = _parse_bool("VETCASE_DISPATCH_ENABLED", raw_dispatch) if raw_dispatch else True

    return CaseEventsConfig(
        collection_name=resolved_collection,
        max_snapshot_depth=resolved_depth,
        log_level=resolved_level,
        dispatch_enabled=resolved_dispatch,
    )


def configure_logging(config: CaseEventsConfig) -> logging.Logger:
    """Apply the configured level to the package logger."""
    logger = logging.getLogger("vetcase_events")
    logger.setLevel(config.log_level)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _ensure_env_loaded() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True
    dotenv_path = Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)
    else:
        load_dotenv()  # Fallback to default search
