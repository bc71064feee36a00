"""bandsync_lite.config_loader

Lightweight config loader for bandsync_lite.

- Reads YAML (PyYAML) or JSON files; YAML is a superset, so one parser covers both.
- Environment variables prefixed ``BANDSYNC_`` override file values.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .lite_exceptions import ConfigError

logger = logging.getLogger(__name__)

_ENV_OVERRIDES = {
    "BANDSYNC_LOG_LEVEL": "log_level",
    "BANDSYNC_DISPLAY_MONTHS_BACK": "display_months_back",
    "BANDSYNC_DISPLAY_MONTHS_AHEAD": "display_months_ahead",
    "BANDSYNC_MAX_OCCURRENCES": "max_occurrences_per_event",
}


@dataclass
class Config:
    """Typed configuration for bandsync_lite.

    Fields:
        display_months_back: months before "now" covered by the default window
        display_months_ahead: months after "now" covered by the default window
        max_occurrences_per_event: optional cap on occurrences per expansion
        log_level: logging level name
    """

    display_months_back: int = 3
    display_months_ahead: int = 6
    max_occurrences_per_event: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int; values that cannot be coerced
        fall back to the default with a warning. Negative month offsets are
        clamped to 0 and a non-positive occurrence cap disables the cap.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int) -> int:
            raw = data.get(key, default)
            try:
                return int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default

        months_back = _coerce_int("display_months_back", 3)
        months_ahead = _coerce_int("display_months_ahead", 6)
        for key, value in (("display_months_back", months_back), ("display_months_ahead", months_ahead)):
            if value < 0:
                logger.warning("%s %d below minimum; coercing to 0", key, value)
        months_back = max(0, months_back)
        months_ahead = max(0, months_ahead)

        max_occurrences: int | None = None
        raw_cap = data.get("max_occurrences_per_event")
        if raw_cap is not None and raw_cap != "":
            try:
                max_occurrences = int(raw_cap)
            except (TypeError, ValueError):
                logger.warning("Config max_occurrences_per_event=%r is not an int; ignoring", raw_cap)
            else:
                if max_occurrences <= 0:
                    max_occurrences = None

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        return cls(
            display_months_back=months_back,
            display_months_ahead=months_ahead,
            max_occurrences_per_event=max_occurrences,
            log_level=log_level,
        )


def _load_yaml_or_json(path: Path) -> Any:
    """Load a value from a YAML or JSON file.

    Raises:
        ConfigError: If the file cannot be parsed
    """
    text = path.read_text(encoding="utf-8")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc
    # safe_load returns None for empty files; normalize to empty dict
    return {} if loaded is None else loaded


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    return {key: environ[env] for env, key in _ENV_OVERRIDES.items() if env in environ}


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Config:
    """Load configuration from a YAML/JSON file and the environment.

    Args:
        path: Optional path to the config file. If not provided the default is
              ./bandsync.yaml (relative to current working dir).
        environ: Environment mapping; defaults to ``os.environ``

    Returns:
        Config dataclass instance with values from file and environment (or defaults).

    Behavior:
    - If file is missing: defaults plus environment overrides.
    - If file exists but top-level is not a mapping: raises ConfigError.
    """
    p = Path(path) if path else Path.cwd() / "bandsync.yaml"
    env = os.environ if environ is None else environ
    logger.debug("Attempting to load config from %s", p)

    raw: dict[str, Any] = {}
    if p.exists():
        loaded = _load_yaml_or_json(p)
        if not isinstance(loaded, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, loaded)
            raise ConfigError("Config file must contain a mapping at top level")
        raw.update(loaded)
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)

    overrides = _env_overrides(env)
    if overrides:
        logger.debug("Applying environment overrides: %s", sorted(overrides))
        raw.update(overrides)

    cfg = Config.from_dict(raw)
    logger.debug("Configuration values: %s", cfg)
    return cfg
