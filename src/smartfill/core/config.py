"""Configuration loading utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from dotenv import load_dotenv


@dataclass(slots=True)
class EngineConfig:
    """Holds the tunable constants of detection and filling."""

    max_retries: int = 3
    retry_delay: float = 0.5
    interaction_delay: float = 0.1
    framework_wait_timeout: float = 2.0
    framework_poll_interval: float = 0.1
    position_tolerance: float = 10.0
    key_match_ratio: float = 0.5
    headless: bool = True


def _env_value(name: str, cast: Callable[[str], Any], default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        return default


def _as_bool(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes"}


def load_configuration(
    *,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    interaction_delay: Optional[float] = None,
    headless: Optional[bool] = None,
) -> EngineConfig:
    """Builds an ``EngineConfig`` from keyword overrides and environment variables."""

    load_dotenv()  # Loads .env values if present

    defaults = EngineConfig()
    config = EngineConfig(
        max_retries=max(1, _env_value("SMARTFILL_MAX_RETRIES", int, defaults.max_retries)),
        retry_delay=_env_value("SMARTFILL_RETRY_DELAY", float, defaults.retry_delay),
        interaction_delay=_env_value(
            "SMARTFILL_INTERACTION_DELAY", float, defaults.interaction_delay
        ),
        framework_wait_timeout=_env_value(
            "SMARTFILL_FRAMEWORK_WAIT", float, defaults.framework_wait_timeout
        ),
        framework_poll_interval=_env_value(
            "SMARTFILL_FRAMEWORK_POLL", float, defaults.framework_poll_interval
        ),
        position_tolerance=_env_value(
            "SMARTFILL_POSITION_TOLERANCE", float, defaults.position_tolerance
        ),
        key_match_ratio=_env_value("SMARTFILL_KEY_MATCH_RATIO", float, defaults.key_match_ratio),
        headless=_env_value("SMARTFILL_HEADLESS", _as_bool, defaults.headless),
    )

    overrides = {
        key: value
        for key, value in (
            ("max_retries", max_retries),
            ("retry_delay", retry_delay),
            ("interaction_delay", interaction_delay),
            ("headless", headless),
        )
        if value is not None
    }
    return replace(config, **overrides) if overrides else config
