"""Settings dataclass and environment override helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from ..ai.modes import AgentMode

__all__ = [
    "Settings",
    "load_settings",
    "apply_overrides",
    "apply_env_overrides",
]

LOGGER = logging.getLogger(__name__)
_ENV_OVERRIDES: Mapping[str, str] = {
    "AGENT_UI_DEFAULT_MODE": "default_mode",
    "AGENT_UI_LOG_DIR": "log_dir",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "AGENT_UI_DEBUG_LOGGING": "debug_logging",
}
_FLOAT_ENV_OVERRIDES: Mapping[str, str] = {
    "AGENT_UI_TOKEN_WARNING_PERCENT": "token_warning_percent",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "AGENT_UI_CONTEXT_WINDOW": "context_window",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True)
class Settings:
    """User-configurable settings for the agent integration."""

    default_mode: str = AgentMode.WRITE.value
    context_window: int = 128_000
    token_warning_percent: float = 80.0
    debug_logging: bool = False
    log_dir: str | None = None

    def agent_mode(self) -> AgentMode:
        """Return the configured default mode, falling back to ``WRITE``."""

        try:
            return AgentMode.parse(self.default_mode)
        except ValueError:
            LOGGER.warning("Unknown default mode %r; using %s", self.default_mode, AgentMode.default().value)
            return AgentMode.default()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def apply_overrides(
    settings: Settings,
    overrides: Mapping[str, Any],
    *,
    source: str = "runtime",
) -> Settings:
    allowed = {field.name for field in fields(Settings)}
    filtered: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in allowed or value is None:
            continue
        filtered[key] = value
    if filtered:
        LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
        settings = replace(settings, **filtered)
    return settings


def apply_env_overrides(settings: Settings, env: Mapping[str, str] | None = None) -> Settings:
    environ = os.environ if env is None else env
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is not None:
            overrides[field_name] = value
    for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is not None:
            overrides[field_name] = value.strip().lower() in _TRUE_VALUES
    for env_name, field_name in _INT_ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None:
            continue
        try:
            number = int(value, 10)
        except ValueError:
            LOGGER.warning("Environment override %s=%s is not a valid integer", env_name, value)
            continue
        if number < 0:
            LOGGER.warning("Environment override %s=%s must not be negative", env_name, value)
            continue
        overrides[field_name] = number
    for env_name, field_name in _FLOAT_ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None:
            continue
        try:
            overrides[field_name] = float(value)
        except ValueError:
            LOGGER.warning("Environment override %s=%s is not a valid float", env_name, value)
    if overrides:
        settings = apply_overrides(settings, overrides, source="environment")
    return settings


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings from defaults, then environment, then explicit overrides."""

    settings = apply_env_overrides(Settings(), env)
    if overrides:
        settings = apply_overrides(settings, overrides)
    return settings
