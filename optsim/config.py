"""Configuration management for optsim.

Loads configuration from environment variables with sane defaults.
Uses python-dotenv to load from .env file if present.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_optional_int(key: str) -> int | None:
    """Get int from environment variable, or None when unset or invalid."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(key, default)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get bool from environment variable (true/false, 1/0, yes/no)."""
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str
    format: str

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create LoggingConfig from environment variables."""
        return cls(
            level=_get_env_str("LOG_LEVEL", "WARNING"),
            format=_get_env_str("LOG_FORMAT", "simple"),
        )


@dataclass(frozen=True)
class SimulationConfig:
    """Premium drift configuration.

    Each update multiplies a premium by ``1 + r / 100`` where ``r`` is a
    uniform integer in ``[drift_min_pct, drift_max_pct]``.
    """

    drift_min_pct: int
    drift_max_pct: int
    seed: int | None

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Create SimulationConfig from environment variables."""
        drift_min = _get_env_int("OPTSIM_DRIFT_MIN_PCT", -5)
        drift_max = _get_env_int("OPTSIM_DRIFT_MAX_PCT", 4)
        if drift_min > drift_max:
            drift_min, drift_max = -5, 4
        return cls(
            drift_min_pct=drift_min,
            drift_max_pct=drift_max,
            seed=_get_env_optional_int("OPTSIM_SEED"),
        )


@dataclass(frozen=True)
class DisplayConfig:
    """Console display configuration."""

    ansi: bool
    prompt_row: int

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        """Create DisplayConfig from environment variables."""
        return cls(
            ansi=_get_env_bool("OPTSIM_ANSI", True),
            prompt_row=_get_env_int("OPTSIM_PROMPT_ROW", 15),
        )


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    logging: LoggingConfig
    simulation: SimulationConfig
    display: DisplayConfig

    @classmethod
    def from_env(cls) -> "Config":
        """Create Config from environment variables."""
        return cls(
            logging=LoggingConfig.from_env(),
            simulation=SimulationConfig.from_env(),
            display=DisplayConfig.from_env(),
        )


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
