"""
Metrics Configuration Management

Centralized, validated settings for the metrics engine, read from the
environment (and a .env file when present).

Usage:
    from beads_metrics.config import get_config

    config = get_config()
    print(config.granularity)

Environment variables:
    BEADS_METRICS_GRANULARITY        hourly | 4-hourly | 8-hourly | daily (default: daily)
    BEADS_METRICS_MAX_FLOW_BUCKETS   Positive integer cap on cumulative flow points (default: unset)
    BEADS_METRICS_LOG_LEVEL          DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
    BEADS_METRICS_LOG_JSON           true/false, JSON console logs (default: false)

Raises:
    ConfigurationError: If configuration is invalid
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from beads_metrics.domain.granularity import TimeGranularity, get_granularity_config

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""


@dataclass
class MetricsConfig:
    """
    Validated metrics engine configuration.

    Attributes:
        granularity: Default granularity when callers do not pick one
        max_flow_buckets: Cap on cumulative flow points, None for no cap
        log_level: Root log level
        log_json: Emit JSON logs on the console
    """

    granularity: TimeGranularity = TimeGranularity.DAILY
    max_flow_buckets: int | None = None
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate and normalize settings.

        Raises:
            ConfigurationError: If a setting is invalid
        """
        try:
            self.granularity = get_granularity_config(self.granularity).value
        except ValueError as e:
            raise ConfigurationError(f"BEADS_METRICS_GRANULARITY is invalid: {e}") from e

        if self.max_flow_buckets is not None:
            if isinstance(self.max_flow_buckets, bool) or not isinstance(self.max_flow_buckets, int):
                raise ConfigurationError(
                    f"BEADS_METRICS_MAX_FLOW_BUCKETS must be an integer: {self.max_flow_buckets!r}"
                )
            if self.max_flow_buckets < 1:
                raise ConfigurationError(
                    f"BEADS_METRICS_MAX_FLOW_BUCKETS must be positive: {self.max_flow_buckets}"
                )

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"BEADS_METRICS_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}: {self.log_level}"
            )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be true or false: {raw!r}")


def _parse_optional_int(name: str, raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer: {raw!r}") from e


def load_config() -> MetricsConfig:
    """
    Load configuration from the environment, reading .env first.

    Values already set in the environment win over .env entries.

    Returns:
        MetricsConfig: Validated configuration

    Raises:
        ConfigurationError: If any value is invalid
    """
    load_dotenv()

    return MetricsConfig(
        granularity=os.getenv("BEADS_METRICS_GRANULARITY", TimeGranularity.DAILY.value),
        max_flow_buckets=_parse_optional_int(
            "BEADS_METRICS_MAX_FLOW_BUCKETS", os.getenv("BEADS_METRICS_MAX_FLOW_BUCKETS")
        ),
        log_level=os.getenv("BEADS_METRICS_LOG_LEVEL", "INFO"),
        log_json=_parse_bool("BEADS_METRICS_LOG_JSON", os.getenv("BEADS_METRICS_LOG_JSON", "false")),
    )


_config_instance: MetricsConfig | None = None


def get_config() -> MetricsConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        MetricsConfig: The loaded configuration
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
