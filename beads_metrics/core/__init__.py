"""
Core Infrastructure - Configuration and Logging

Usage:
    from beads_metrics.core import get_config, setup_logging_from_config

    config = get_config()
    setup_logging_from_config(config)
"""

from ..config import ConfigurationError, MetricsConfig, get_config, load_config, reset_config
from .logging_config import get_logger, log_with_context, setup_logging, setup_logging_from_config

__all__ = [
    # Configuration
    "get_config",
    "load_config",
    "reset_config",
    "ConfigurationError",
    "MetricsConfig",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
    "setup_logging_from_config",
]
