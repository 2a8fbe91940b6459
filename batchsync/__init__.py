"""Background batch download scheduling for the batchsync system."""

from .config import Settings, load_settings, settings
from .log import (
    configure_logging,
    get_logger,
    setup_logging,
    setup_test_logging,
)
from .types import Environment

__all__ = [
    "Environment",
    "Settings",
    "load_settings",
    "settings",
    "get_logger",
    "setup_logging",
    "configure_logging",
    "setup_test_logging",
]
