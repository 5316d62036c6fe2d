"""
Logging helpers with custom levels and UTC formatters.
"""

from .logging import (
    FAIL_LEVEL,
    VERBOSE_LEVEL,
    ColorFormatter,
    TxLogger,
    UTCFormatter,
    configure_logging,
    get_logger,
    parse_log_level,
)

__all__ = (
    "FAIL_LEVEL",
    "VERBOSE_LEVEL",
    "ColorFormatter",
    "TxLogger",
    "UTCFormatter",
    "configure_logging",
    "get_logger",
    "parse_log_level",
)
