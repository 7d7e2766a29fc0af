"""
Logging for the storefront package.

Handlers and levels are set on the "storefront" logger, not the root, so
an embedding app keeps control of its own logging. Modules only ever do:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Environment:
    LOG_LEVEL            DEBUG / INFO / WARNING ... (default INFO)
    STOREFRONT_LOG_STYLE detailed | simple
    STOREFRONT_ENV       "production" switches the default style to simple

Catalog data (ids, names, prices) is user-controlled, so anything taken
from it goes through sanitize_id_for_logging() or
sanitize_string_for_logging() before it is interpolated (CWE-117).
"""

import logging
import os
import sys
from functools import cache
from typing import Optional

PACKAGE_LOGGER = "storefront"

LOG_STYLES = {
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "simple": "%(levelname)s - %(name)s - %(message)s",
}

# Noisy transport loggers underneath the Upstash REST client
QUIET_LOGGERS = ("httpx", "httpcore")

ID_LOG_LENGTH = 8

# C0 controls and DEL become visible escapes; NUL is dropped
_CONTROL_ESCAPES = {code: f"\\x{code:02x}" for code in (*range(0x20), 0x7F)}
_CONTROL_ESCAPES.update({ord("\n"): "\\n", ord("\r"): "\\r", ord("\t"): "\\t", 0: None})


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _style_from_env() -> str:
    style = os.environ.get("STOREFRONT_LOG_STYLE", "").lower()
    if style in LOG_STYLES:
        return style
    return "simple" if os.environ.get("STOREFRONT_ENV") == "production" else "detailed"


def configure_logging(level: Optional[int] = None, style: Optional[str] = None) -> logging.Logger:
    """
    Set up the package logger. Safe to call again to change level or style.

    A stdout handler is attached only when neither the package logger nor
    the root logger has one; otherwise records just propagate.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level if level is not None else _level_from_env())
    package_logger.propagate = True

    fmt = LOG_STYLES.get(style or _style_from_env(), LOG_STYLES["detailed"])
    own_handlers = [h for h in package_logger.handlers if getattr(h, "_storefront", False)]
    if own_handlers:
        for handler in own_handlers:
            handler.setFormatter(logging.Formatter(fmt))
    elif not package_logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt))
        handler._storefront = True
        package_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger


@cache
def _ensure_configured() -> None:
    configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module; configures the package logger on first use."""
    _ensure_configured()
    return logging.getLogger(name)


def _escape(value: str) -> str:
    return value.translate(_CONTROL_ESCAPES)


def sanitize_id_for_logging(id_value: object, keep: int = ID_LOG_LENGTH) -> str:
    """
    First `keep` characters of an id or line-item key, escaped.

    Returns "N/A" for empty values.
    """
    if id_value is None or id_value == "":
        return "N/A"
    return _escape(str(id_value))[:keep]


def sanitize_string_for_logging(value: object, max_length: int = 50) -> str:
    """
    Escape and shorten catalog-supplied text or values for a log line.

    Strings are logged as-is; other values by repr() so that "5" and 5
    stay distinguishable. Returns "N/A" for None or "".
    """
    if value is None or value == "":
        return "N/A"
    safe_value = _escape(value if isinstance(value, str) else repr(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_STYLES",
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
