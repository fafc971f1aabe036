# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for healthprobe."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "HEALTHPROBE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
VERBOSE_LOG_LEVEL = "INFO"

# httpx logs every request at INFO; those lines only add noise below DEBUG.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(level: str | None = None, *, verbose: bool = False) -> int:
    """
    Pick the effective level.

    An explicit `level` wins, then `verbose` (the CLI's -v), then
    HEALTHPROBE_LOG_LEVEL read at call time. Unknown names fall back to WARNING.
    """
    if level:
        name = level
    elif verbose:
        name = VERBOSE_LOG_LEVEL
    else:
        name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    value = getattr(logging, name.strip().upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None, *, verbose: bool = False) -> int:
    """Configure standard logging for CLI/library use and return the level applied."""
    effective_level = resolve_log_level(level, verbose=verbose)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    transport_level = logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective_level


__all__ = ["resolve_log_level", "setup_logging"]
