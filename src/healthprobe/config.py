# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for healthprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"healthprobe/{__version__}"
DEFAULT_TIMEOUT = 10.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class CheckSettings:
    """Health check defaults.

    ``max_workers`` caps the number of probes in flight; ``None`` runs one
    thread per endpoint.
    """

    timeout: float = DEFAULT_TIMEOUT
    max_workers: int | None = None
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    @classmethod
    def from_env(cls) -> "CheckSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("HEALTHPROBE_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            max_workers=_optional_int_env("HEALTHPROBE_MAX_WORKERS", cls.max_workers),
            user_agent=os.getenv("HEALTHPROBE_USER_AGENT", cls.user_agent),
            follow_redirects=_bool_env("HEALTHPROBE_HTTP_REDIRECTS", cls.follow_redirects),
        )


def load_settings() -> CheckSettings:
    """Load check settings from environment with sensible defaults."""
    return CheckSettings.from_env()
