# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
healthprobe package entrypoint.

Concurrent HTTP health checks: one GET per endpoint, run in parallel, each
bounded by a timeout and classified as healthy (2xx/3xx) or unhealthy.
HTTP behavior is abstracted behind an injectable client interface, and
results are modeled with typed dataclasses.
"""

from .config import CheckSettings, load_settings
from .errors import DispatchFatalError, ErrorCategory
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import CheckReport, Endpoint, ProbeError, ProbeOutcome
from .probe import Dispatcher, Prober
from .runtime import HealthChecker
from .version import __version__

__all__ = [
    "CheckReport",
    "CheckSettings",
    "DispatchFatalError",
    "Dispatcher",
    "Endpoint",
    "ErrorCategory",
    "HealthChecker",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "ProbeError",
    "ProbeOutcome",
    "Prober",
    "StubHttpClient",
    "create_default_http_client",
    "load_settings",
    "setup_logging",
    "__version__",
]
