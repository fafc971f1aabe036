# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level healthprobe facade."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .config import CheckSettings, load_settings
from .http.client import HttpClient, create_default_http_client
from .models import CheckReport, Endpoint
from .probe.dispatcher import Dispatcher, OutcomeCallback
from .probe.prober import Prober


class HealthChecker:
    """
    Convenience wrapper that wires one shared HTTP client into the prober and dispatcher.

    Use as a context manager so the client's connection pool is closed after the run.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: CheckSettings | None = None):
        self.settings = settings or load_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.prober = Prober(self.http_client)
        self.dispatcher = Dispatcher(self.prober, max_workers=self.settings.max_workers)

    def check(
        self,
        endpoints: Iterable[Endpoint],
        *,
        timeout: float | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> CheckReport:
        effective_timeout = timeout if timeout is not None else self.settings.timeout
        return self.dispatcher.run_all(endpoints, effective_timeout, on_outcome=on_outcome)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> HealthChecker:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
