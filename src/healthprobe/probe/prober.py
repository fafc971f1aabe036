# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-endpoint health probe."""

from __future__ import annotations

import logging
import time

from ..errors import ErrorCategory, categorize_exception
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse
from ..models import Endpoint, ProbeError, ProbeOutcome

logger = logging.getLogger(__name__)


def _error_from_response(response: HttpResponse) -> ProbeError:
    return ProbeError(
        message=response.error_message or "No status code in response",
        category=response.error_category or ErrorCategory.UNKNOWN_ERROR,
        error_type=response.error_type,
    )


class Prober:
    """Issues one GET per call and classifies the result."""

    def __init__(self, http_client: HttpClient | None = None):
        self.http_client = http_client or create_default_http_client()

    def probe(self, endpoint: Endpoint, timeout: float) -> ProbeOutcome:
        """
        Probe `endpoint` once, bounded by `timeout` seconds.

        Never raises for per-endpoint failures: transport errors, and exceptions
        escaping the HTTP client, are returned as `ProbeOutcome.error`.
        """
        request = HttpRequest(url=endpoint.url, method="GET", timeout=timeout)
        start = time.monotonic()
        try:
            response = self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )
        duration = time.monotonic() - start

        if response.status_code is not None:
            outcome = ProbeOutcome.from_status(endpoint, response.status_code, duration)
        else:
            outcome = ProbeOutcome.from_error(endpoint, _error_from_response(response), duration)

        logger.debug(
            "probe %s (%s): status=%s error=%s duration=%.3fs",
            endpoint.name,
            endpoint.url,
            outcome.status_code,
            outcome.error,
            duration,
        )
        return outcome
