# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import time

import httpx

from ..config import CheckSettings, load_settings
from ..errors import ErrorCategory, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


def _deadline_exceeded(timeout: float) -> HttpResponse:
    return HttpResponse(
        ok=False,
        error_message=f"request exceeded its {timeout:g}s deadline",
        error_type="DeadlineExceeded",
        error_category=ErrorCategory.TIMEOUT,
    )


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper.

    The timeout is one deadline for the whole exchange, redirects included:
    each hop is sent with whatever budget is left, and a response that lands
    after the deadline is reported as a timeout. The underlying pool has no
    connection limit, so concurrent probes never queue for a connection.
    """

    def __init__(self, settings: CheckSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.settings.timeout,
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=None),
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        deadline = time.monotonic() + timeout

        method: str = request.method
        url: str | httpx.URL = request.url
        try:
            for _ in range(self._client.max_redirects + 1):
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return _deadline_exceeded(timeout)

                # The body is never read; leaving the stream context closes the
                # response and releases its connection.
                with self._client.stream(
                    method,
                    url,
                    headers=headers,
                    timeout=remaining,
                    follow_redirects=False,
                ) as resp:
                    next_request = resp.next_request if self.settings.follow_redirects else None
                    response = HttpResponse(
                        ok=True,
                        status_code=resp.status_code,
                        headers=dict(resp.headers),
                        url=str(resp.url),
                    )

                # Per-read timeouts restart on every chunk, so a slow trickle of
                # headers can finish past the deadline.
                if time.monotonic() > deadline:
                    return _deadline_exceeded(timeout)
                if next_request is None:
                    return response
                method, url = next_request.method, next_request.url
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

        return HttpResponse(
            ok=False,
            error_message=f"Exceeded maximum allowed redirects ({self._client.max_redirects}).",
            error_type="TooManyRedirects",
            error_category=ErrorCategory.PROTOCOL_ERROR,
        )

    def close(self) -> None:
        self._client.close()
