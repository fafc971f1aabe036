# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome and check report models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ..errors import ErrorCategory, error_category_to_reason
from .endpoint import Endpoint

HEALTHY_STATUS_MIN = 200
HEALTHY_STATUS_MAX = 400


def is_healthy_status(status_code: int | None) -> bool:
    """Return True for 2xx and 3xx status codes."""
    return status_code is not None and HEALTHY_STATUS_MIN <= status_code < HEALTHY_STATUS_MAX


@dataclass(frozen=True)
class ProbeError:
    """Transport-level failure captured as data."""

    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR
    error_type: str | None = None

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Result of probing one Endpoint.

    Exactly one of `status_code` and `error` is set. `healthy` is derived from
    `status_code` and is never True when `error` is set.
    """

    endpoint: Endpoint
    duration: float
    status_code: int | None = None
    error: ProbeError | None = None

    def __post_init__(self) -> None:
        if (self.status_code is None) == (self.error is None):
            raise ValueError("ProbeOutcome requires exactly one of status_code or error")
        if self.duration < 0:
            raise ValueError("ProbeOutcome duration must be non-negative")

    @property
    def healthy(self) -> bool:
        return is_healthy_status(self.status_code)

    @classmethod
    def from_status(cls, endpoint: Endpoint, status_code: int, duration: float) -> ProbeOutcome:
        return cls(endpoint=endpoint, duration=duration, status_code=status_code)

    @classmethod
    def from_error(cls, endpoint: Endpoint, error: ProbeError, duration: float) -> ProbeOutcome:
        return cls(endpoint=endpoint, duration=duration, error=error)


@dataclass(frozen=True)
class CheckReport:
    """All outcomes of one run, in endpoint input order, plus total wall time."""

    outcomes: tuple[ProbeOutcome, ...]
    elapsed: float

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def healthy_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.healthy)

    @property
    def unhealthy_count(self) -> int:
        return self.total - self.healthy_count

    @property
    def all_healthy(self) -> bool:
        return self.healthy_count == self.total

    def __iter__(self) -> Iterator[Any]:
        # Allows `outcomes, elapsed = report`.
        yield self.outcomes
        yield self.elapsed
