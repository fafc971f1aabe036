# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concurrent fan-out of probes with a join barrier."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from ..errors import DispatchFatalError
from ..models import CheckReport, Endpoint, ProbeOutcome
from .prober import Prober

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[ProbeOutcome], None]


class Dispatcher:
    """
    Runs one probe per endpoint concurrently and waits for all of them.

    By default every endpoint gets its own worker thread. `max_workers` caps the
    number of probes in flight for large endpoint lists; queued probes start as
    earlier ones finish, so each still gets its full timeout.
    """

    def __init__(self, prober: Prober | None = None, max_workers: int | None = None):
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be positive or None")
        self.prober = prober or Prober()
        self.max_workers = max_workers

    def run_all(
        self,
        endpoints: Iterable[Endpoint],
        timeout: float,
        on_outcome: OutcomeCallback | None = None,
    ) -> CheckReport:
        """
        Probe every endpoint and return all outcomes plus total wall time.

        `on_outcome` is called on the calling thread once per outcome, in
        completion order. `CheckReport.outcomes` is in input order.
        Raises DispatchFatalError only if a probe cannot be launched; probes
        that were launched are still joined first.
        """
        targets = list(endpoints)
        start = time.monotonic()
        if not targets:
            return CheckReport(outcomes=(), elapsed=time.monotonic() - start)

        workers = len(targets) if self.max_workers is None else min(self.max_workers, len(targets))
        slots: list[ProbeOutcome | None] = [None] * len(targets)
        launch_error: RuntimeError | None = None
        logger.info("dispatching %d probes (workers=%d, timeout=%ss)", len(targets), workers, timeout)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="healthprobe") as executor:
            futures: dict[Future[ProbeOutcome], int] = {}
            for index, endpoint in enumerate(targets):
                try:
                    futures[executor.submit(self.prober.probe, endpoint, timeout)] = index
                except RuntimeError as exc:
                    launch_error = exc
                    break

            for future in as_completed(futures):
                outcome = future.result()
                slots[futures[future]] = outcome
                if on_outcome is not None:
                    on_outcome(outcome)

        elapsed = time.monotonic() - start

        if launch_error is not None:
            logger.error("failed to launch probe %d of %d: %s", len(futures) + 1, len(targets), launch_error)
            raise DispatchFatalError(
                f"could not launch probe {len(futures) + 1} of {len(targets)}: {launch_error}"
            ) from launch_error

        outcomes = tuple(outcome for outcome in slots if outcome is not None)
        logger.info("all %d probes finished in %.3fs", len(outcomes), elapsed)
        return CheckReport(outcomes=outcomes, elapsed=elapsed)
