# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from healthprobe.errors import DispatchFatalError, ErrorCategory
from healthprobe.http import HttpRequest, HttpResponse, StubHttpClient
from healthprobe.models import CheckReport, Endpoint
from healthprobe.probe import Dispatcher, Prober
from healthprobe.probe import dispatcher as dispatcher_module


class ScriptedClient:
    """Sleeps per URL, then answers with a status or a timeout error."""

    def __init__(self, script):
        self.script = script
        self._lock = threading.Lock()
        self.in_flight = 0
        self.peak = 0

    def request(self, request: HttpRequest) -> HttpResponse:
        delay, status = self.script[request.url]
        with self._lock:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        try:
            if status is None:
                time.sleep(request.timeout)
                return HttpResponse(
                    ok=False,
                    error_message="timed out",
                    error_type="ReadTimeout",
                    error_category=ErrorCategory.TIMEOUT,
                )
            time.sleep(delay)
            return HttpResponse(ok=True, status_code=status)
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        return None


def _dispatcher(client, max_workers=None) -> Dispatcher:
    return Dispatcher(Prober(client), max_workers=max_workers)


def test_scenario_elapsed_is_bounded_by_slowest_probe():
    client = ScriptedClient(
        {
            "http://a": (0.1, 200),
            "http://b": (0.05, 500),
            "http://c": (None, None),
        }
    )
    endpoints = [Endpoint("A", "http://a"), Endpoint("B", "http://b"), Endpoint("C", "http://c")]

    report = _dispatcher(client).run_all(endpoints, timeout=0.4)

    a, b, c = report.outcomes
    assert (a.endpoint.name, a.healthy, a.status_code) == ("A", True, 200)
    assert (b.endpoint.name, b.healthy, b.status_code) == ("B", False, 500)
    assert (c.endpoint.name, c.healthy, c.status_code) == ("C", False, None)
    assert c.error.category == ErrorCategory.TIMEOUT
    assert 0.4 <= report.elapsed < 0.5


def test_callback_sees_completion_order_report_keeps_input_order():
    client = ScriptedClient(
        {
            "http://slow": (0.3, 200),
            "http://fast": (0.0, 200),
            "http://mid": (0.15, 200),
        }
    )
    endpoints = [Endpoint("slow", "http://slow"), Endpoint("fast", "http://fast"), Endpoint("mid", "http://mid")]
    seen: list[str] = []
    callback_threads: set[str] = set()

    def on_outcome(outcome):
        seen.append(outcome.endpoint.name)
        callback_threads.add(threading.current_thread().name)

    report = _dispatcher(client).run_all(endpoints, timeout=1, on_outcome=on_outcome)

    assert seen == ["fast", "mid", "slow"]
    assert [o.endpoint.name for o in report.outcomes] == ["slow", "fast", "mid"]
    assert callback_threads == {threading.current_thread().name}


def test_cardinality_matches_input_with_duplicates_and_failures():
    stub = StubHttpClient({"http://ok": HttpResponse(ok=True, status_code=200)})
    endpoints = [Endpoint(f"svc-{i}", "http://ok" if i % 3 else "http://missing") for i in range(25)]
    endpoints.append(Endpoint("svc-0", "http://ok"))

    report = _dispatcher(stub).run_all(endpoints, timeout=1)

    assert report.total == len(endpoints) == 26
    assert [o.endpoint for o in report.outcomes] == endpoints
    for outcome in report.outcomes:
        assert (outcome.status_code is None) != (outcome.error is None)
        assert outcome.healthy == (outcome.status_code is not None and 200 <= outcome.status_code < 400)
    assert report.unhealthy_count == 9
    assert report.healthy_count == 17
    assert report.all_healthy is False


def test_probes_launch_in_parallel_by_default():
    count = 10
    barrier = threading.Barrier(count, timeout=5)

    class BarrierClient:
        def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
            barrier.wait()
            return HttpResponse(ok=True, status_code=200)

        def close(self) -> None:
            return None

    endpoints = [Endpoint(f"svc-{i}", f"http://svc-{i}") for i in range(count)]
    report = _dispatcher(BarrierClient()).run_all(endpoints, timeout=1)
    assert report.all_healthy is True


def test_max_workers_caps_in_flight_probes():
    client = ScriptedClient({f"http://svc-{i}": (0.05, 200) for i in range(6)})
    endpoints = [Endpoint(f"svc-{i}", f"http://svc-{i}") for i in range(6)]

    report = _dispatcher(client, max_workers=2).run_all(endpoints, timeout=1)

    assert report.total == 6
    assert report.all_healthy is True
    assert client.peak <= 2


def test_failing_endpoint_does_not_delay_healthy_one():
    client = ScriptedClient({"http://ok": (0.0, 200), "http://hang": (None, None)})
    endpoints = [Endpoint("hang", "http://hang"), Endpoint("ok", "http://ok")]

    report = _dispatcher(client).run_all(endpoints, timeout=0.3)

    hang, ok = report.outcomes
    assert ok.healthy is True
    assert ok.duration < 0.1
    assert hang.error is not None
    assert report.elapsed >= 0.3


def test_empty_input_launches_nothing(monkeypatch):
    class NoExecutor:
        def __init__(self, *args, **kwargs):
            raise AssertionError("executor should not be created")

    monkeypatch.setattr(dispatcher_module, "ThreadPoolExecutor", NoExecutor)
    calls = []
    report = _dispatcher(StubHttpClient()).run_all([], timeout=1, on_outcome=calls.append)

    assert report.outcomes == ()
    assert report.elapsed < 0.05
    assert calls == []
    assert report.all_healthy is True


def test_launch_failure_is_fatal_after_joining_launched_probes(monkeypatch):
    class FlakyExecutor(ThreadPoolExecutor):
        def submit(self, fn, /, *args, **kwargs):
            if getattr(self, "_submitted", 0) >= 1:
                raise RuntimeError("can't start new thread")
            self._submitted = 1
            return super().submit(fn, *args, **kwargs)

    monkeypatch.setattr(dispatcher_module, "ThreadPoolExecutor", FlakyExecutor)
    stub = StubHttpClient({"http://a": HttpResponse(ok=True, status_code=200)})
    seen = []

    with pytest.raises(DispatchFatalError) as excinfo:
        _dispatcher(stub).run_all(
            [Endpoint("a", "http://a"), Endpoint("b", "http://b")],
            timeout=1,
            on_outcome=seen.append,
        )

    assert "can't start new thread" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert [o.endpoint.name for o in seen] == ["a"]


def test_invalid_max_workers_rejected():
    with pytest.raises(ValueError):
        Dispatcher(Prober(StubHttpClient()), max_workers=0)


def test_report_unpacks_as_outcomes_and_elapsed():
    stub = StubHttpClient({"http://a": HttpResponse(ok=True, status_code=204)})
    report = _dispatcher(stub).run_all([Endpoint("a", "http://a")], timeout=1)

    outcomes, elapsed = report
    assert isinstance(report, CheckReport)
    assert outcomes == report.outcomes
    assert elapsed == report.elapsed
    assert outcomes[0].healthy is True
