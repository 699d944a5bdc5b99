# File: tests/test_engine.py
"""Тесты фасада ScanEngine: фоновый поток, остановка, подписки."""
from __future__ import annotations

import threading

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.models import Finding, FindingKind, ScanStatus
from deadlink_finder.engine import ScanEngine

from conftest import SEED, FakeFetcher, anchors

WAIT = 5.0


def blocking_fetcher(started: threading.Event, gate: threading.Event) -> FakeFetcher:
    """Fake fetcher whose first probe blocks until *gate* is set."""

    def hold(url: str) -> None:
        if not started.is_set():
            started.set()
            gate.wait(WAIT)

    pages = {SEED: anchors("/a", "/missing", "/b"), f"{SEED}/a": anchors(), f"{SEED}/b": anchors()}
    return FakeFetcher(pages, on_probe=hold)


def test_scan_completes_and_reports_in_order():
    fetcher = FakeFetcher({SEED: anchors("/ok", "/missing"), f"{SEED}/ok": anchors()})
    engine = ScanEngine(ScannerConfig(), fetcher_factory=fetcher)
    seen: list[Finding] = []
    ended: list[ScanStatus] = []
    engine.on_finding(seen.append)
    engine.on_scan_ended(ended.append)

    assert engine.status is ScanStatus.IDLE
    assert engine.start_scan(SEED)
    assert engine.wait(WAIT)

    assert engine.status is ScanStatus.COMPLETED
    assert not engine.running
    assert ended == [ScanStatus.COMPLETED]
    assert seen == [Finding.dead(f"{SEED}/missing", 404), Finding.completed()]
    assert engine.findings() == seen
    assert engine.report_text() == f"Dead link (404): {SEED}/missing\n--- Scan complete ---\n"
    assert engine.sink.drain() == seen


def test_stop_scan_ends_with_single_stopped_event():
    started, gate = threading.Event(), threading.Event()
    engine = ScanEngine(ScannerConfig(), fetcher_factory=blocking_fetcher(started, gate))
    ended: list[ScanStatus] = []
    engine.on_scan_ended(ended.append)

    assert engine.start_scan(SEED)
    assert started.wait(WAIT)
    assert engine.running
    engine.stop_scan()
    engine.stop_scan()
    gate.set()
    assert engine.wait(WAIT)

    assert ended == [ScanStatus.STOPPED]
    findings = engine.findings()
    assert findings == [Finding.stopped()]
    assert sum(1 for f in findings if f.is_terminal) == 1


def test_second_start_is_ignored_while_running():
    started, gate = threading.Event(), threading.Event()
    fetcher = blocking_fetcher(started, gate)
    engine = ScanEngine(ScannerConfig(), fetcher_factory=fetcher)

    assert engine.start_scan(SEED)
    assert started.wait(WAIT)
    assert engine.start_scan("http://other.test") is False
    gate.set()
    assert engine.wait(WAIT)

    assert engine.status is ScanStatus.COMPLETED
    assert "http://other.test" not in fetcher.fetched


def test_engine_can_run_again_after_scan_ends():
    pages = {SEED: anchors("/missing")}
    engine = ScanEngine(ScannerConfig(), fetcher_factory=lambda cfg: FakeFetcher(pages))
    ended: list[ScanStatus] = []
    engine.on_scan_ended(ended.append)

    for _ in range(2):
        assert engine.start_scan(SEED)
        assert engine.wait(WAIT)

    assert ended == [ScanStatus.COMPLETED, ScanStatus.COMPLETED]
    # report of the previous run is cleared on restart
    assert [f.kind for f in engine.findings()] == [FindingKind.DEAD, FindingKind.COMPLETED]


def test_stop_without_scan_is_noop():
    engine = ScanEngine(ScannerConfig())
    engine.stop_scan()
    assert engine.status is ScanStatus.IDLE
    assert engine.wait(0)


def test_worker_failure_ends_scan_as_stopped():
    class BrokenFetcher(FakeFetcher):
        async def fetch_body(self, url):
            raise KeyError(url)

    engine = ScanEngine(ScannerConfig(), fetcher_factory=BrokenFetcher({}))
    ended: list[ScanStatus] = []
    engine.on_scan_ended(ended.append)

    assert engine.start_scan(SEED)
    assert engine.wait(WAIT)
    assert ended == [ScanStatus.STOPPED]
    assert engine.findings() == [Finding.stopped()]


def test_failing_subscriber_does_not_break_scan():
    def boom(_finding):
        raise RuntimeError("subscriber failure")

    engine = ScanEngine(ScannerConfig(), fetcher_factory=FakeFetcher({SEED: anchors()}))
    engine.on_finding(boom)
    assert engine.start_scan(SEED)
    assert engine.wait(WAIT)
    assert engine.status is ScanStatus.COMPLETED


def test_dispatch_delivers_on_consumer_thread():
    fetcher = FakeFetcher({SEED: anchors("/missing")})
    engine = ScanEngine(ScannerConfig(), fetcher_factory=fetcher)
    threads: list[str] = []

    def slow_consumer(finding: Finding) -> None:
        threads.append(threading.current_thread().name)

    assert engine.start_scan(SEED)
    assert engine.wait(WAIT)
    delivered = engine.sink.dispatch(slow_consumer)

    assert delivered == 2
    assert threads == [threading.current_thread().name] * 2
    assert engine.sink.dispatch(slow_consumer, timeout=0.01) == 0
