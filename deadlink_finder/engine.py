# File: deadlink_finder/engine.py
"""deadlink_finder.engine: управление сканированием в фоновом потоке для CLI, UI и тестов."""

from __future__ import annotations

import asyncio
import threading
from typing import Callable, List, Optional

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.fetcher import Fetcher
from deadlink_finder.crawler.models import CrawlJob, Finding, ScanStatus
from deadlink_finder.logger import logger
from deadlink_finder.report.sink import FindingCallback, ReportSink
from deadlink_finder.scanner import FetcherFactory, make_job, scan_site

__all__ = ["ScanEngine"]

ScanEndedCallback = Callable[[ScanStatus], None]


class ScanEngine:
    """
    Фасад для оболочки: start_scan / stop_scan и подписки на результаты.

    Весь обход идёт в одном фоновом потоке; вызывающий поток не делает
    сетевых запросов. Одновременно выполняется не более одного сканирования.
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        *,
        fetcher_factory: FetcherFactory = Fetcher,
        sink: Optional[ReportSink] = None,
    ) -> None:
        self.config = config or ScannerConfig()
        self.sink = sink or ReportSink()
        self._fetcher_factory = fetcher_factory
        self._lock = threading.Lock()
        self._status = ScanStatus.IDLE
        self._job: Optional[CrawlJob] = None
        self._thread: Optional[threading.Thread] = None
        self._ended_callbacks: List[ScanEndedCallback] = []
        self._done = threading.Event()
        self._done.set()

    @property
    def status(self) -> ScanStatus:
        with self._lock:
            return self._status

    @property
    def running(self) -> bool:
        return self.status is ScanStatus.RUNNING

    def on_finding(self, callback: FindingCallback) -> None:
        """
        Подписка на находки в порядке обнаружения.

        Callback вызывается синхронно в потоке сканирования: пока он работает,
        обход стоит. Для медленной обработки используйте
        ``engine.sink.dispatch(callback)`` из своего потока.
        """
        self.sink.subscribe(callback)

    def on_scan_ended(self, callback: ScanEndedCallback) -> None:
        """Подписка на окончание сканирования; вызывается один раз на каждый запуск."""
        with self._lock:
            self._ended_callbacks.append(callback)

    def start_scan(self, seed_url: str) -> bool:
        """Запускает сканирование; если оно уже идёт, ничего не делает и возвращает False."""
        with self._lock:
            if self._status is ScanStatus.RUNNING:
                logger.warning("Scan already running, ignoring start for %s", seed_url)
                return False
            self.sink.clear()
            job = make_job(seed_url, self.config)
            self._job = job
            self._status = ScanStatus.RUNNING
            self._done = done = threading.Event()
            self._thread = threading.Thread(
                target=self._worker, args=(job, done), name="deadlink-crawler", daemon=True
            )
            self._thread.start()
        logger.info("Starting scan of %s", seed_url)
        return True

    def stop_scan(self) -> None:
        """Выставляет флаг отмены текущего сканирования, если оно есть."""
        with self._lock:
            job = self._job
        if job is not None:
            logger.info("Stop requested for %s", job.seed_url)
            job.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Ждёт окончания текущего сканирования; True, если оно завершилось."""
        return self._done.wait(timeout)

    def findings(self) -> List[Finding]:
        return self.sink.findings()

    def report_text(self) -> str:
        """Накопленный текст отчёта для экспорта."""
        return self.sink.text()

    def _worker(self, job: CrawlJob, done: threading.Event) -> None:
        try:
            status = asyncio.run(
                scan_site(job, self.sink, self.config, fetcher_factory=self._fetcher_factory)
            )
        except Exception:
            logger.exception("Scan of %s failed", job.seed_url)
            job.cancel()
            status = ScanStatus.STOPPED
            emitted = self.sink.findings()
            if not emitted or not emitted[-1].is_terminal:
                self.sink.put(Finding.stopped())

        with self._lock:
            self._status = status
            self._job = None
            callbacks = list(self._ended_callbacks)
        logger.info("Scan of %s ended: %s", job.seed_url, status.value)
        try:
            for callback in callbacks:
                try:
                    callback(status)
                except Exception:
                    logger.exception("Scan-ended callback %r failed", callback)
        finally:
            done.set()
