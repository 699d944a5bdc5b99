# File: deadlink_finder/report/sink.py
"""Потокобезопасный канал находок сканирования (FIFO)."""

from __future__ import annotations

import queue
import threading
from typing import Callable, List, Optional

from deadlink_finder.crawler.models import Finding
from deadlink_finder.logger import logger

FindingCallback = Callable[[Finding], None]


class ReportSink:
    """
    Append-only канал находок.

    Производитель (поток сканирования) вызывает :meth:`put` и никогда не
    блокируется; потребитель забирает находки через :meth:`get` / :meth:`drain`
    в порядке поступления. Подписчики из :meth:`subscribe` вызываются в потоке
    производителя, поэтому должны быстро передавать данные дальше; долгую
    обработку лучше вести через :meth:`dispatch` в своём потоке.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Finding] = queue.SimpleQueue()
        self._history: List[Finding] = []
        self._subscribers: List[FindingCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: FindingCallback) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def put(self, finding: Finding) -> None:
        with self._lock:
            self._history.append(finding)
            subscribers = list(self._subscribers)
        self._queue.put(finding)
        for callback in subscribers:
            try:
                callback(finding)
            except Exception:
                logger.exception("Finding subscriber %r failed", callback)

    def get(self, timeout: Optional[float] = None) -> Optional[Finding]:
        """Следующая находка или None, если за timeout ничего не пришло."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[Finding]:
        """Забирает все накопленные, но ещё не прочитанные находки."""
        items: List[Finding] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                return items

    def dispatch(self, callback: FindingCallback, timeout: Optional[float] = None) -> int:
        """
        Передаёт накопленные находки в *callback* в потоке вызывающего.

        Медленный потребитель не тормозит обход: ждёт первую находку не
        дольше *timeout*, затем забирает остальное без ожидания.
        Возвращает число переданных находок.
        """
        first = self.get(timeout=timeout) if timeout else None
        batch = ([first] if first is not None else []) + self.drain()
        for finding in batch:
            callback(finding)
        return len(batch)

    def findings(self) -> List[Finding]:
        with self._lock:
            return list(self._history)

    def text(self) -> str:
        """Накопленный текст отчёта, по строке на находку."""
        return "".join(f"{f.as_line()}\n" for f in self.findings())

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
        self.drain()

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)
