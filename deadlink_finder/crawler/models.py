# deadlink_finder/crawler/models.py
"""
Data models for the DeadLinkFinder crawler.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from deadlink_finder.crawler.link_extractor import CrawlTarget, origin_of

__all__ = (
    "CrawlTarget",
    "CrawlJob",
    "FailureKind",
    "FetchFailure",
    "Finding",
    "FindingKind",
    "PageDocument",
    "ScanStatus",
    "MAX_DEPTH",
    "MAX_LINKS",
)

MAX_DEPTH = 3
MAX_LINKS = 1000


class ScanStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"


class FindingKind(str, Enum):
    UNREACHABLE = "unreachable"
    DEAD = "dead"
    COMPLETED = "completed"
    STOPPED = "stopped"


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    TRANSPORT = "transport"


@dataclass(frozen=True, slots=True)
class Finding:
    """One reportable event of a scan."""

    kind: FindingKind
    url: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def unreachable(cls, url: str) -> Finding:
        return cls(FindingKind.UNREACHABLE, url)

    @classmethod
    def dead(cls, url: str, status: int) -> Finding:
        return cls(FindingKind.DEAD, url, status)

    @classmethod
    def completed(cls) -> Finding:
        return cls(FindingKind.COMPLETED)

    @classmethod
    def stopped(cls) -> Finding:
        return cls(FindingKind.STOPPED)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (FindingKind.COMPLETED, FindingKind.STOPPED)

    def as_line(self) -> str:
        """Human-readable report line."""
        if self.kind is FindingKind.UNREACHABLE:
            return f"Unreachable or missing: {self.url}"
        if self.kind is FindingKind.DEAD:
            return f"Dead link ({self.status}): {self.url}"
        if self.kind is FindingKind.STOPPED:
            return "--- Scan stopped by user ---"
        return "--- Scan complete ---"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "url": self.url, "status": self.status}

    def __str__(self) -> str:
        return self.as_line()


@dataclass(slots=True)
class PageDocument:
    """Fetched HTML text of one URL."""

    url: str
    content: str


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Transport-level failure of a single request."""

    kind: FailureKind
    url: str
    reason: str = ""


@dataclass(slots=True)
class CrawlJob:
    """
    Parameters of one scan.

    The cancellation flag is a :class:`threading.Event`: it is set from the
    controlling thread and only read by the traversal.
    """

    seed_url: str
    max_depth: int = MAX_DEPTH
    max_links: int = MAX_LINKS
    origin: str = field(init=False)
    _cancel: threading.Event = field(default_factory=threading.Event, repr=False)

    def __post_init__(self) -> None:
        self.origin = origin_of(self.seed_url)

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()
