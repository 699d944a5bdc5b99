# File: deadlink_finder/report/__init__.py
"""deadlink_finder.report: канал находок и экспорт отчётов (текст, JSON, HTML)."""

from __future__ import annotations

from deadlink_finder.report.sink import ReportSink

__all__ = ["ReportSink"]
