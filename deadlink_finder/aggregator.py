# File: deadlink_finder/aggregator.py
"""deadlink_finder.aggregator: Сводка результатов сканирования для экспорта."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from deadlink_finder.crawler.models import Finding, FindingKind, ScanStatus


class DeadLinkInfo(TypedDict):
    """Битая ссылка и код ответа."""

    url: str
    status: int


@dataclass(slots=True)
class ScanReport:
    """Итог одного сканирования: битые и недоступные ссылки в порядке обнаружения."""

    seed_url: str
    status: Optional[ScanStatus] = None
    dead_links: List[DeadLinkInfo] = field(default_factory=list)
    unreachable: List[str] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "status": self.status.value if self.status else None,
            "dead_links": list(self.dead_links),
            "unreachable": list(self.unreachable),
            "findings": [f.to_dict() for f in self.findings],
        }

    def json(self, *, pretty: bool = False) -> str:
        """JSON-представление отчёта."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)

    def text(self) -> str:
        """Текст отчёта в том виде, в каком он показывался во время сканирования."""
        return "".join(f"{f.as_line()}\n" for f in self.findings)


def aggregate_findings(seed_url: str, findings: Sequence[Finding]) -> ScanReport:
    """Собирает ScanReport из потока находок."""
    report = ScanReport(seed_url=seed_url, findings=list(findings))
    for finding in findings:
        if finding.kind is FindingKind.DEAD and finding.url is not None:
            report.dead_links.append({"url": finding.url, "status": finding.status or 0})
        elif finding.kind is FindingKind.UNREACHABLE and finding.url is not None:
            report.unreachable.append(finding.url)
        elif finding.kind is FindingKind.COMPLETED:
            report.status = ScanStatus.COMPLETED
        elif finding.kind is FindingKind.STOPPED:
            report.status = ScanStatus.STOPPED
    return report
