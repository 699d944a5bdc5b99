# deadlink_finder/report/text_report.py
"""Экспорт текста отчёта в файл (аналог кнопки «Export to File»)."""
from pathlib import Path

from deadlink_finder.aggregator import ScanReport

DEFAULT_FILENAME = "deadlinks.txt"


def render_text(report: ScanReport, output_path: Path | str = DEFAULT_FILENAME) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    header = f"Scanning for dead links: {report.seed_url}\n"
    output.write_text(header + report.text(), encoding="utf-8")
    return output
