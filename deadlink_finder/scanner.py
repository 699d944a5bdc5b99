# === FILE: deadlink_finder/scanner.py ===
"""
Модуль-обёртка для запуска одного сканирования без потоков и UI.
"""
from typing import Callable, Optional

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.crawler import DeadLinkCrawler
from deadlink_finder.crawler.fetcher import Fetcher
from deadlink_finder.crawler.models import CrawlJob, ScanStatus
from deadlink_finder.report.sink import ReportSink

FetcherFactory = Callable[[ScannerConfig], Fetcher]


def make_job(seed_url: str, cfg: ScannerConfig) -> CrawlJob:
    return CrawlJob(seed_url, max_depth=cfg.max_depth, max_links=cfg.max_links)


async def scan_site(
    job: CrawlJob,
    sink: ReportSink,
    cfg: Optional[ScannerConfig] = None,
    fetcher_factory: FetcherFactory = Fetcher,
) -> ScanStatus:
    """
    Выполняет обход в текущем event loop и возвращает итоговый статус.

    Parameters
    ----------
    job : CrawlJob
        Параметры сканирования и флаг отмены.
    sink : ReportSink
        Куда складываются находки, включая завершающую.
    cfg : ScannerConfig, optional
        Таймаут, User-Agent и способ извлечения ссылок.
    fetcher_factory : callable
        Фабрика асинхронного контекстного менеджера Fetcher.
    """
    cfg = cfg or ScannerConfig()
    async with fetcher_factory(cfg) as fetcher:
        crawler = DeadLinkCrawler(fetcher, sink, cfg)
        return await crawler.crawl(job)


__all__ = ["scan_site", "make_job", "FetcherFactory"]
