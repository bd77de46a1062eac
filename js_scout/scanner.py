# === FILE: js_scout/scanner.py ===
"""
Wrapper coroutine for running a crawl.
"""
from collections.abc import Iterable

from js_scout.config import ScoutConfig
from js_scout.crawler.crawler import AsyncCrawler, Sink


async def start_scan(cfg: ScoutConfig, seeds: Iterable[str], sink: Sink) -> int:
    """
    Run the crawler inside its session context and stream results to *sink*.

    Parameters
    ----------
    cfg : ScoutConfig
        Crawl configuration.
    seeds : Iterable[str]
        Seed URLs, one per item; blank items are skipped.
    sink : Sink
        Called once per discovered URL.

    Returns
    -------
    int
        Number of URLs passed to *sink*.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl(seeds, sink)

__all__ = ["start_scan"]
