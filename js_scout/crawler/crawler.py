# === FILE: js_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import concurrent.futures
import threading
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import Optional, Set, Union

from aiohttp import ClientSession

from js_scout.config import ScoutConfig
from js_scout.crawler.fetcher import Fetcher, open_session
from js_scout.logger import logger
from js_scout.parser.bundle_parser import extract_chunk_urls
from js_scout.parser.html_parser import extract_scripts

__all__ = ("AsyncCrawler", "Sink")

Sink = Callable[[str], Union[None, Awaitable[None]]]

_STOP = object()


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def _hand_over(
    loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[object], item: object
) -> bool:
    """Put *item* on *queue* from a foreign thread; False once the loop is gone."""
    try:
        asyncio.run_coroutine_threadsafe(queue.put(item), loop).result()
    except (RuntimeError, concurrent.futures.CancelledError):
        return False
    return True


def _read_lines(
    seeds: Iterable[str], lines: asyncio.Queue[object], loop: asyncio.AbstractEventLoop
) -> None:
    # daemon thread, never joined
    item: object = _STOP
    try:
        for line in seeds:
            if not _hand_over(loop, lines, line):
                return
    except Exception as exc:
        item = exc
    _hand_over(loop, lines, item)


class AsyncCrawler:
    """Discovers JavaScript URLs reachable from a stream of seed pages.

    A feeder hands seed URLs to ``config.workers`` worker tasks through a
    one-slot queue; workers hand discovered URLs to a single sink task the
    same way, so neither side can run ahead of the other.  Each worker keeps
    its own set of URLs it has already fetched or emitted.
    """

    def __init__(self, config: ScoutConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.emitted = 0

    async def __aenter__(self) -> AsyncCrawler:
        self.session = open_session(self.config)
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seeds: Iterable[str], sink: Sink) -> int:
        """Crawl every non-empty line of *seeds*, passing each discovered URL to *sink*.

        *sink* may be a plain function or a coroutine function.  Returns the
        number of URLs handed to the sink.
        """
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info("Starting crawl with %d worker(s)", self.config.workers)
        start = time.monotonic()
        self.emitted = 0

        work: asyncio.Queue[object] = asyncio.Queue(maxsize=1)
        results: asyncio.Queue[object] = asyncio.Queue(maxsize=1)

        sink_task = asyncio.create_task(self._drain(results, sink))
        workers = [
            asyncio.create_task(self._worker(self.fetcher, work, results))
            for _ in range(self.config.workers)
        ]
        feeder = asyncio.create_task(self._feed(seeds, work))
        closer = asyncio.create_task(self._close(workers, results))
        tasks = (feeder, closer, sink_task, *workers)
        try:
            await asyncio.gather(feeder, closer, sink_task)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        duration = time.monotonic() - start
        logger.info("Finished: %d URL(s) in %.2f s", self.emitted, duration)
        return self.emitted

    # alias for compatibility
    run = crawl

    async def _feed(self, seeds: Iterable[str], work: asyncio.Queue[object]) -> None:
        lines: asyncio.Queue[object] = asyncio.Queue(maxsize=1)
        reader = threading.Thread(
            target=_read_lines,
            args=(seeds, lines, asyncio.get_running_loop()),
            name="js-scout-seeds",
            daemon=True,
        )
        reader.start()
        while True:
            line = await lines.get()
            if line is _STOP:
                break
            if isinstance(line, Exception):
                raise line
            url = str(line).strip()
            if url:
                await work.put(url)
        for _ in range(self.config.workers):
            await work.put(_STOP)

    async def _close(
        self, workers: list[asyncio.Task[None]], results: asyncio.Queue[object]
    ) -> None:
        await asyncio.gather(*workers)
        await results.put(_STOP)

    async def _drain(self, results: asyncio.Queue[object], sink: Sink) -> None:
        while True:
            item = await results.get()
            if item is _STOP:
                break
            outcome = sink(item)  # type: ignore[arg-type]
            if asyncio.iscoroutine(outcome):
                await outcome
            self.emitted += 1

    async def _worker(
        self, fetcher: Fetcher, work: asyncio.Queue[object], results: asyncio.Queue[object]
    ) -> None:
        seen: Set[str] = set()
        while True:
            url = await work.get()
            if url is _STOP:
                break
            await self._process(fetcher, url, seen, results)  # type: ignore[arg-type]

    async def _process(
        self, fetcher: Fetcher, url: str, seen: Set[str], results: asyncio.Queue[object]
    ) -> None:
        """Fetch one seed page and emit its scripts, expanding bundles in line."""
        if url in seen:
            return
        seen.add(url)

        page = await fetcher.fetch(url)
        if page is None:
            return

        for ref in extract_scripts(page):
            if ref.url in seen:
                continue
            seen.add(ref.url)
            await results.put(ref.url)
            if not ref.bundle:
                continue
            bundle = await fetcher.fetch(ref.url)
            if bundle is None:
                continue
            for chunk_url in extract_chunk_urls(ref.url, _decode(bundle.content)):
                if chunk_url in seen:
                    continue
                seen.add(chunk_url)
                await results.put(chunk_url)
