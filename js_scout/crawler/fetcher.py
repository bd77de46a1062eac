# js_scout/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call, bounded by the client-wide timeout.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from js_scout.config import ScoutConfig
from js_scout.crawler.models import PageData
from js_scout.logger import logger


def open_session(config: ScoutConfig) -> ClientSession:
    """Build the shared session: timeout, TLS policy and User-Agent from *config*."""
    headers = {"User-Agent": config.user_agent} if config.user_agent else None
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        connector=TCPConnector(ssl=config.verify_ssl),
        headers=headers,
        raise_for_status=False,
    )


class Fetcher:
    """Plain GET without retries; any failure yields ``None``."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> Optional[PageData]:
        """
        Fetch *url* and return its body whatever the status code.

        Transport errors, timeouts and malformed URLs are logged at DEBUG
        level and reported as ``None``.
        """
        try:
            async with self.session.get(url) as resp:
                body = await resp.read()
        except asyncio.TimeoutError:
            logger.debug("Timeout fetching %s", url)
            return None
        except (ClientError, ValueError) as exc:
            logger.debug("Failed %s: %s", url, exc)
            return None
        return PageData(url, body)
