"""
Cache Refresh Scheduler
Background task that keeps a fixed country x category matrix of the article
cache warm, independently of user traffic:
1. Wait the initial delay after startup
2. Fetch every pair of the matrix concurrently
3. Overwrite the cache entry of every pair that succeeded
4. Repeat every refresh interval, measured from run start, until shutdown
"""

import asyncio
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from .article_cache import ArticleCacheStore, cache_key_label
from .newsapi_client import NewsApiClient

logger = structlog.get_logger(__name__)


class CacheRefreshScheduler:
    """Proactive refresh of the article cache"""

    def __init__(
        self,
        cache: ArticleCacheStore,
        fetcher: Optional[NewsApiClient],
        countries: Sequence[str],
        categories: Sequence[str],
        initial_delay_seconds: float = 60.0,
        interval_seconds: float = 600.0,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.countries = list(countries)
        self.categories = list(categories)
        self.initial_delay_seconds = initial_delay_seconds
        self.interval_seconds = interval_seconds
        self.runs_completed = 0
        self.last_run: Optional[Dict[str, Any]] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        return [(country, category) for country in self.countries for category in self.categories]

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the refresh loop on the running event loop"""
        if self.fetcher is None:
            logger.info("cache_refresh_skipped", reason="NEWS_API_KEY not configured")
            return
        if self.is_running:
            return

        logger.info(
            "cache_refresh_scheduled",
            pairs=len(self.pairs),
            initial_delay_seconds=self.initial_delay_seconds,
            interval_seconds=self.interval_seconds,
        )
        self._task = asyncio.create_task(self._run_forever(), name="article-cache-refresh")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("cache_refresh_stopped", runs_completed=self.runs_completed)

    async def _run_forever(self) -> None:
        loop = asyncio.get_running_loop()
        await asyncio.sleep(self.initial_delay_seconds)
        next_run = loop.time()
        while True:
            await self.run_once()
            # Fixed rate: runs start on interval boundaries; a run that overruns
            # its slot is followed immediately by the next one
            next_run = max(next_run + self.interval_seconds, loop.time())
            await asyncio.sleep(next_run - loop.time())

    async def run_once(self) -> Dict[str, Any]:
        """
        Refresh every pair of the matrix once

        Returns:
            Dict with run statistics
        """
        stats: Dict[str, Any] = {
            "total": len(self.pairs),
            "successful": 0,
            "failed": 0,
            "failed_keys": [],
            "duration_seconds": 0.0,
        }

        if self.fetcher is None:
            logger.info("cache_refresh_skipped", reason="NEWS_API_KEY not configured")
            self.last_run = stats
            return stats

        started = time.monotonic()
        logger.info("cache_refresh_started", pairs=stats["total"])

        results = await asyncio.gather(
            *(self._refresh_pair(country, category) for country, category in self.pairs)
        )

        for (country, category), succeeded in zip(self.pairs, results):
            if succeeded:
                stats["successful"] += 1
            else:
                stats["failed"] += 1
                stats["failed_keys"].append(cache_key_label(country, category))

        stats["duration_seconds"] = round(time.monotonic() - started, 3)
        self.runs_completed += 1
        self.last_run = stats

        logger.info(
            "cache_refresh_completed",
            successful=stats["successful"],
            failed=stats["failed"],
            duration_seconds=stats["duration_seconds"],
        )
        return stats

    async def _refresh_pair(self, country: str, category: str) -> bool:
        key = cache_key_label(country, category)
        try:
            articles = await self.fetcher.fetch(country, category)
        except Exception as e:
            logger.error("cache_refresh_pair_failed", key=key, error=str(e))
            return False

        self.cache.put(country, category, articles)
        return True
