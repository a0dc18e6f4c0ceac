"""
On-demand article resolution for one (country, category) pair.

Preference order:
1. Fresh cache entry
2. Live NewsAPI fetch, written back to the cache
3. Stale cache entry when the live fetch fails
4. NoCacheAvailableError
"""

from dataclasses import dataclass
from typing import List

import structlog

from ..models.article import Article
from .article_cache import ArticleCacheStore, cache_key_label
from .newsapi_client import NewsApiClient
from ...exceptions import NoCacheAvailableError, UpstreamError

logger = structlog.get_logger(__name__)


@dataclass
class ResolvedArticles:
    articles: List[Article]
    from_cache: bool
    served_stale: bool = False


class ArticleResolver:
    """Serves article lists for user requests from cache or upstream"""

    def __init__(self, cache: ArticleCacheStore, fetcher: NewsApiClient):
        self.cache = cache
        self.fetcher = fetcher
        self.stats = {
            "cache_hits": 0,
            "upstream_fetches": 0,
            "stale_served": 0,
            "failures": 0,
        }

    async def resolve(self, country: str, category: str) -> ResolvedArticles:
        key = cache_key_label(country, category)
        cached = self.cache.get(country, category)

        if self.cache.is_fresh(cached):
            self.stats["cache_hits"] += 1
            logger.debug("article_cache_hit", key=key, articles=len(cached.articles))
            return ResolvedArticles(articles=list(cached.articles), from_cache=True)

        try:
            articles = await self.fetcher.fetch(country, category)
        except UpstreamError as e:
            if cached is not None:
                self.stats["stale_served"] += 1
                logger.warning(
                    "serving_stale_cache",
                    key=key,
                    error_code=e.error_code,
                    error=e.message,
                    fetched_at=cached.fetched_at.isoformat(),
                )
                return ResolvedArticles(articles=list(cached.articles), from_cache=True, served_stale=True)

            self.stats["failures"] += 1
            logger.error("article_resolution_failed", key=key, error_code=e.error_code, error=e.message)
            raise NoCacheAvailableError(country, category, e) from e

        self.cache.put(country, category, articles)
        self.stats["upstream_fetches"] += 1
        return ResolvedArticles(articles=list(articles), from_cache=False)
