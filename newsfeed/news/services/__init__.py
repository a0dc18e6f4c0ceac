from .article_cache import ArticleCacheStore, CacheEntry
from .article_resolver import ArticleResolver, ResolvedArticles
from .cache_refresh_scheduler import CacheRefreshScheduler
from .newsapi_client import NewsApiClient
from .news_service import NewsService

__all__ = [
    "ArticleCacheStore",
    "CacheEntry",
    "ArticleResolver",
    "ResolvedArticles",
    "CacheRefreshScheduler",
    "NewsApiClient",
    "NewsService",
]
