from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...dependencies import get_article_resolver, get_cache_store, get_refresh_scheduler
from ....config import get_settings
from ....news.services.article_cache import ArticleCacheStore
from ....news.services.article_resolver import ArticleResolver
from ....news.services.cache_refresh_scheduler import CacheRefreshScheduler

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check(
    cache: ArticleCacheStore = Depends(get_cache_store),
    resolver: Optional[ArticleResolver] = Depends(get_article_resolver),
    scheduler: CacheRefreshScheduler = Depends(get_refresh_scheduler),
) -> Dict[str, Any]:
    upstream_status = "configured" if resolver is not None else "not_configured"

    return {
        "status": "healthy",
        "service": "Newsfeed API",
        "version": "0.1.0",
        "environment": "development" if settings.debug else "production",
        "upstream": upstream_status,
        "cache": {
            "keys": len(cache),
            "entries": cache.summary(),
        },
        "resolver": dict(resolver.stats) if resolver is not None else None,
        "refresh": {
            "running": scheduler.is_running,
            "runs_completed": scheduler.runs_completed,
            "last_run": scheduler.last_run,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
