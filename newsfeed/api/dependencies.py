from datetime import timedelta
from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import get_settings
from ..core.security import decode_access_token
from ..exceptions import AuthenticationError
from ..models.user import User
from ..news.services.article_cache import ArticleCacheStore
from ..news.services.article_resolver import ArticleResolver
from ..news.services.cache_refresh_scheduler import CacheRefreshScheduler
from ..news.services.news_service import NewsService
from ..news.services.newsapi_client import NewsApiClient
from ..repositories.user_repository import InMemoryUserRepository

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


@lru_cache()
def get_cache_store() -> ArticleCacheStore:
    settings = get_settings()
    retention = None
    if settings.aggregate_retention_seconds is not None:
        retention = timedelta(seconds=settings.aggregate_retention_seconds)
    return ArticleCacheStore(
        ttl=timedelta(seconds=settings.cache_ttl_seconds),
        aggregate_retention=retention,
    )


@lru_cache()
def get_user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@lru_cache()
def get_news_api_client() -> Optional[NewsApiClient]:
    settings = get_settings()
    if not settings.news_api_key:
        return None
    return NewsApiClient(
        api_key=settings.news_api_key,
        base_url=settings.news_api_base_url,
        timeout=settings.news_api_timeout_seconds,
        page_size=settings.news_api_page_size,
    )


@lru_cache()
def get_article_resolver() -> Optional[ArticleResolver]:
    client = get_news_api_client()
    if client is None:
        return None
    return ArticleResolver(get_cache_store(), client)


@lru_cache()
def get_refresh_scheduler() -> CacheRefreshScheduler:
    settings = get_settings()
    return CacheRefreshScheduler(
        cache=get_cache_store(),
        fetcher=get_news_api_client(),
        countries=settings.refresh_countries,
        categories=settings.refresh_categories,
        initial_delay_seconds=settings.refresh_initial_delay_seconds,
        interval_seconds=settings.refresh_interval_seconds,
    )


def get_news_service(
    cache: ArticleCacheStore = Depends(get_cache_store),
    users: InMemoryUserRepository = Depends(get_user_repository),
    resolver: Optional[ArticleResolver] = Depends(get_article_resolver),
) -> NewsService:
    return NewsService(cache, users, resolver)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail={"error": "Unauthorized", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: InMemoryUserRepository = Depends(get_user_repository),
) -> User:
    if not credentials:
        if request.headers.get("Authorization"):
            raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")
        raise _unauthorized("Authorization header is required. Format: Authorization: Bearer <token>")

    if not credentials.credentials.strip():
        raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")

    try:
        payload = decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        logger.info("auth_token_rejected", error_code=e.error_code)
        raise _unauthorized(e.message)

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token: missing user ID")

    user = users.get(user_id)
    if not user:
        raise _unauthorized("User not found. Token may be invalid or user may have been deleted.")
    return user
