import structlog
from fastapi import APIRouter, Depends, HTTPException

from ...dependencies import get_current_user, get_news_service
from ....exceptions import NoCacheAvailableError
from ....models.user import User
from ....news.schemas.responses import (
    ArticleMarkResponse,
    NewsArticleListResponse,
    NewsFeedResponse,
    NewsSearchResponse,
)
from ....news.services.news_service import NewsService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=NewsFeedResponse)
async def get_news_feed(
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    """Top headlines for the user's first language and first supported category"""
    if news_service.resolver is None:
        raise HTTPException(
            status_code=500,
            detail={"error": "News API key not configured. Please set NEWS_API_KEY environment variable."}
        )

    try:
        return await news_service.get_feed(user)
    except NoCacheAvailableError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": e.public_error, "details": e.cause.message}
        )


@router.get("/read", response_model=NewsArticleListResponse)
async def get_read_articles(
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    """Read articles that are still present somewhere in the cache"""
    return news_service.get_read_articles(user)


@router.get("/favorites", response_model=NewsArticleListResponse)
async def get_favorite_articles(
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    """Favorite articles that are still present somewhere in the cache"""
    return news_service.get_favorite_articles(user)


@router.get("/search/{keyword}", response_model=NewsSearchResponse)
async def search_news(
    keyword: str,
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    """Substring search over titles and descriptions of every cached article"""
    if not keyword or not keyword.strip():
        raise HTTPException(status_code=400, detail={"error": "Keyword is required"})

    return news_service.search(user, keyword)


@router.post("/{article_id}/read", response_model=ArticleMarkResponse)
async def mark_article_read(
    article_id: str,
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    news_service.mark_read(user, article_id)
    logger.debug("article_marked_read", user_id=user.id, article_id=article_id)
    return ArticleMarkResponse(message="Article marked as read", article_id=article_id)


@router.post("/{article_id}/favorite", response_model=ArticleMarkResponse)
async def mark_article_favorite(
    article_id: str,
    user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    news_service.mark_favorite(user, article_id)
    logger.debug("article_marked_favorite", user_id=user.id, article_id=article_id)
    return ArticleMarkResponse(message="Article marked as favorite", article_id=article_id)
