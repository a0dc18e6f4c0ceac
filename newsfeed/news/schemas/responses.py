"""News API response schemas"""

from typing import List, Optional
from pydantic import BaseModel


# ============================================================================
# Article views
# ============================================================================

class NewsArticleView(BaseModel):
    """Cached article annotated with the current user's read/favorite marks"""
    id: str
    title: str
    description: Optional[str] = None
    url: str
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None
    source: str
    is_read: bool = False
    is_favorite: bool = False


# ============================================================================
# List responses
# ============================================================================

class UserPreferencesFilter(BaseModel):
    categories: List[str] = []
    languages: List[str] = []


class NewsFilters(BaseModel):
    """Locator the feed was resolved with"""
    country: str
    category: str
    user_preferences: UserPreferencesFilter


class NewsFeedResponse(BaseModel):
    """Response for the personalized feed endpoint"""
    articles: List[NewsArticleView]
    total: int
    from_cache: bool
    filters: NewsFilters


class NewsArticleListResponse(BaseModel):
    """Response for read and favorites listings"""
    articles: List[NewsArticleView]
    total: int


class NewsSearchResponse(NewsArticleListResponse):
    keyword: str


# ============================================================================
# Marks
# ============================================================================

class ArticleMarkResponse(BaseModel):
    message: str
    article_id: str
