"""
News Service for API endpoints
Combines the article cache with each user's preferences and read/favorite marks
"""

from typing import Optional

from .article_cache import ArticleCacheStore
from .article_resolver import ArticleResolver
from .article_state import annotate_articles, filter_by_ids, search_articles
from .preferences import category_for_preferences, country_for_languages
from ..schemas.responses import (
    NewsFeedResponse,
    NewsArticleListResponse,
    NewsSearchResponse,
    NewsFilters,
    UserPreferencesFilter,
)
from ...models.user import User
from ...repositories.user_repository import InMemoryUserRepository


class NewsService:
    """Per-user news views over the shared article cache"""

    def __init__(
        self,
        cache: ArticleCacheStore,
        users: InMemoryUserRepository,
        resolver: Optional[ArticleResolver] = None,
    ):
        self.cache = cache
        self.users = users
        self.resolver = resolver

    async def get_feed(self, user: User) -> NewsFeedResponse:
        """
        Resolve the user's feed from their preferences

        Raises:
            NoCacheAvailableError: upstream failed and nothing is cached for the key
        """
        if self.resolver is None:
            raise RuntimeError("News feed requested without a configured NewsAPI client")

        categories = list(user.preferences.categories)
        languages = list(user.preferences.languages)
        country = country_for_languages(languages)
        category = category_for_preferences(categories)

        resolved = await self.resolver.resolve(country, category)
        read_ids, favorite_ids = self.users.get_article_state(user.id)
        articles = annotate_articles(resolved.articles, read_ids, favorite_ids)

        return NewsFeedResponse(
            articles=articles,
            total=len(articles),
            from_cache=resolved.from_cache,
            filters=NewsFilters(
                country=country,
                category=category,
                user_preferences=UserPreferencesFilter(categories=categories, languages=languages),
            ),
        )

    def mark_read(self, user: User, article_id: str) -> None:
        self.users.mark_read(user.id, article_id)

    def mark_favorite(self, user: User, article_id: str) -> None:
        self.users.mark_favorite(user.id, article_id)

    def get_read_articles(self, user: User) -> NewsArticleListResponse:
        read_ids, favorite_ids = self.users.get_article_state(user.id)
        matches = filter_by_ids(self.cache.all_articles(), read_ids)
        articles = annotate_articles(matches, read_ids, favorite_ids)
        return NewsArticleListResponse(articles=articles, total=len(articles))

    def get_favorite_articles(self, user: User) -> NewsArticleListResponse:
        read_ids, favorite_ids = self.users.get_article_state(user.id)
        matches = filter_by_ids(self.cache.all_articles(), favorite_ids)
        articles = annotate_articles(matches, read_ids, favorite_ids)
        return NewsArticleListResponse(articles=articles, total=len(articles))

    def search(self, user: User, keyword: str) -> NewsSearchResponse:
        read_ids, favorite_ids = self.users.get_article_state(user.id)
        matches = search_articles(self.cache.all_articles(), keyword)
        articles = annotate_articles(matches, read_ids, favorite_ids)
        return NewsSearchResponse(articles=articles, total=len(articles), keyword=keyword)
