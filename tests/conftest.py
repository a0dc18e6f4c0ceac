import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, AsyncMock

from newsfeed.news.models.article import Article
from newsfeed.news.services.article_cache import ArticleCacheStore
from newsfeed.news.services.article_resolver import ArticleResolver
from newsfeed.news.services.cache_refresh_scheduler import CacheRefreshScheduler
from newsfeed.repositories.user_repository import InMemoryUserRepository


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def cache_store(clock):
    return ArticleCacheStore(ttl=timedelta(minutes=5), clock=clock)


@pytest.fixture
def make_article():
    def _make(index: int, prefix: str = "story", **overrides) -> Article:
        fields = {
            "title": f"{prefix.title()} headline {index}",
            "url": f"https://news.example.com/{prefix}/{index}",
            "description": f"Description of {prefix} {index}",
            "url_to_image": f"https://img.example.com/{prefix}/{index}.jpg",
            "published_at": f"2024-05-01T10:{index:02d}:00Z",
            "source": "Example Wire",
        }
        fields.update(overrides)
        return Article.create(**fields)
    return _make


@pytest.fixture
def mock_fetcher():
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=[])
    return fetcher


@pytest.fixture
def resolver(cache_store, mock_fetcher):
    return ArticleResolver(cache_store, mock_fetcher)


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def sample_newsapi_payload():
    return {
        "status": "ok",
        "totalResults": 3,
        "articles": [
            {
                "source": {"id": "bbc-news", "name": "BBC News"},
                "author": "BBC",
                "title": "Markets rally on rate cut hopes",
                "description": "Stocks climbed for a third day.",
                "url": "https://www.bbc.co.uk/news/business-1",
                "urlToImage": "https://ichef.bbci.co.uk/1.jpg",
                "publishedAt": "2024-05-01T09:30:00Z",
                "content": "..."
            },
            {
                "source": {"id": None, "name": None},
                "title": "Untitled source story",
                "description": None,
                "url": "https://example.org/story-2",
                "urlToImage": None,
                "publishedAt": "2024-05-01T08:00:00Z"
            },
            {
                "source": {"id": None, "name": "Dropped"},
                "title": None,
                "url": "https://example.org/no-title",
                "publishedAt": "2024-05-01T07:00:00Z"
            }
        ]
    }


@pytest.fixture
async def async_client(cache_store, user_repository, resolver, mock_fetcher):
    from httpx import AsyncClient, ASGITransport
    from newsfeed.main import app
    from newsfeed.api.dependencies import (
        get_article_resolver,
        get_cache_store,
        get_refresh_scheduler,
        get_user_repository,
    )

    scheduler = CacheRefreshScheduler(
        cache=cache_store,
        fetcher=mock_fetcher,
        countries=["us"],
        categories=["general"],
    )

    app.dependency_overrides[get_cache_store] = lambda: cache_store
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_article_resolver] = lambda: resolver
    app.dependency_overrides[get_refresh_scheduler] = lambda: scheduler

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(async_client):
    async def _register(email: str = "reader@example.com", password: str = "correct-horse", name: str = "Reader"):
        response = await async_client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201
        login = await async_client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200
        return {"Authorization": f"Bearer {login.json()['token']}"}
    return _register
