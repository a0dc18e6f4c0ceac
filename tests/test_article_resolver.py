import httpx
import pytest

from newsfeed.exceptions import (
    NoCacheAvailableError,
    UpstreamAuthError,
    UpstreamMalformedError,
    UpstreamRateLimitedError,
    UpstreamServerError,
    UpstreamTimeoutError,
)
from newsfeed.news.services.article_resolver import ArticleResolver
from newsfeed.news.services.newsapi_client import NewsApiClient


class TestArticleResolver:
    @pytest.mark.asyncio
    async def test_fresh_entry_is_served_without_fetch(self, resolver, cache_store, mock_fetcher, make_article):
        cache_store.put("us", "general", [make_article(1)])

        result = await resolver.resolve("us", "general")

        assert result.from_cache
        assert not result.served_stale
        assert [a.title for a in result.articles] == ["Story headline 1"]
        mock_fetcher.fetch.assert_not_called()
        assert resolver.stats["cache_hits"] == 1

    @pytest.mark.asyncio
    async def test_miss_fetches_and_writes_back(self, resolver, cache_store, mock_fetcher, make_article):
        fetched = [make_article(1), make_article(2)]
        mock_fetcher.fetch.return_value = fetched

        result = await resolver.resolve("gb", "sports")

        mock_fetcher.fetch.assert_awaited_once_with("gb", "sports")
        assert not result.from_cache
        assert result.articles == fetched
        assert list(cache_store.get("gb", "sports").articles) == fetched
        assert cache_store.is_fresh(cache_store.get("gb", "sports"))
        assert resolver.stats["upstream_fetches"] == 1

    @pytest.mark.asyncio
    async def test_expired_entry_is_refetched(self, resolver, cache_store, clock, mock_fetcher, make_article):
        cache_store.put("us", "general", [make_article(1)])
        clock.advance(minutes=5)
        mock_fetcher.fetch.return_value = [make_article(9)]

        result = await resolver.resolve("us", "general")

        assert not result.from_cache
        assert [a.title for a in result.articles] == ["Story headline 9"]

    @pytest.mark.asyncio
    async def test_stale_entry_is_served_when_upstream_fails(self, resolver, cache_store, clock, mock_fetcher, make_article):
        cached = [make_article(1), make_article(2)]
        cache_store.put("us", "general", cached)
        clock.advance(minutes=30)
        mock_fetcher.fetch.side_effect = UpstreamServerError("boom")

        result = await resolver.resolve("us", "general")

        assert result.from_cache
        assert result.served_stale
        assert result.articles == cached
        assert resolver.stats["stale_served"] == 1

    @pytest.mark.asyncio
    async def test_stale_fallback_does_not_touch_entry(self, resolver, cache_store, clock, mock_fetcher, make_article):
        entry = cache_store.put("us", "general", [make_article(1)])
        clock.advance(minutes=10)
        mock_fetcher.fetch.side_effect = UpstreamTimeoutError("slow")

        await resolver.resolve("us", "general")

        assert cache_store.get("us", "general") is entry

    @pytest.mark.parametrize(
        "error,status_code,public_error",
        [
            (UpstreamAuthError("Invalid API key"), 502, "News API authentication failed"),
            (UpstreamRateLimitedError("slow down"), 502, "News API rate limit exceeded"),
            (UpstreamServerError("down"), 502, "News API server error"),
            (UpstreamTimeoutError("no response"), 502, "News API request timeout"),
            (UpstreamMalformedError("garbage"), 500, "Failed to fetch news"),
        ],
    )
    @pytest.mark.asyncio
    async def test_failure_without_cache_raises(self, resolver, cache_store, mock_fetcher, error, status_code, public_error):
        mock_fetcher.fetch.side_effect = error

        with pytest.raises(NoCacheAvailableError) as exc_info:
            await resolver.resolve("us", "general")

        assert exc_info.value.cause is error
        assert exc_info.value.status_code == status_code
        assert exc_info.value.public_error == public_error
        assert cache_store.get("us", "general") is None
        assert resolver.stats["failures"] == 1

    @pytest.mark.asyncio
    async def test_ttl_scenario(self, resolver, cache_store, clock, mock_fetcher, make_article):
        first_batch = [make_article(i) for i in range(3)]
        cache_store.put("us", "general", first_batch)

        clock.advance(minutes=4)
        at_four = await resolver.resolve("us", "general")
        assert at_four.from_cache
        assert at_four.articles == first_batch
        mock_fetcher.fetch.assert_not_called()

        clock.advance(minutes=2)
        mock_fetcher.fetch.side_effect = UpstreamServerError("down")
        at_six_failing = await resolver.resolve("us", "general")
        assert at_six_failing.from_cache
        assert at_six_failing.articles == first_batch

        replacement = [make_article(i, prefix="fresh") for i in range(5)]
        mock_fetcher.fetch.side_effect = None
        mock_fetcher.fetch.return_value = replacement
        at_six_ok = await resolver.resolve("us", "general")
        assert not at_six_ok.from_cache
        assert at_six_ok.articles == replacement
        assert list(cache_store.get("us", "general").articles) == replacement

    @pytest.mark.parametrize(
        "handler",
        [
            lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all"),
            lambda request: httpx.Response(302, headers={"Location": str(request.url)}),
        ],
        ids=["corrupt-body", "redirect-loop"],
    )
    @pytest.mark.asyncio
    async def test_transport_level_failures_fall_back_to_stale(self, cache_store, clock, make_article, handler):
        cached = [make_article(1)]
        cache_store.put("us", "general", cached)
        clock.advance(minutes=10)
        fetcher = NewsApiClient(
            api_key="test-key",
            base_url="https://newsapi.test/v2",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True),
        )
        resolver = ArticleResolver(cache_store, fetcher)

        result = await resolver.resolve("us", "general")
        await fetcher.close()

        assert result.served_stale
        assert result.articles == cached
