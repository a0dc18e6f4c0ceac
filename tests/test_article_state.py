import pytest

from newsfeed.exceptions import UserAlreadyExistsError, UserNotFoundError
from newsfeed.news.services.article_state import annotate_articles, filter_by_ids, search_articles
from newsfeed.news.services.news_service import NewsService


class TestOverlay:
    def test_annotate_marks_membership(self, make_article):
        articles = [make_article(1), make_article(2), make_article(3)]
        read_ids = {articles[0].id, articles[2].id}
        favorite_ids = {articles[2].id}

        views = annotate_articles(articles, read_ids, favorite_ids)

        assert [(v.is_read, v.is_favorite) for v in views] == [(True, False), (False, False), (True, True)]
        assert views[0].id == articles[0].id
        assert views[0].url_to_image == articles[0].url_to_image

    def test_filter_by_ids_keeps_cache_order(self, make_article):
        articles = [make_article(1), make_article(2), make_article(3)]

        matches = filter_by_ids(articles, {articles[2].id, articles[0].id, "not-cached"})

        assert matches == [articles[0], articles[2]]
        assert filter_by_ids(articles, set()) == []

    def test_search_matches_title_or_description_case_insensitively(self, make_article):
        articles = [
            make_article(1, title="Central bank HOLDS rates", description=None),
            make_article(2, title="Football final", description="Rates of injury rising"),
            make_article(3, title="Weather", description="Sunny"),
        ]

        matches = search_articles(articles, "  rates ")

        assert matches == articles[:2]

    def test_blank_search_matches_nothing(self, make_article):
        assert search_articles([make_article(1)], "   ") == []


class TestUserRepository:
    def test_create_rejects_duplicate_email_case_insensitively(self, user_repository):
        user_repository.create("Ada", "ada@example.com", "hash")

        with pytest.raises(UserAlreadyExistsError):
            user_repository.create("Ada Again", "ADA@example.com", "hash")

    def test_ids_are_sequential(self, user_repository):
        first = user_repository.create("Ada", "ada@example.com", "hash")
        second = user_repository.create("Bob", "bob@example.com", "hash")

        assert (first.id, second.id) == (1, 2)
        assert user_repository.get_by_email("BOB@example.com") is second

    def test_marks_are_idempotent(self, user_repository):
        user = user_repository.create("Ada", "ada@example.com", "hash")

        user_repository.mark_read(user.id, "abc123")
        user_repository.mark_read(user.id, "abc123")
        user_repository.mark_favorite(user.id, "abc123")
        user_repository.mark_favorite(user.id, "abc123")

        read_ids, favorite_ids = user_repository.get_article_state(user.id)
        assert read_ids == {"abc123"}
        assert favorite_ids == {"abc123"}

    def test_update_preferences_keeps_omitted_fields(self, user_repository):
        user = user_repository.create("Ada", "ada@example.com", "hash")
        user_repository.update_preferences(user.id, categories=["sports"], languages=["fr"])

        preferences = user_repository.update_preferences(user.id, categories=["health"])

        assert preferences.categories == ["health"]
        assert preferences.languages == ["fr"]

    def test_unknown_user(self, user_repository):
        with pytest.raises(UserNotFoundError):
            user_repository.mark_read(42, "abc123")


class TestNewsServiceViews:
    def test_favorite_before_article_is_cached(self, cache_store, user_repository, make_article):
        service = NewsService(cache_store, user_repository)
        user = user_repository.create("Ada", "ada@example.com", "hash")
        target = make_article(7)

        service.mark_favorite(user, target.id)
        assert service.get_favorite_articles(user).total == 0

        cache_store.put("us", "technology", [make_article(1), target])

        favorites = service.get_favorite_articles(user)
        assert favorites.total == 1
        assert favorites.articles[0].id == target.id
        assert favorites.articles[0].is_favorite
        assert not favorites.articles[0].is_read

    def test_read_view_survives_expiry(self, cache_store, clock, user_repository, make_article):
        service = NewsService(cache_store, user_repository)
        user = user_repository.create("Ada", "ada@example.com", "hash")
        article = make_article(1)
        cache_store.put("us", "general", [article])
        service.mark_read(user, article.id)

        clock.advance(hours=1)

        read = service.get_read_articles(user)
        assert [v.id for v in read.articles] == [article.id]
        assert read.articles[0].is_read

    def test_search_annotates_results(self, cache_store, user_repository, make_article):
        service = NewsService(cache_store, user_repository)
        user = user_repository.create("Ada", "ada@example.com", "hash")
        article = make_article(1, title="Election night live")
        cache_store.put("us", "general", [article, make_article(2)])
        service.mark_read(user, article.id)

        result = service.search(user, "election")

        assert result.total == 1
        assert result.keyword == "election"
        assert result.articles[0].is_read
