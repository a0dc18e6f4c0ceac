"""
Overlay of per-user read/favorite marks onto cached articles
"""

from typing import AbstractSet, Iterable, List

from ..models.article import Article
from ..schemas.responses import NewsArticleView


def annotate_articles(
    articles: Iterable[Article],
    read_ids: AbstractSet[str],
    favorite_ids: AbstractSet[str],
) -> List[NewsArticleView]:
    """Attach is_read / is_favorite by membership in the user's ID sets"""
    return [
        NewsArticleView(
            **article.to_dict(),
            is_read=article.id in read_ids,
            is_favorite=article.id in favorite_ids,
        )
        for article in articles
    ]


def filter_by_ids(articles: Iterable[Article], ids: AbstractSet[str]) -> List[Article]:
    if not ids:
        return []
    return [article for article in articles if article.id in ids]


def search_articles(articles: Iterable[Article], keyword: str) -> List[Article]:
    """Case-insensitive substring match on title and description"""
    term = keyword.strip().lower()
    if not term:
        return []

    matches = []
    for article in articles:
        title = (article.title or "").lower()
        description = (article.description or "").lower()
        if term in title or term in description:
            matches.append(article)
    return matches
