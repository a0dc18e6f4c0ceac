"""
NewsAPI mapper
Turns "top-headlines" payload records into cached Article objects
"""

from typing import Dict, Any, List, Optional

from ...models.article import Article


class NewsApiMapper:
    """Mapper for NewsAPI article records"""

    source_name = "NewsAPI"

    def map_article(self, raw_data: Dict[str, Any]) -> Optional[Article]:
        """
        Map one NewsAPI record to an Article

        Records without a title or URL are not displayable and map to None.
        """
        title = _text(raw_data.get("title"))
        url = _text(raw_data.get("url"))
        if not title or not url:
            return None

        return Article.create(
            title=title,
            url=url,
            description=_text(raw_data.get("description")),
            url_to_image=_text(raw_data.get("urlToImage")),
            published_at=_text(raw_data.get("publishedAt")),
            source=self._source_name(raw_data.get("source")),
        )

    def map_articles(self, raw_articles: List[Dict[str, Any]]) -> List[Article]:
        articles = []
        for raw in raw_articles:
            if not isinstance(raw, dict):
                continue
            article = self.map_article(raw)
            if article is not None:
                articles.append(article)
        return articles

    @staticmethod
    def _source_name(source: Any) -> Optional[str]:
        if isinstance(source, dict):
            return _text(source.get("name"))
        return None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
