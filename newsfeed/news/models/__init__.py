from .article import Article, derive_article_id

__all__ = ["Article", "derive_article_id"]
