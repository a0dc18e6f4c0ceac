"""
Cached article model and identity derivation
"""

import re
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

ARTICLE_ID_MAX_LENGTH = 100
UNKNOWN_SOURCE = "Unknown"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9]")


def derive_article_id(url: str, published_at: Optional[str]) -> str:
    """
    Build the stable identifier of an upstream article.

    The URL and publish timestamp are joined, every character outside
    ``[A-Za-z0-9]`` becomes ``_`` and the result is cut to 100 characters, so
    the ID is safe as a path segment. Re-fetching the same upstream item
    always yields the same ID. Distinct articles may collide.
    """
    raw = f"{url}_{published_at or ''}"
    return _UNSAFE_ID_CHARS.sub("_", raw)[:ARTICLE_ID_MAX_LENGTH]


@dataclass(frozen=True)
class Article:
    """Normalized upstream article, immutable once fetched"""
    id: str
    title: str
    url: str
    description: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None
    source: str = UNKNOWN_SOURCE

    @classmethod
    def create(
        cls,
        title: str,
        url: str,
        description: Optional[str] = None,
        url_to_image: Optional[str] = None,
        published_at: Optional[str] = None,
        source: Optional[str] = None,
    ) -> "Article":
        return cls(
            id=derive_article_id(url, published_at),
            title=title,
            url=url,
            description=description,
            url_to_image=url_to_image,
            published_at=published_at,
            source=source or UNKNOWN_SOURCE,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
