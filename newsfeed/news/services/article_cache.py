"""
Article Cache Store

Holds one snapshot of articles per (country, category) key.

Features:
- Whole-entry replacement on every successful fetch (last writer wins)
- TTL-based freshness for single-key reuse
- Aggregate view over every held entry, fresh or expired
- No eviction: keys are bounded by the refresh matrix plus user preferences
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from ..models.article import Article

logger = structlog.get_logger(__name__)

CacheKey = Tuple[str, str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cache_key_label(country: str, category: str) -> str:
    return f"{country}_{category}"


@dataclass(frozen=True)
class CacheEntry:
    articles: Tuple[Article, ...]
    fetched_at: datetime
    expires_at: datetime


class ArticleCacheStore:
    """In-memory article cache shared by every user"""

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = utc_now,
        aggregate_retention: Optional[timedelta] = None,
    ):
        """
        Args:
            ttl: How long an entry may be served without revalidation
            clock: Source of the current time (UTC)
            aggregate_retention: If set, entries fetched longer ago than this
                are left out of ``all_articles``; they stay in the store
        """
        self.ttl = ttl
        self.clock = clock
        self.aggregate_retention = aggregate_retention
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, country: str, category: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get((country, category))

    def is_fresh(self, entry: Optional[CacheEntry], now: Optional[datetime] = None) -> bool:
        if entry is None:
            return False
        now = now or self.clock()
        return now < entry.expires_at

    def put(
        self,
        country: str,
        category: str,
        articles: Iterable[Article],
        now: Optional[datetime] = None,
    ) -> CacheEntry:
        """Replace the entry for a key with a new snapshot"""
        now = now or self.clock()
        entry = CacheEntry(
            articles=tuple(articles),
            fetched_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._entries[(country, category)] = entry

        logger.info(
            "article_cache_updated",
            key=cache_key_label(country, category),
            articles=len(entry.articles),
            expires_at=entry.expires_at.isoformat(),
        )
        return entry

    def all_articles(self, now: Optional[datetime] = None) -> List[Article]:
        """
        Distinct articles across every held entry, first seen wins.

        Expiry does not hide an entry here: a read or favorite lookup must
        still resolve an article whose entry expired minutes ago.
        """
        with self._lock:
            entries = list(self._entries.values())

        cutoff = None
        if self.aggregate_retention is not None:
            cutoff = (now or self.clock()) - self.aggregate_retention

        unique: Dict[str, Article] = {}
        for entry in entries:
            if cutoff is not None and entry.fetched_at < cutoff:
                continue
            for article in entry.articles:
                if article.id not in unique:
                    unique[article.id] = article
        return list(unique.values())

    def keys(self) -> List[CacheKey]:
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def summary(self, now: Optional[datetime] = None) -> Dict[str, Dict[str, object]]:
        """Per-key metadata, safe to expose on health checks"""
        now = now or self.clock()
        with self._lock:
            items = list(self._entries.items())
        return {
            cache_key_label(country, category): {
                "articles": len(entry.articles),
                "age_seconds": round((now - entry.fetched_at).total_seconds(), 1),
                "fresh": self.is_fresh(entry, now),
            }
            for (country, category), entry in items
        }
