"""
NewsAPI client
Fetches top headlines for one (country, category) pair and classifies failures.
Never reads or writes the article cache.
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog

from ..models.article import Article
from .mappers import NewsApiMapper
from ...exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamMalformedError,
    UpstreamRateLimitedError,
    UpstreamRequestError,
    UpstreamServerError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)


class NewsApiClient:
    """Async client for the NewsAPI top-headlines endpoint"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://newsapi.org/v2",
        timeout: float = 10.0,
        page_size: int = 20,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = page_size
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.mapper = NewsApiMapper()

    async def fetch(self, country: str, category: str) -> List[Article]:
        """
        Fetch and normalize top headlines

        Raises:
            UpstreamError: one of its subclasses, never recovered here
        """
        params = {
            "country": country,
            "category": category,
            "pageSize": self.page_size,
            "apiKey": self.api_key,
        }

        try:
            response = await self.client.get(
                f"{self.base_url}/top-headlines",
                params=params,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                "The news service did not respond in time",
                details={"country": country, "category": category, "reason": str(e)},
            ) from e
        except httpx.DecodingError as e:
            raise UpstreamMalformedError(
                "Invalid response from news API",
                details={"country": country, "category": category, "reason": str(e)},
            ) from e
        except httpx.TransportError as e:
            raise UpstreamTimeoutError(
                "The news service did not respond",
                details={"country": country, "category": category, "reason": str(e)},
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamRequestError(
                f"Request to news API failed: {e}",
                details={"country": country, "category": category, "reason": str(e)},
            ) from e

        payload = self._decode(response)

        if response.status_code >= 400:
            raise self._classify_status(response.status_code, payload, country, category)

        if not isinstance(payload, dict) or payload.get("status") != "ok" or not isinstance(payload.get("articles"), list):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise UpstreamMalformedError(
                message or "Invalid response from news API",
                details={"country": country, "category": category},
            )

        articles = self.mapper.map_articles(payload["articles"])
        logger.debug(
            "newsapi_fetch_completed",
            country=country,
            category=category,
            received=len(payload["articles"]),
            kept=len(articles),
        )
        return articles

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _classify_status(status: int, payload: Any, country: str, category: str) -> UpstreamError:
        message = payload.get("message") if isinstance(payload, dict) else None
        details: Dict[str, Any] = {"country": country, "category": category, "status_code": status}

        if status in (401, 403):
            return UpstreamAuthError(message or "Invalid API key", details=details)
        if status == 429:
            return UpstreamRateLimitedError(message or "Too many requests. Please try again later.", details=details)
        if status >= 500:
            return UpstreamServerError(message or "External API is currently unavailable", details=details)
        return UpstreamRequestError(message or f"HTTP {status} error", details=details)

    async def close(self):
        """Close the httpx client"""
        await self.client.aclose()
