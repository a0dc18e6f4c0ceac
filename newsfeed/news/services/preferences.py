"""Mapping from user preferences to a NewsAPI (country, category) pair"""

from typing import Sequence

NEWS_CATEGORIES = (
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
)

LANGUAGE_TO_COUNTRY = {
    "en": "us",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "it": "it",
    "pt": "pt",
    "ja": "jp",
    "ko": "kr",
    "zh": "cn",
    "ar": "ae",
    "hi": "in",
    "ru": "ru",
}

SUPPORTED_LANGUAGES = tuple(LANGUAGE_TO_COUNTRY.keys())

DEFAULT_COUNTRY = "us"
DEFAULT_CATEGORY = "general"


def country_for_language(language: str) -> str:
    return LANGUAGE_TO_COUNTRY.get(language.lower(), DEFAULT_COUNTRY)


def country_for_languages(languages: Sequence[str]) -> str:
    # NewsAPI takes one country; the first language wins
    if not languages:
        return DEFAULT_COUNTRY
    return country_for_language(languages[0])


def category_for_preferences(categories: Sequence[str]) -> str:
    for category in categories:
        normalized = category.lower()
        if normalized in NEWS_CATEGORIES:
            return normalized
    return DEFAULT_CATEGORY
