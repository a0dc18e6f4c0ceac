"""
News source mappers
Each mapper turns one upstream payload format into cached articles
"""

from .newsapi_mapper import NewsApiMapper

__all__ = [
    'NewsApiMapper'
]
