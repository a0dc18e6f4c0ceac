"""Newsfeed API: per-user news views over a shared NewsAPI article cache"""

__version__ = "0.1.0"
