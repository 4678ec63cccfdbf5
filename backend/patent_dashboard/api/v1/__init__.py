"""Version 1 endpoints."""

from . import analysis, dashboard, wordcloud

__all__ = ["analysis", "dashboard", "wordcloud"]
