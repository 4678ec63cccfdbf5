"""Service exports."""

from . import dashboard, wordcloud

__all__ = ["dashboard", "wordcloud"]
