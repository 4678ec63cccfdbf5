"""FastAPI service for the J-PlatPat patent dashboard."""
