"""bot_planner - Validate grid bot drafts and preview their grid and profit estimate."""

__version__ = "0.1.0"
