"""DevConnector — social network backend for developers (profiles, posts, comments, likes)."""

__version__ = "1.0.0"
