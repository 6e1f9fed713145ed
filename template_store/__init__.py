"""Owner-scoped, usage-tracked template storage."""

__version__ = "0.1.0"
