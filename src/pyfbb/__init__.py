"""Fantasy baseball projection ingestion and points scoring."""

__version__ = "0.1.0"
