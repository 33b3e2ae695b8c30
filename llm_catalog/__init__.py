"""LLM catalog browser: model records, search, and recommendations."""

__version__ = "0.1.0"
