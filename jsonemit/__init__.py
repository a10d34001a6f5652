"""Streaming JSON serialization with compact and pretty formatters."""

__version__ = "0.1.0"
__all__ = ["escape", "formatter", "serializer"]