"""Agent MCP setup and project housekeeping helpers for memtrace."""

__version__ = "0.1.0"

__all__ = ["__version__"]