"""Sequential Thinking MCP Server."""

__version__ = "0.3.0"
