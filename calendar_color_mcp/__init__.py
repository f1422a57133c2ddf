"""Google Calendar time analysis by event color, served over MCP."""

__version__ = "1.0.0"
