"""Build-time assembler for the Sonar MCP server analyzer plugins."""

__version__ = "0.1.0"
