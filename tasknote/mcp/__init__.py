"""MCP transport for tasknote."""
