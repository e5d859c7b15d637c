"""Implementations behind the MCP tools."""
