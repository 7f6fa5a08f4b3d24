"""
Google Docs MCP Integration

This module provides MCP tools for reading and structurally editing Google Docs.
"""
