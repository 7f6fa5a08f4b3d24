"""
Authentication for the Google Docs MCP server.
"""
