"""
Server configuration

Values come from the process environment. main.py loads a .env file (via
python-dotenv) before anything here is read.
"""
import os

_VALID_TRANSPORTS = ("stdio", "streamable-http")

_transport_mode = None


def get_credentials_path() -> str:
    """Path to the OAuth client secrets file downloaded from Google Cloud Console."""
    return os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json")


def get_token_path() -> str:
    """Path to the stored authorized-user token."""
    return os.getenv("GOOGLE_TOKEN_PATH", "token.json")


def get_port() -> int:
    return int(os.getenv("WORKSPACE_MCP_PORT", "8000"))


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_transport_mode() -> str:
    """Current transport mode; falls back to WORKSPACE_MCP_TRANSPORT, then stdio."""
    if _transport_mode is not None:
        return _transport_mode
    return os.getenv("WORKSPACE_MCP_TRANSPORT", "stdio")


def set_transport_mode(mode: str) -> None:
    global _transport_mode
    if mode not in _VALID_TRANSPORTS:
        raise ValueError(
            f"Invalid transport '{mode}'. Valid values: {', '.join(_VALID_TRANSPORTS)}"
        )
    _transport_mode = mode
