"""
Google Docs MCP server entry point.

Usage:
    python main.py                                  # stdio transport
    python main.py --transport streamable-http      # HTTP transport on WORKSPACE_MCP_PORT
    python main.py --authenticate                   # one-time browser authorization
"""
import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Load .env beside this file before reading any configuration
dotenv_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env")
load_dotenv(dotenv_path=dotenv_path)

from auth.google_auth import (  # noqa: E402
    CredentialProvider,
    WorkspaceContext,
    run_local_auth_flow,
    set_workspace_context,
)
from auth.scopes import SCOPES  # noqa: E402
from core.config import (  # noqa: E402
    get_credentials_path,
    get_log_level,
    get_port,
    get_token_path,
    get_transport_mode,
)
from core.errors import AuthError  # noqa: E402

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol in stdio mode, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Google Docs MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        default=None,
        help="Transport mode (default: WORKSPACE_MCP_TRANSPORT or stdio)",
    )
    parser.add_argument(
        "--authenticate",
        action="store_true",
        help="Run the browser authorization flow, store the token and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level or get_log_level())

    credentials_path = get_credentials_path()
    token_path = get_token_path()

    if args.authenticate:
        try:
            run_local_auth_flow(credentials_path, token_path, SCOPES)
        except AuthError as e:
            logger.error(str(e))
            return 1
        print(f"Authorization complete. Token stored at {os.path.abspath(token_path)}")
        return 0

    provider = CredentialProvider(credentials_path, token_path, SCOPES)
    set_workspace_context(WorkspaceContext(provider))

    from core.server import server, set_transport_mode
    import gdocs.docs_tools  # noqa: F401  registers the Docs tools

    transport = args.transport or get_transport_mode()
    set_transport_mode(transport)

    if not os.path.exists(token_path):
        logger.warning(
            f"No stored token at {os.path.abspath(token_path)}. "
            "Tools will fail until you run 'python main.py --authenticate'."
        )

    try:
        if transport == "streamable-http":
            port = get_port()
            logger.info(f"Starting Google Docs MCP server on port {port}")
            server.run(transport="streamable-http", host="0.0.0.0", port=port)
        else:
            logger.info("Starting Google Docs MCP server on stdio")
            server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    return 0


if __name__ == "__main__":
    sys.exit(main())
