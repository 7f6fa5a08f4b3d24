"""
Google credential handling

Provides the credential provider used by every tool, the interactive
bootstrap flow that writes the stored token, and the process-wide
WorkspaceContext that builds API clients from the shared credential.
"""
import logging
import os
import threading
from typing import Any, Callable, List, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from auth.scopes import SCOPES, DOCS_WRITE_SCOPE, DOCS_READONLY_SCOPE
from core.errors import AuthError

logger = logging.getLogger(__name__)

# A write scope also grants read access
_IMPLIED_SCOPES = {
    DOCS_READONLY_SCOPE: {DOCS_WRITE_SCOPE},
}


def check_client_secrets(credentials_path: str) -> Optional[str]:
    """
    Check that the OAuth client secrets file exists.

    Returns:
        An error message if the file is missing, None otherwise.
    """
    if not os.path.exists(credentials_path):
        return (
            f"OAuth client secrets file not found at '{os.path.abspath(credentials_path)}'. "
            "Download it from Google Cloud Console (APIs & Services > Credentials) "
            "and set GOOGLE_CREDENTIALS_PATH."
        )
    return None


def run_local_auth_flow(
    credentials_path: str, token_path: str, scopes: Optional[List[str]] = None
) -> Credentials:
    """
    Run the installed-app OAuth flow in a local browser and store the token.

    Only used by the command line bootstrap; tools never start an
    interactive flow.
    """
    error_message = check_client_secrets(credentials_path)
    if error_message:
        raise AuthError(error_message)

    flow = InstalledAppFlow.from_client_secrets_file(credentials_path, scopes or SCOPES)
    credentials = flow.run_local_server(port=0)
    _save_credentials(credentials, token_path)
    logger.info(f"Stored Google credentials at {os.path.abspath(token_path)}")
    return credentials


def _save_credentials(credentials: Credentials, token_path: str) -> None:
    directory = os.path.dirname(os.path.abspath(token_path))
    os.makedirs(directory, exist_ok=True)
    with open(token_path, "w") as f:
        f.write(credentials.to_json())


class CredentialProvider:
    """
    Loads the stored authorized-user token, refreshing it when expired.

    Raises AuthError with an actionable message when no usable credential
    exists. Refresh-on-expiry happens here; callers only ever see valid
    credentials.
    """

    def __init__(
        self,
        credentials_path: str,
        token_path: str,
        scopes: Optional[List[str]] = None,
    ):
        self.credentials_path = credentials_path
        self.token_path = token_path
        self.scopes = scopes or SCOPES
        self._credentials: Optional[Credentials] = None
        self._lock = threading.Lock()

    def get_credentials(self) -> Credentials:
        with self._lock:
            if self._credentials is None:
                self._credentials = self._load_credentials()
            if not self._credentials.valid:
                self._refresh(self._credentials)
            return self._credentials

    def get_access_token(self) -> str:
        return self.get_credentials().token

    def has_scope(self, scope: str) -> bool:
        """True if the stored credential grants the scope (or a scope implying it)."""
        granted = self.get_credentials().scopes
        if not granted:
            # Token file without scope metadata; let the API decide
            return True
        accepted = {scope} | _IMPLIED_SCOPES.get(scope, set())
        return bool(accepted & set(granted))

    def _load_credentials(self) -> Credentials:
        if not os.path.exists(self.token_path):
            raise AuthError(
                f"No stored Google credentials found at '{os.path.abspath(self.token_path)}'. "
                "Run 'python main.py --authenticate' to authorize this server."
            )
        try:
            credentials = Credentials.from_authorized_user_file(self.token_path)
        except ValueError as e:
            raise AuthError(
                f"Stored Google credentials at '{self.token_path}' are invalid: {e}. "
                "Run 'python main.py --authenticate' to authorize again."
            ) from e
        logger.info(f"Loaded Google credentials from {os.path.abspath(self.token_path)}")
        return credentials

    def _refresh(self, credentials: Credentials) -> None:
        if not (credentials.expired and credentials.refresh_token):
            raise AuthError(
                "Stored Google credentials are not valid and cannot be refreshed. "
                "Run 'python main.py --authenticate' to authorize again."
            )
        try:
            credentials.refresh(Request())
        except RefreshError as e:
            raise AuthError(
                f"Failed to refresh Google credentials: {e}. "
                "Run 'python main.py --authenticate' to authorize again."
            ) from e
        _save_credentials(credentials, self.token_path)
        logger.info("Refreshed expired Google credentials")


class WorkspaceContext:
    """
    Process-wide access context.

    Constructed once at process start. The credential is loaded once by the
    provider and shared. API clients are not shared: each wraps a single
    httplib2.Http, which is not thread-safe, so every request builds its own.
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        service_builder: Callable[..., Any] = build,
    ):
        self.credential_provider = credential_provider
        self._service_builder = service_builder

    def get_service(self, service_name: str, version: str, required_scope: Optional[str] = None) -> Any:
        """
        Build an API client for one request.

        cache_discovery=False uses the discovery document bundled with
        googleapiclient, so building a client makes no network call.

        Raises:
            AuthError: If no valid credential exists or it lacks required_scope
        """
        credentials = self.credential_provider.get_credentials()
        if required_scope and not self.credential_provider.has_scope(required_scope):
            raise AuthError(
                f"Stored Google credentials do not grant the scope '{required_scope}'. "
                "Run 'python main.py --authenticate' to authorize again."
            )

        logger.debug(f"Building Google API client {service_name} {version}")
        return self._service_builder(
            service_name, version, credentials=credentials, cache_discovery=False
        )


_workspace_context: Optional[WorkspaceContext] = None


def set_workspace_context(context: Optional[WorkspaceContext]) -> None:
    """Register the process-wide context (called once by main.py; tests reset it)."""
    global _workspace_context
    _workspace_context = context


def get_workspace_context() -> WorkspaceContext:
    if _workspace_context is None:
        raise AuthError(
            "Workspace context has not been initialized. Start the server through main.py."
        )
    return _workspace_context
