"""Google OAuth2 authentication for read-only Calendar API access."""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from ..config import Settings
from ..errors import (
    AuthenticationFailedError,
    AuthenticationRequiredError,
    CalendarAccessError,
    InvalidParameterError,
    TokenStoreError,
)

logger = logging.getLogger(__name__)

# Read-only scope: the server never modifies the calendar
SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


class TokenStore:
    """
    Persists one user's OAuth credentials as JSON.

    Every access to the token file runs under a reentrant lock. Callers
    that read, modify and write the token (refresh, code exchange) hold
    `lock` across the whole sequence.
    """

    def __init__(self, path: Path):
        self.path = path
        self.lock = threading.RLock()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Credentials]:
        """
        Load saved credentials.

        Returns:
            Credentials, or None if the file is missing or unreadable.
        """
        with self.lock:
            if not self.path.exists():
                return None
            try:
                info = json.loads(self.path.read_text())
                return Credentials.from_authorized_user_info(info, SCOPES)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
                return None

    def save(self, credentials: Credentials) -> None:
        """
        Write credentials, replacing the file atomically.

        Raises:
            TokenStoreError: If the file cannot be written.
        """
        with self.lock:
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(credentials.to_json())
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
            except OSError as e:
                logger.error("Token file save error at %s: %s", self.path, e)
                raise TokenStoreError(f"Failed to save token file {self.path}: {e}") from e
            logger.debug("Token file saved to %s", self.path)

    def clear(self) -> None:
        with self.lock:
            self.path.unlink(missing_ok=True)


class GoogleAuthSession:
    """
    The OAuth flow and credential lifecycle for the single local user.

    The flow is the copy/paste variant: start_auth hands out a URL, the
    user approves access and pastes the code back through complete_auth.
    """

    def __init__(self, settings: Settings, token_store: TokenStore):
        self.settings = settings
        self.token_store = token_store

    def _flow(self) -> Flow:
        self.settings.require_oauth_client()
        client_config = {
            "installed": {
                "client_id": self.settings.google_client_id,
                "client_secret": self.settings.google_client_secret,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": [self.settings.redirect_uri],
            }
        }
        # No PKCE verifier: the URL and the code exchange use separate Flow objects
        return Flow.from_client_config(
            client_config,
            scopes=SCOPES,
            redirect_uri=self.settings.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def auth_url(self) -> str:
        """Consent URL requesting offline (refreshable) read-only access."""
        url, _state = self._flow().authorization_url(access_type="offline", prompt="consent")
        return url

    def auth_instructions(self) -> str:
        return "\n".join(
            [
                "1. Open the URL above in a browser",
                "2. Sign in with your Google account and allow calendar access",
                "3. Copy the authorization code Google displays",
                "4. Send it with the complete_auth tool:",
                "   - Tool: complete_auth",
                "   - Parameter: auth_code = <authorization code>",
                "",
                "Once authenticated, calendar analysis is available.",
            ]
        )

    def complete(self, auth_code: Optional[str]) -> dict:
        """
        Exchange an authorization code for credentials and store them.

        Raises:
            InvalidParameterError: If the code is empty.
            AuthenticationFailedError: If Google rejects the code.
            TokenStoreError: If the token cannot be saved.
        """
        code = (auth_code or "").strip()
        if not code:
            raise InvalidParameterError("Authorization code must not be empty")

        flow = self._flow()
        try:
            flow.fetch_token(code=code)
        except Exception as e:
            raise AuthenticationFailedError(f"Authentication failed: {e}") from e

        self.token_store.save(flow.credentials)
        logger.info("Authentication completed, token saved to %s", self.token_store.path)
        return {"message": "Authentication completed successfully"}

    def is_authenticated(self) -> bool:
        return self.token_store.load() is not None

    def credentials(self) -> Credentials:
        """
        Return valid credentials, refreshing and re-saving them if expired.

        Raises:
            AuthenticationRequiredError: If there is no token or refresh fails.
        """
        with self.token_store.lock:
            creds = self.token_store.load()
            if creds is None:
                raise AuthenticationRequiredError()

            if not creds.valid:
                if not creds.refresh_token:
                    raise AuthenticationRequiredError("Stored token has expired and cannot be refreshed")
                try:
                    creds.refresh(Request())
                except RefreshError as e:
                    logger.warning("Token refresh rejected: %s", e)
                    raise AuthenticationRequiredError(f"Token refresh failed: {e}") from e
                except TransportError as e:
                    raise CalendarAccessError(f"Could not reach Google to refresh the token: {e}") from e
                self.token_store.save(creds)

            return creds

    def clear(self) -> None:
        self.token_store.clear()
