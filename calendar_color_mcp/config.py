"""Environment-driven settings for the calendar color server."""

import os
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError

# OOB copy/paste flow: the user pastes the code shown by Google into complete_auth
DEFAULT_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"
DEFAULT_TOKEN_FILE = "~/.calendar_color_mcp/token.json"
DEFAULT_CALENDAR_ID = "primary"


def _resolve_path(path_str: str) -> Path:
    """Expand ~ and resolve the path."""
    return Path(path_str).expanduser().resolve()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    redirect_uri: str = DEFAULT_REDIRECT_URI
    token_file: Path = _resolve_path(DEFAULT_TOKEN_FILE)
    calendar_id: str = DEFAULT_CALENDAR_ID
    timezone: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def require_oauth_client(self) -> None:
        """
        Ensure the OAuth client id and secret are set.

        Raises:
            ConfigurationError: Naming every missing environment variable.
        """
        missing = []
        if not self.google_client_id:
            missing.append("GOOGLE_CLIENT_ID")
        if not self.google_client_secret:
            missing.append("GOOGLE_CLIENT_SECRET")
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    def tz(self) -> tzinfo:
        """Zone used to turn calendar dates into API time bounds."""
        if self.timezone:
            try:
                return ZoneInfo(self.timezone)
            except ZoneInfoNotFoundError as e:
                raise ConfigurationError(f"Unknown LOCAL_TIMEZONE: {self.timezone}") from e
        return datetime.now().astimezone().tzinfo


def load_settings() -> Settings:
    """Build Settings from the process environment (call load_dotenv first)."""
    debug = os.environ.get("DEBUG", "").lower() == "true"
    log_file = os.environ.get("LOG_FILE")

    return Settings(
        google_client_id=os.environ.get("GOOGLE_CLIENT_ID") or None,
        google_client_secret=os.environ.get("GOOGLE_CLIENT_SECRET") or None,
        redirect_uri=os.environ.get("GOOGLE_REDIRECT_URI", DEFAULT_REDIRECT_URI),
        token_file=_resolve_path(os.environ.get("GOOGLE_TOKEN_FILE", DEFAULT_TOKEN_FILE)),
        calendar_id=os.environ.get("GOOGLE_CALENDAR_ID", DEFAULT_CALENDAR_ID),
        timezone=os.environ.get("LOCAL_TIMEZONE") or None,
        log_level="DEBUG" if debug else os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_file=_resolve_path(log_file) if log_file else None,
    )
