"""MCP tools for the Google OAuth flow."""

import logging

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ConfigDict, Field

from ..auth import GoogleAuthSession
from ..errors import (
    AuthenticationFailedError,
    ConfigurationError,
    InvalidParameterError,
    TokenStoreError,
)
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


def register_auth_tools(mcp: FastMCP, auth_session: GoogleAuthSession) -> None:
    """Register the authentication tools with the MCP server."""

    # ------------------------------------------------------------------
    # Start auth
    # ------------------------------------------------------------------

    @mcp.tool(
        name="start_auth",
        annotations={"readOnlyHint": True, "destructiveHint": False},
    )
    async def start_auth() -> str:
        """
        Begin Google Calendar authentication.

        Returns a consent URL and instructions. After approving access the
        user receives a code to pass to complete_auth.

        Returns:
            str: JSON with 'auth_url' and 'instructions'.
        """
        logger.info("Starting authentication process")
        try:
            auth_url = auth_session.auth_url()
            logger.debug("Auth URL: %s", auth_url)
            return success_response(
                {"auth_url": auth_url, "instructions": auth_session.auth_instructions()}
            )
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return error_response(f"Server configuration error: {e}")
        except Exception as e:
            logger.exception("Unexpected error while starting authentication")
            return error_response(f"An unexpected error occurred: {e}")

    # ------------------------------------------------------------------
    # Check auth status
    # ------------------------------------------------------------------

    @mcp.tool(
        name="check_auth_status",
        annotations={"readOnlyHint": True, "destructiveHint": False},
    )
    async def check_auth_status() -> str:
        """
        Report whether a Google credential is stored.

        Returns:
            str: JSON with 'authenticated', a message, and 'auth_url' when
                 authentication is still needed.
        """
        logger.info("Checking authentication status")
        try:
            if auth_session.is_authenticated():
                return success_response({"authenticated": True, "message": "Authenticated"})
            return success_response(
                {
                    "authenticated": False,
                    "message": "Authentication required",
                    "auth_url": auth_session.auth_url(),
                }
            )
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return error_response(f"Server configuration error: {e}")
        except Exception as e:
            logger.exception("Unexpected error while checking authentication")
            return error_response(f"An unexpected error occurred: {e}")

    # ------------------------------------------------------------------
    # Complete auth
    # ------------------------------------------------------------------

    class CompleteAuthInput(BaseModel):
        model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

        auth_code: str = Field(..., description="Authorization code obtained from Google")

    @mcp.tool(
        name="complete_auth",
        annotations={"readOnlyHint": False, "destructiveHint": False, "idempotentHint": False},
    )
    async def complete_auth(params: CompleteAuthInput) -> str:
        """
        Finish authentication with the code Google displayed after consent.

        Args:
            params.auth_code: The authorization code.

        Returns:
            str: JSON confirmation, or an error explaining what failed.
        """
        logger.info("Completing authentication with provided code")
        try:
            result = auth_session.complete(params.auth_code)
            return success_response(result)
        except InvalidParameterError as e:
            logger.error("Validation error: %s", e)
            return error_response(f"Input error: {e}")
        except AuthenticationFailedError as e:
            logger.error("Authentication error: %s", e)
            return error_response(f"Authentication error: {e}")
        except (ConfigurationError, TokenStoreError) as e:
            logger.error("Could not complete authentication: %s", e)
            return error_response(f"Server configuration error: {e}")
        except Exception:
            logger.exception("Unexpected error while completing authentication")
            return error_response("An unexpected error occurred during authentication completion")
