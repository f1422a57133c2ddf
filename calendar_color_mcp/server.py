"""
Calendar Color MCP Server
=========================

An MCP server that totals how much time you spend per Google Calendar
event color, so Claude can answer "where did my week go?" questions.

Setup:
    1. Create an OAuth client (Desktop app) in Google Cloud Console
    2. Put GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET in .env
    3. Run: calendar-color-mcp
    4. Ask Claude to authenticate (start_auth, then complete_auth)

Usage with Claude:
    - "How much time did I spend per color last month?"
    - "How many hours went into Tomato and Banana events this week?"
    - "Analyze January but leave out Graphite events"
"""

import logging
import sys
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .analysis import CalendarAnalyzer
from .auth import GoogleAuthSession, TokenStore
from .clients import GoogleCalendarClient
from .config import Settings, load_settings
from .errors import ConfigurationError
from .logging_config import setup_logging
from .tools import register_analysis_tools, register_auth_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "This server analyzes Google Calendar time by event color. "
    "Use analyze_calendar with a start_date and end_date (YYYY-MM-DD) to get hours "
    "per color; include_colors / exclude_colors accept color ids 1-11 or names "
    "(see list_colors). If a tool reports that authentication is required, call "
    "start_auth, have the user open the URL, then pass the code they receive to "
    "complete_auth. check_auth_status reports whether a token is stored."
)


def build_server(settings: Optional[Settings] = None) -> FastMCP:
    """
    Wire the server's collaborators together and register the tools.

    One TokenStore, auth session, calendar client and analyzer are created
    per server and handed to the tools that need them.
    """
    settings = settings or load_settings()

    token_store = TokenStore(settings.token_file)
    auth_session = GoogleAuthSession(settings, token_store)
    calendar_client = GoogleCalendarClient(
        auth_session,
        calendar_id=settings.calendar_id,
        tz=settings.tz(),
    )
    analyzer = CalendarAnalyzer(calendar_client, auth_session)

    mcp = FastMCP("calendar_color_mcp", instructions=INSTRUCTIONS)
    register_analysis_tools(mcp, analyzer, auth_session)
    register_auth_tools(mcp, auth_session)
    return mcp


def main() -> None:
    """Entry point for the calendar-color-mcp command."""
    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)

    logger.info("calendar-color-mcp: starting up...")
    try:
        settings.require_oauth_client()
        mcp = build_server(settings)
    except ConfigurationError as e:
        print(f"calendar-color-mcp: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        mcp.run()
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("calendar-color-mcp: shutting down.")


if __name__ == "__main__":
    main()
