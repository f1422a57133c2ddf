"""MCP tools for color-based calendar analysis."""

import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ConfigDict, Field

from .. import colors
from ..analysis import CalendarAnalyzer
from ..errors import (
    AuthenticationRequiredError,
    CalendarAccessError,
    ConfigurationError,
    InvalidParameterError,
)
from .responses import error_response, success_response

logger = logging.getLogger(__name__)

_COLOR_HELP = (
    "Color ids (1-11) or names, mixed freely. Names: "
    + ", ".join(f"{color_id}={name}" for color_id, name in colors.COLOR_NAMES.items())
)


def auth_url_or_none(auth_session) -> Optional[str]:
    """Auth URL for error responses; None when the OAuth client isn't configured."""
    try:
        return auth_session.auth_url()
    except ConfigurationError as e:
        logger.error("Cannot build auth URL: %s", e)
        return None


def register_analysis_tools(mcp: FastMCP, analyzer: CalendarAnalyzer, auth_session) -> None:
    """Register the calendar analysis tools with the MCP server."""

    # ------------------------------------------------------------------
    # Analyze calendar
    # ------------------------------------------------------------------

    class AnalyzeCalendarInput(BaseModel):
        model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

        # Validated by CalendarAnalyzer
        start_date: Optional[str] = Field(
            default=None, description="Start date in ISO format (e.g. '2025-01-01')"
        )
        end_date: Optional[str] = Field(
            default=None, description="End date in ISO format, inclusive (e.g. '2025-01-31')"
        )
        include_colors: Optional[list[Any]] = Field(
            default=None,
            description=f"Only count events with these colors. {_COLOR_HELP}",
        )
        exclude_colors: Optional[list[Any]] = Field(
            default=None,
            description=(
                "Skip events with these colors. Ignored when include_colors is given. "
                f"{_COLOR_HELP}"
            ),
        )

    @mcp.tool(
        name="analyze_calendar",
        annotations={"readOnlyHint": True, "destructiveHint": False},
    )
    async def analyze_calendar(params: AnalyzeCalendarInput) -> str:
        """
        Total the time spent per event color in Google Calendar over a date range.

        Only events the user attended count: events they organized, events
        without guests, and invitations they accepted. Events with no color
        count as Peacock (9), the calendar's default.

        Args:
            params.start_date: First day of the range (ISO date string).
            params.end_date: Last day of the range, inclusive.
            params.include_colors: Optional colors to keep.
            params.exclude_colors: Optional colors to drop.

        Returns:
            str: JSON with 'period', 'color_filter', 'analysis' (per color
                 hours, counts and events), 'summary' and 'formatted_output'.
        """
        logger.info("Starting calendar analysis: %s to %s", params.start_date, params.end_date)
        logger.debug(
            "Parameters: include_colors=%s, exclude_colors=%s",
            params.include_colors,
            params.exclude_colors,
        )
        try:
            result = analyzer.analyze(
                params.start_date,
                params.end_date,
                include_colors=params.include_colors,
                exclude_colors=params.exclude_colors,
            )
            return success_response(result)
        except InvalidParameterError as e:
            logger.error("Validation error: %s", e)
            return error_response(f"Invalid parameters: {e}")
        except AuthenticationRequiredError as e:
            logger.info("Authentication required: %s", e)
            return error_response(str(e), auth_url=auth_url_or_none(auth_session))
        except CalendarAccessError as e:
            logger.error("Calendar access error: %s", e)
            return error_response(f"Calendar access failed: {e}")
        except Exception as e:
            logger.exception("Unexpected error during calendar analysis")
            return error_response(f"An unexpected error occurred: {e}")

    # ------------------------------------------------------------------
    # List colors
    # ------------------------------------------------------------------

    @mcp.tool(
        name="list_colors",
        annotations={"readOnlyHint": True, "destructiveHint": False},
    )
    async def list_colors() -> str:
        """
        List the 11 event colors accepted by analyze_calendar.

        Returns:
            str: JSON with the palette (id, name, Japanese name) and the
                 default color id used for events without a color.
        """
        palette = [
            {
                "id": color_id,
                "name": name,
                "name_ja": colors.JAPANESE_COLOR_NAMES[color_id],
            }
            for color_id, name in colors.COLOR_NAMES.items()
        ]
        return success_response({"colors": palette, "default_color_id": colors.default_color_id()})
