"""Time tools — current time, day of week, month and year."""
import logging

from ..registry import register_tool

logger = logging.getLogger(__name__)


@register_tool(
    "time.now",
    description="Get current date and time when user asks what time it is or for current date",
    category="time",
)
async def current_time(session=None, **kwargs) -> str:
    logger.info("[TIME TOOL] Getting current time")
    return session.now().strftime("%Y-%m-%d %H:%M:%S")


@register_tool(
    "time.day_of_week",
    description="Get current day of the week when user asks what day it is",
    category="time",
)
async def day_of_week(session=None, **kwargs) -> str:
    logger.info("[TIME TOOL] Getting day of week")
    return session.now().strftime("%A")


@register_tool(
    "time.month_year",
    description="Get current month and year when user asks for current month or year",
    category="time",
)
async def month_year(session=None, **kwargs) -> str:
    logger.info("[TIME TOOL] Getting month and year")
    return session.now().strftime("%B %Y")
