"""Joke tool — fresh clean joke from JokeAPI."""
import logging

from ...errors import RemoteFormatError, RemoteUnavailableError
from ...jokes import default_filter
from ..registry import register_tool, ToolParam

logger = logging.getLogger(__name__)


@register_tool(
    "joke.random",
    description="Tell a clean family-friendly joke when user asks for a joke, humor, or something funny",
    params=[
        ToolParam("category", description="joke category: Any, Programming, Misc, Pun, Spooky, Christmas",
                  required=False, default="Any"),
    ],
    category="joke",
)
async def random_joke(category: str = "Any", session=None, **kwargs) -> str:
    logger.info("[JOKE TOOL] Fetching fresh clean joke from API")
    if not session or not session.joke_fetcher:
        return "Sorry, the joke service is not available right now."

    try:
        joke = await session.joke_fetcher.fetch_joke(default_filter(category))
    except RemoteFormatError:
        return "Sorry, the joke API returned an unexpected format!"
    except RemoteUnavailableError as e:
        return f"Sorry, couldn't fetch a joke right now. Error: {e}"

    if not joke:
        return "Sorry, couldn't get the joke content!"
    return f"Here's a clean joke from the API: {joke}"
