"""Joke source — the single outbound HTTP call (JokeAPI v2)."""
import logging
from dataclasses import dataclass
from typing import Tuple
from urllib.parse import quote

import httpx

from .config import settings
from .errors import RemoteFormatError, RemoteUnavailableError

logger = logging.getLogger(__name__)

SAFE_BLACKLIST: Tuple[str, ...] = ("nsfw", "political", "racist", "sexist", "explicit")


@dataclass(frozen=True)
class JokeFilter:
    category: str = "Any"
    blacklist: Tuple[str, ...] = SAFE_BLACKLIST
    joke_type: str = "single"

    def params(self) -> dict:
        params = {"type": self.joke_type}
        if self.blacklist:
            params["blacklistFlags"] = ",".join(self.blacklist)
        return params


def default_filter(category: str = "Any") -> JokeFilter:
    """Filter honouring JOKE_SAFE_MODE."""
    blacklist = SAFE_BLACKLIST if settings.joke_safe_mode else ()
    return JokeFilter(category=category or "Any", blacklist=blacklist)


class JokeFetcher:
    """Fetches one joke per call through an injected httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = "", timeout: float = 0):
        self.client = client
        self.base_url = (base_url or settings.joke_api_url).rstrip("/")
        self.timeout = timeout or settings.joke_timeout_s

    async def fetch_joke(self, joke_filter: JokeFilter = JokeFilter()) -> str:
        url = f"{self.base_url}/{quote(joke_filter.category, safe='')}"
        try:
            resp = await self.client.get(url, params=joke_filter.params(), timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.error(f"Joke API error: {e}")
            raise RemoteUnavailableError(str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error(f"Joke API returned invalid JSON: {e}")
            raise RemoteUnavailableError(f"invalid JSON: {e}") from e
        except Exception as e:
            logger.error(f"Joke API request failed: {type(e).__name__}: {e}")
            raise RemoteUnavailableError(str(e) or type(e).__name__) from e

        if not isinstance(data, dict):
            raise RemoteFormatError(f"expected a JSON object, got {type(data).__name__}")
        if "joke" not in data:
            logger.warning(f"Joke API payload without joke field: {list(data)[:10]}")
            raise RemoteFormatError("response has no 'joke' field")
        joke = data["joke"]
        if joke is None:
            return ""
        if not isinstance(joke, str):
            raise RemoteFormatError(f"'joke' field is {type(joke).__name__}, not a string")
        return joke
