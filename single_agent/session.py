"""Per-process session context handed to every tool call."""
import uuid
from datetime import datetime
from typing import Callable, Optional

from .jokes import JokeFetcher


class Session:
    """Dependencies shared by tools for one run of the agent.

    Holds no conversation state: every turn is routed independently.
    """

    def __init__(
        self,
        joke_fetcher: Optional[JokeFetcher] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session_id = str(uuid.uuid4())[:8]
        self.joke_fetcher = joke_fetcher
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()
