"""Console session loop — read a line, route it, print the reply, repeat."""
import asyncio
import enum
import logging
from typing import Awaitable, Callable, Optional

from .pipeline import IntentRouter
from .tools import ToolRegistry

logger = logging.getLogger(__name__)

PROMPT = "You: "
REPLY_PREFIX = "🤖 Agent: "
EXIT_WORD = "exit"

_CATEGORY_LABELS = {
    "math": "📊 Math Tools",
    "time": "⏰ Time Tools",
    "joke": "😂 Joke Tools",
}

EXAMPLES = [
    "What's 15 + 25?",
    "What time is it?",
    "Tell me a joke",
    "Calculate 50% of 200",
    "What day is today?",
]


class LoopState(enum.Enum):
    AWAITING_INPUT = "awaiting_input"
    ROUTING = "routing"
    RESPONDING = "responding"
    TERMINATED = "terminated"


async def read_console_line(prompt: str = PROMPT) -> Optional[str]:
    """Blocking input() in a worker thread; None on end of input."""
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


def is_exit(line: Optional[str]) -> bool:
    return line is None or not line.strip() or line.strip().lower() == EXIT_WORD


def banner(registry: ToolRegistry) -> str:
    lines = [
        "🤖 Simple Single Agent Demo",
        "══════════════════════════",
        "This agent has:",
    ]
    for category, names in registry.categories().items():
        label = _CATEGORY_LABELS.get(category, f"🔧 {category.title()} Tools")
        lines.append(f"{label}: {', '.join(names)}")
    lines.append("💭 AI Knowledge: General chat and assistance")
    lines.append("")
    lines.append("✅ Single Agent ready!")
    lines.append("📝 Try asking:")
    lines.extend(f"   • {example}" for example in EXAMPLES)
    lines.append(f"   • Type '{EXIT_WORD}' to quit")
    return "\n".join(lines)


class SessionLoop:
    def __init__(
        self,
        router: IntentRouter,
        read_line: Callable[[], Awaitable[Optional[str]]] = read_console_line,
        write: Callable[[str], None] = print,
    ):
        self.router = router
        self.read_line = read_line
        self.write = write
        self.state = LoopState.AWAITING_INPUT

    async def run(self):
        while self.state is not LoopState.TERMINATED:
            await self.step()

    async def step(self):
        """Advance through one input line (one full turn, or termination)."""
        self.state = LoopState.AWAITING_INPUT
        try:
            line = await self.read_line()
        except KeyboardInterrupt:
            line = None

        if is_exit(line):
            self.write("👋 Goodbye!")
            self.state = LoopState.TERMINATED
            return

        self.state = LoopState.ROUTING
        turn = await self.router.handle(line.strip())

        self.state = LoopState.RESPONDING
        self.write(f"{REPLY_PREFIX}{turn.reply}")
        self.write("")
        self.state = LoopState.AWAITING_INPUT
