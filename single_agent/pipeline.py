"""Intent routing pipeline: selection → optional tool → composition.

One call to ``IntentRouter.handle`` processes one user turn. The completion
service decides which tool (if any) applies; this module only shapes the
requests and interprets the replies.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from .config import settings
from .errors import CompletionUnavailableError, ToolError
from .llm import (
    DIRECT_ANSWER,
    CompletionClient,
    compose_messages,
    parse_selection,
    selection_messages,
)
from .tools import ToolCall, ToolExecutor, ToolRegistry, ToolResult

logger = logging.getLogger(__name__)


@dataclass
class ConversationTurn:
    user_text: str
    call: Optional[ToolCall] = None
    result: Optional[ToolResult] = None
    reply: str = ""


def unavailable_message(error: Exception, model: str = "") -> str:
    return (f"❌ Error: {error}\n"
            f"💡 Make sure Ollama is running with {model or settings.agent_model}")


class IntentRouter:
    def __init__(self, completion: CompletionClient, registry: ToolRegistry,
                 executor: ToolExecutor, model: str = ""):
        self.completion = completion
        self.registry = registry
        self.executor = executor
        self.model = model or settings.agent_model

    async def handle(self, text: str) -> ConversationTurn:
        turn = ConversationTurn(user_text=text)
        t0 = time.monotonic()
        try:
            await self._route(turn)
        except CompletionUnavailableError as e:
            logger.error(f"Completion service unavailable: {e}")
            turn.reply = unavailable_message(e, self.model)
        logger.info(f"Turn done in {time.monotonic() - t0:.2f}s "
                    f"(tool={turn.call.name if turn.call else 'none'})")
        return turn

    async def _route(self, turn: ConversationTurn):
        # --- Step 1: selection ---
        raw = await self.completion.complete(
            selection_messages(turn.user_text, self.registry.tool_descriptions_for_llm()),
            json_mode=True,
        )
        logger.info(f"Selection raw: {raw[:200]}")
        intent = parse_selection(raw)

        if intent["tool"] == DIRECT_ANSWER:
            turn.reply = _direct_answer(intent, raw)
            return

        # --- Step 2: execution ---
        turn.call = ToolCall(name=intent["tool"], args=intent["args"])
        try:
            turn.result = await self.executor.execute(turn.call)
        except ToolError as e:
            logger.warning(f"Rejected tool call {turn.call.name}: {e}")
            turn.result = ToolResult(type="error", text=str(e))

        # --- Step 3: composition ---
        outcome = turn.result.text if turn.result.ok else f"FAILED: {turn.result.text}"
        reply = await self.completion.complete(compose_messages(turn.user_text, turn.call, outcome))
        turn.reply = reply or _fallback_reply(turn.result)


def _direct_answer(intent: dict, raw: str) -> str:
    args = intent.get("args")
    response = args.get("response") if isinstance(args, dict) else None
    if isinstance(response, str) and response.strip():
        return response.strip()
    return raw


def _fallback_reply(result: ToolResult) -> str:
    if result.ok:
        return result.text
    return f"Sorry, that didn't work: {result.text}"
