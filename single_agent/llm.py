"""Completion service client and the tool-selection prompt protocol."""
import json
import logging
from typing import Any, Dict, List, Optional, Protocol

import openai
from openai import AsyncOpenAI

from .config import Settings, settings
from .errors import CompletionUnavailableError
from .tools.registry import ToolCall

logger = logging.getLogger(__name__)

DIRECT_ANSWER = "chat"

TOOL_PROMPT = """You are a helpful assistant with access to tools. Decide whether one tool answers the user's request and respond in JSON.

Available tools:
{tool_list}

Response format — always valid JSON, pick one:
1. Direct answer (greetings, general knowledge, anything no tool covers):
   {"tool": "chat", "args": {"response": "your answer"}}

2. Use exactly one tool, with arguments taken from the user's message:
   {"tool": "<tool_name>", "args": {...}}

Rules:
- Numbers must be JSON numbers, not words.
- Only call a tool when the user gives the values it needs; never invent numbers.
- Time and date questions → use the time tools, you do not know the current time.
- Jokes → use "joke.random".

Examples:
- "What's 15 + 25?" → {"tool": "math.add", "args": {"a": 15, "b": 25}}
- "Calculate 50% of 200" → {"tool": "math.percentage", "args": {"number": 200, "percent": 50}}
- "What time is it?" → {"tool": "time.now", "args": {}}
- "Tell me a joke" → {"tool": "joke.random", "args": {}}
- "Hi there" → {"tool": "chat", "args": {"response": "Hello! How can I help you today?"}}

IMPORTANT: Always respond with valid JSON only. No markdown, no code blocks."""

COMPOSE_PROMPT = """You are a helpful assistant. A tool was called to answer the user's request.
Write a short, friendly reply to the user that uses the tool result exactly as given.
Do not repeat the JSON, do not mention tool names, do not recompute the result.
If the tool failed, apologise briefly and explain what went wrong."""


class CompletionClient(Protocol):
    """Text-completion strategy used for tool selection and reply composition."""

    async def complete(self, messages: List[dict], *, json_mode: bool = False) -> str:
        ...


class OpenAICompletionClient:
    """Chat completions against an OpenAI-compatible endpoint (Ollama's /v1)."""

    def __init__(self, cfg: Settings = settings, client: Optional[AsyncOpenAI] = None):
        self.model = cfg.agent_model
        self.temperature = cfg.agent_temperature
        self.client = client or AsyncOpenAI(
            api_key=cfg.ollama_api_key,
            base_url=cfg.ollama_base_url,
            timeout=cfg.llm_timeout_s,
            max_retries=0,
        )

    async def complete(self, messages: List[dict], *, json_mode: bool = False) -> str:
        extra: Dict[str, Any] = {}
        if json_mode:
            extra["response_format"] = {"type": "json_object"}
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                **extra,
            )
        except openai.APIError as e:
            logger.error(f"Completion request failed: {type(e).__name__}: {e}")
            raise CompletionUnavailableError(str(e)) from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def close(self):
        await self.client.close()


def selection_messages(text: str, tool_list: str) -> List[dict]:
    system_prompt = TOOL_PROMPT.replace("{tool_list}", tool_list)
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": text},
    ]


def compose_messages(text: str, call: ToolCall, outcome: str) -> List[dict]:
    call_json = json.dumps({"tool": call.name, "args": call.args}, ensure_ascii=False, default=str)
    return [
        {"role": "system", "content": COMPOSE_PROMPT},
        {"role": "user", "content": text},
        {"role": "assistant", "content": call_json},
        {"role": "user", "content": f"Tool result: {outcome}"},
    ]


def parse_selection(raw: str) -> Dict[str, Any]:
    """Turn the selection reply into {"tool": ..., "args": {...}}.

    Anything that isn't a JSON object naming a tool is treated as a direct answer.
    """
    try:
        intent = json.loads(_strip_code_fence(raw))
    except ValueError:
        # JSONDecodeError, or an integer literal past the int-to-str digit limit
        logger.warning("Selection JSON parse failed, treating as direct answer")
        return {"tool": DIRECT_ANSWER, "args": {"response": raw}}

    if not isinstance(intent, dict) or not isinstance(intent.get("tool"), str) or not intent["tool"]:
        return {"tool": DIRECT_ANSWER, "args": {"response": raw}}

    # Some models use "arguments" or "parameters" instead of "args"
    if "args" not in intent:
        for key in ("arguments", "parameters"):
            if key in intent:
                intent["args"] = intent.pop(key)
                break
    intent.setdefault("args", {})
    if intent["args"] is None:
        intent["args"] = {}
    return intent


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    return text.strip()
