"""Tests for llm.py — completion client, prompts, selection parsing."""
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from single_agent.config import Settings
from single_agent.errors import CompletionUnavailableError
from single_agent.llm import (
    DIRECT_ANSWER,
    OpenAICompletionClient,
    compose_messages,
    parse_selection,
    selection_messages,
)
from single_agent.tools import ToolCall


def _mock_openai(content):
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content

    mock_client = AsyncMock()
    mock_client.chat.completions.create = AsyncMock(return_value=mock_response)
    return mock_client


class TestOpenAICompletionClient:
    @pytest.mark.asyncio
    async def test_plain_completion(self):
        mock_client = _mock_openai("  Hello there!  ")
        cfg = Settings(agent_model="llama3.2:1b", agent_temperature=0.1)
        client = OpenAICompletionClient(cfg, client=mock_client)

        result = await client.complete([{"role": "user", "content": "hi"}])

        assert result == "Hello there!"
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama3.2:1b"
        assert kwargs["temperature"] == 0.1
        assert "response_format" not in kwargs

    @pytest.mark.asyncio
    async def test_json_mode(self):
        mock_client = _mock_openai('{"tool": "chat", "args": {"response": "hi"}}')
        client = OpenAICompletionClient(Settings(), client=mock_client)

        await client.complete([{"role": "user", "content": "hi"}], json_mode=True)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_none_content(self):
        client = OpenAICompletionClient(Settings(), client=_mock_openai(None))
        assert await client.complete([]) == ""

    @pytest.mark.asyncio
    async def test_connection_error_mapped(self):
        request = httpx.Request("POST", "http://localhost:11434/v1/chat/completions")
        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIConnectionError(request=request))
        client = OpenAICompletionClient(Settings(), client=mock_client)

        with pytest.raises(CompletionUnavailableError):
            await client.complete([{"role": "user", "content": "hi"}])

    def test_default_client_targets_ollama(self):
        cfg = Settings(ollama_base_url="http://localhost:11434/v1", llm_timeout_s=30)
        client = OpenAICompletionClient(cfg)
        assert str(client.client.base_url).startswith("http://localhost:11434/v1")
        assert client.client.timeout == 30


class TestPrompts:
    def test_selection_lists_tools(self, registry):
        messages = selection_messages("What's 15 + 25?", registry.tool_descriptions_for_llm())
        assert messages[0]["role"] == "system"
        assert "- math.add:" in messages[0]["content"]
        assert "{tool_list}" not in messages[0]["content"]
        assert messages[1] == {"role": "user", "content": "What's 15 + 25?"}

    def test_compose_includes_call_and_result(self):
        messages = compose_messages("What's 15 + 25?", ToolCall("math.add", {"a": 15, "b": 25}), "40")
        assert messages[2]["content"] == '{"tool": "math.add", "args": {"a": 15, "b": 25}}'
        assert messages[3]["content"] == "Tool result: 40"


class TestParseSelection:
    def test_tool_call(self):
        intent = parse_selection('{"tool": "math.add", "args": {"a": 15, "b": 25}}')
        assert intent == {"tool": "math.add", "args": {"a": 15, "b": 25}}

    def test_direct_answer(self):
        intent = parse_selection('{"tool": "chat", "args": {"response": "Hi!"}}')
        assert intent["tool"] == DIRECT_ANSWER
        assert intent["args"]["response"] == "Hi!"

    def test_invalid_json_is_direct_answer(self):
        intent = parse_selection("Paris is the capital of France.")
        assert intent == {"tool": DIRECT_ANSWER, "args": {"response": "Paris is the capital of France."}}

    def test_object_without_tool(self):
        intent = parse_selection('{"answer": 42}')
        assert intent["tool"] == DIRECT_ANSWER

    def test_arguments_alias(self):
        intent = parse_selection('{"tool": "math.divide", "arguments": {"a": 1, "b": 2}}')
        assert intent["args"] == {"a": 1, "b": 2}

    def test_missing_args(self):
        assert parse_selection('{"tool": "time.now"}')["args"] == {}

    def test_null_args(self):
        assert parse_selection('{"tool": "time.now", "args": null}')["args"] == {}

    def test_code_fence(self):
        intent = parse_selection('```json\n{"tool": "joke.random", "args": {}}\n```')
        assert intent["tool"] == "joke.random"

    def test_integer_literal_past_digit_limit(self):
        raw = '{"tool": "math.add", "args": {"a": ' + "9" * 5000 + ', "b": 1}}'
        intent = parse_selection(raw)
        # Python 3.11+ refuses int literals this long; older versions parse them
        assert intent["tool"] in (DIRECT_ANSWER, "math.add")
