#!/usr/bin/env python3
"""
Single Agent Demo - console launcher
Wires the local Ollama model to the math, time and joke tools and runs the chat loop
"""
import asyncio
import logging
import sys

import httpx

from single_agent.config import settings, check_settings
from single_agent.console import SessionLoop, banner
from single_agent.errors import ConfigError
from single_agent.jokes import JokeFetcher
from single_agent.llm import OpenAICompletionClient
from single_agent.pipeline import IntentRouter
from single_agent.session import Session
from single_agent.tools import ToolExecutor, build_registry

logger = logging.getLogger(__name__)


def setup_logging():
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # httpx and openai log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


async def main():
    """Build the agent and run the console loop until the user exits"""
    registry = build_registry()
    completion = OpenAICompletionClient(settings)

    async with httpx.AsyncClient(timeout=settings.joke_timeout_s) as http:
        session = Session(joke_fetcher=JokeFetcher(http))
        router = IntentRouter(completion, registry, ToolExecutor(registry, session))
        logger.info(f"[{session.session_id}] Agent started, model={settings.agent_model}")

        print(banner(registry))
        print()
        try:
            await SessionLoop(router).run()
        finally:
            await completion.close()


def run():
    # Emoji output on terminals with an ASCII locale
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
    setup_logging()
    try:
        check_settings(settings)
    except ConfigError as e:
        raise SystemExit(f"FATAL: {e}")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")


if __name__ == "__main__":
    run()
