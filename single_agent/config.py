from pydantic import BaseModel
import os
import logging
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Load .env file if it exists (before reading os.getenv)
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                # Only set if not already in environment (env vars take precedence)
                if key not in os.environ:
                    os.environ[key] = value


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Completion service (Ollama OpenAI-compatible endpoint)
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1")
    ollama_api_key: str = os.getenv("OLLAMA_API_KEY", "ollama")  # Ollama ignores it, the client requires one
    agent_model: str = os.getenv("AGENT_MODEL", "llama3.2:1b")
    agent_temperature: float = float(os.getenv("AGENT_TEMPERATURE", "0.1"))
    llm_timeout_s: float = float(os.getenv("LLM_TIMEOUT", "120"))

    # Joke source
    joke_api_url: str = os.getenv("JOKE_API_URL", "https://v2.jokeapi.dev/joke")
    joke_timeout_s: float = float(os.getenv("JOKE_TIMEOUT", "10"))
    joke_safe_mode: bool = _env_bool("JOKE_SAFE_MODE", "true")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()


def check_settings(cfg: Settings = settings) -> None:
    """Refuse to start with a configuration the agent cannot run with."""
    problems = []
    if not cfg.agent_model.strip():
        problems.append("AGENT_MODEL is empty")
    if not 0.0 <= cfg.agent_temperature <= 2.0:
        problems.append(f"AGENT_TEMPERATURE must be within [0, 2], got {cfg.agent_temperature}")
    if cfg.llm_timeout_s <= 0:
        problems.append(f"LLM_TIMEOUT must be positive, got {cfg.llm_timeout_s}")
    if cfg.joke_timeout_s <= 0:
        problems.append(f"JOKE_TIMEOUT must be positive, got {cfg.joke_timeout_s}")
    if problems:
        raise ConfigError("; ".join(problems))

    logger.info(f"Config: completion → {cfg.ollama_base_url}, model={cfg.agent_model}, "
                f"temperature={cfg.agent_temperature}")
    logger.info(f"Config: jokes → {cfg.joke_api_url} (safe_mode={cfg.joke_safe_mode})")
