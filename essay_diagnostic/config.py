"""
Runtime configuration

Values come from the environment (a local .env file is loaded first), with
explicit arguments taking precedence, e.g. an api_key passed on the command
line wins over ANTHROPIC_API_KEY.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "claude-sonnet-4-20250514"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Model and pipeline settings for one process"""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL

    # Per-dimension semantic scorers
    analyzer_temperature: float = 0.3
    analyzer_max_tokens: int = 2048

    # Consolidated holistic call (large JSON, keep room to avoid truncation)
    holistic_temperature: float = 0.3
    holistic_max_tokens: int = 6000

    # Free-form revision hand-off
    generation_temperature: float = 0.7
    generation_max_tokens: int = 2048

    request_timeout: float = 90.0
    heuristic_fallback: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> "Settings":
        """Build settings from ESSAY_DIAGNOSTIC_* variables and ANTHROPIC_API_KEY"""
        return cls(
            api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"),
            model=os.environ.get("ESSAY_DIAGNOSTIC_MODEL", DEFAULT_MODEL),
            analyzer_temperature=_env_float("ESSAY_DIAGNOSTIC_ANALYZER_TEMPERATURE", 0.3),
            analyzer_max_tokens=_env_int("ESSAY_DIAGNOSTIC_ANALYZER_MAX_TOKENS", 2048),
            holistic_temperature=_env_float("ESSAY_DIAGNOSTIC_HOLISTIC_TEMPERATURE", 0.3),
            holistic_max_tokens=_env_int("ESSAY_DIAGNOSTIC_HOLISTIC_MAX_TOKENS", 6000),
            generation_temperature=_env_float("ESSAY_DIAGNOSTIC_GENERATION_TEMPERATURE", 0.7),
            generation_max_tokens=_env_int("ESSAY_DIAGNOSTIC_GENERATION_MAX_TOKENS", 2048),
            request_timeout=_env_float("ESSAY_DIAGNOSTIC_TIMEOUT", 90.0),
            heuristic_fallback=_env_bool("ESSAY_DIAGNOSTIC_HEURISTIC_FALLBACK", False),
            log_level=os.environ.get("ESSAY_DIAGNOSTIC_LOG_LEVEL", "INFO"),
        )


def get_settings(api_key: Optional[str] = None) -> Settings:
    return Settings.from_env(api_key=api_key)
