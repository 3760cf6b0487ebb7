"""Runtime configuration, read from the environment."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from aria.orchestrator import DEFAULT_MODEL, AnalysisOrchestrator
from aria.protocols import AnalysisService
from aria.session import SessionController
from aria.truncators import DEFAULT_MAX_CHARS


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Aria settings.

    Every field can be set through an environment variable:

    - ANTHROPIC_API_KEY: API key for the analysis service
    - ARIA_MODEL: model identifier
    - ARIA_ANALYSIS_MAX_TOKENS / ARIA_CHAT_MAX_TOKENS: reply budgets
    - ARIA_MAX_CHARS: per-file character budget after truncation
    - ARIA_TIMEOUT_SECONDS: bound on one service call
    - ARIA_LOG_LEVEL: logging level name
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    analysis_max_tokens: int = 4000
    chat_max_tokens: int = 2000
    max_chars_per_file: int = DEFAULT_MAX_CHARS
    timeout_seconds: int = 120
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            model=os.getenv("ARIA_MODEL") or DEFAULT_MODEL,
            analysis_max_tokens=_env_int("ARIA_ANALYSIS_MAX_TOKENS", 4000),
            chat_max_tokens=_env_int("ARIA_CHAT_MAX_TOKENS", 2000),
            max_chars_per_file=_env_int("ARIA_MAX_CHARS", DEFAULT_MAX_CHARS),
            timeout_seconds=_env_int("ARIA_TIMEOUT_SECONDS", 120),
            log_level=(os.getenv("ARIA_LOG_LEVEL") or "INFO").upper(),
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with the non-None values in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def build_controller(
    settings: Settings, service: Optional[AnalysisService] = None
) -> SessionController:
    """Wire a session controller from settings.

    Args:
        settings: Configuration to use
        service: Analysis service; defaults to the Anthropic API

    Returns:
        A SessionController with an empty session
    """
    if service is None:
        # Import here to avoid loading the SDK unless needed
        from aria.services import AnthropicAnalysisService

        service = AnthropicAnalysisService(
            api_key=settings.api_key, timeout=settings.timeout_seconds
        )

    orchestrator = AnalysisOrchestrator(
        service,
        model=settings.model,
        analysis_max_tokens=settings.analysis_max_tokens,
        chat_max_tokens=settings.chat_max_tokens,
    )
    return SessionController(orchestrator, max_chars=settings.max_chars_per_file)
