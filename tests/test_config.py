"""
Tests for aria/config.py
Environment parsing and controller wiring.
"""
import pytest

from aria.config import Settings, build_controller
from aria.orchestrator import DEFAULT_MODEL
from aria.services import AnthropicAnalysisService

from conftest import FakeAnalysisService

ENV_VARS = [
    "ANTHROPIC_API_KEY",
    "ARIA_MODEL",
    "ARIA_ANALYSIS_MAX_TOKENS",
    "ARIA_CHAT_MAX_TOKENS",
    "ARIA_MAX_CHARS",
    "ARIA_TIMEOUT_SECONDS",
    "ARIA_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    """Test Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.api_key is None
        assert settings.model == DEFAULT_MODEL
        assert settings.analysis_max_tokens == 4000
        assert settings.chat_max_tokens == 2000
        assert settings.max_chars_per_file == 15000
        assert settings.timeout_seconds == 120
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        monkeypatch.setenv("ARIA_MODEL", "claude-other")
        monkeypatch.setenv("ARIA_MAX_CHARS", "8000")
        monkeypatch.setenv("ARIA_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("ARIA_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.api_key == "sk-test"
        assert settings.model == "claude-other"
        assert settings.max_chars_per_file == 8000
        assert settings.timeout_seconds == 30
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["lots", "1.5", "0", "-10"])
    def test_invalid_integer(self, monkeypatch, value):
        monkeypatch.setenv("ARIA_MAX_CHARS", value)
        with pytest.raises(ValueError, match="ARIA_MAX_CHARS"):
            Settings.from_env()

    def test_override_ignores_none(self):
        settings = Settings().override(model="claude-x", max_chars_per_file=None)
        assert settings.model == "claude-x"
        assert settings.max_chars_per_file == 15000


class TestBuildController:
    """Test build_controller wiring."""

    def test_with_injected_service(self):
        service = FakeAnalysisService()
        settings = Settings(model="claude-x", max_chars_per_file=900, chat_max_tokens=50)

        controller = build_controller(settings, service)

        assert controller.orchestrator.service is service
        assert controller.orchestrator.model == "claude-x"
        assert controller.orchestrator.chat_max_tokens == 50
        assert controller.truncator.max_chars == 900
        assert controller.state.transcript == []

    def test_defaults_to_anthropic(self):
        controller = build_controller(Settings(api_key="sk-test", timeout_seconds=15))
        service = controller.orchestrator.service
        assert isinstance(service, AnthropicAnalysisService)
        assert service.timeout == 15
