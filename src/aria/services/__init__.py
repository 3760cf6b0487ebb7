"""External analysis services."""

from aria.services.anthropic_service import AnthropicAnalysisService

__all__ = ["AnthropicAnalysisService"]
