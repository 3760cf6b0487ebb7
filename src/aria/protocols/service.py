"""Protocol for the external text-generation service."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AnalysisService(Protocol):
    """Protocol for request/response text-generation endpoints.

    Allows swapping the Anthropic API for a local model or a test double.
    Implementations raise ServiceError on any non-success outcome.
    """

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Send one request.

        Returns: payload shaped like ``{"content": [{"type": "text", "text": ...}]}``
        """
        ...
