"""Anthropic Messages API analysis service."""

import asyncio
import logging
from typing import Any, Optional

import anthropic

from aria.errors import ServiceError

logger = logging.getLogger(__name__)


class AnthropicAnalysisService:
    """Analysis service backed by the Anthropic Messages API.

    Each call is a single attempt: the SDK's automatic retries are disabled
    and a timeout is surfaced as a ServiceError like any other failure.
    """

    DEFAULT_TIMEOUT = 120.0

    def __init__(self, api_key: Optional[str] = None, timeout: float | None = None):
        """Initialize the service.

        Args:
            api_key: Anthropic API key. Defaults to the SDK's own lookup
                     (the ANTHROPIC_API_KEY environment variable).
            timeout: Seconds to wait for one response. Defaults to 120.
        """
        self._api_key = api_key
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        """Create the client on first use."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    @property
    def timeout(self) -> float:
        return self._timeout

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Send one Messages API request and return the response payload.

        Raises:
            ServiceError: on any API failure, timeouts included
        """
        logger.debug(f"Requesting {model} with {len(messages)} message(s)")
        try:
            response = await asyncio.wait_for(
                self.client.messages.create(
                    model=model,
                    max_tokens=max_tokens,
                    system=system,
                    messages=messages,
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, anthropic.APITimeoutError) as e:
            raise ServiceError(None, f"API request timed out after {self._timeout:g}s") from e
        except anthropic.APIConnectionError as e:
            raise ServiceError(None, f"API request failed: {e}") from e
        except anthropic.APIStatusError as e:
            raise ServiceError(
                e.status_code, f"API request failed: {e.status_code} {e.message}"
            ) from e
        except anthropic.APIError as e:
            raise ServiceError(getattr(e, "status_code", None), f"API request failed: {e}") from e

        return response.model_dump()
