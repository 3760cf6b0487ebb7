"""Request building for batch analysis and follow-up chat."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Protocol, Sequence

from aria.errors import EmptyInput
from aria.models import ChatRole, ChatTurn, FileRecord
from aria.protocols import AnalysisService

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

ANALYSIS_SYSTEM_PROMPT = """You are Aria, the Margin Maven - an expert AI sales analysis agent with 20+ years of equivalent experience. Your mission: transform raw sales files into actionable forecasts, high-margin insights, and strategic recommendations.

CORE BEHAVIOR:
- Always respond professionally yet conversationally, like a trusted sales director
- Begin every analysis with: "Aria analyzing your sales data... Processing complete."
- End with 2-3 prioritized action items with confidence scores
- Never guess numbers - base ALL insights on provided file data only
- Calculate key metrics: total debits, outstanding balances, aging analysis, customer concentration

ANALYSIS TO PROVIDE:
1. **Financial Overview**: Total outstanding, average days outstanding, top customers by balance
2. **Risk Assessment**: Identify customers with balances >90 days old
3. **Cash Flow Forecast**: Estimate collection timeline based on aging
4. **Strategic Recommendations**: Prioritize which customers to follow up with first
5. **Cross-file Insights**: Compare patterns across multiple files if provided

Format your response with clear sections and actionable insights."""

CHAT_SYSTEM_PROMPT = (
    "You are Aria, an expert sales analysis AI. Continue the conversation based on "
    "previous context. Be concise and actionable."
)

# Opens chat histories that start with an analysis reply
ANALYSIS_REQUEST_STANDIN = "Please analyze the files I uploaded."

ANALYSIS_FALLBACK = "Analysis complete."
CHAT_FALLBACK = "I'm here to help!"

BANNER_RULE = "=" * 50


class AnalyzableFile(Protocol):
    name: str
    text: str
    was_truncated: bool


def extract_reply_text(payload: Optional[dict[str, Any]], fallback: str) -> str:
    """Return the first non-empty text block of a response, or ``fallback``."""
    for block in (payload or {}).get("content") or []:
        if isinstance(block, dict) and block.get("type") == "text" and block.get("text"):
            return block["text"]
    return fallback


def render_file(file: AnalyzableFile) -> str:
    flag = " [TRUNCATED]" if file.was_truncated else ""
    return f"FILE: {file.name}{flag}\n{BANNER_RULE}\n{file.text}\n\n"


def format_file_context(records: Sequence[FileRecord]) -> str:
    """Describe the analyzed files for the chat system prompt."""
    if not records:
        return ""
    described = ", ".join(record.describe() for record in records)
    return f"\n\nContext: User has uploaded {len(records)} file(s): {described}"


class AnalysisOrchestrator:
    """Turns files and chat turns into requests for an AnalysisService.

    Holds no session state. Service failures propagate unchanged; nothing is
    retried.
    """

    def __init__(
        self,
        service: AnalysisService,
        model: str = DEFAULT_MODEL,
        analysis_max_tokens: int = 4000,
        chat_max_tokens: int = 2000,
    ):
        self.service = service
        self.model = model
        self.analysis_max_tokens = analysis_max_tokens
        self.chat_max_tokens = chat_max_tokens

    async def batch_analyze(self, files: Sequence[AnalyzableFile]) -> str:
        """Analyze a batch of files in one request.

        Args:
            files: Objects with ``name``, ``text`` and ``was_truncated``

        Returns:
            The reply text

        Raises:
            EmptyInput: if ``files`` is empty
            ServiceError: if the service call fails
        """
        if not files:
            raise EmptyInput("No files to analyze")

        combined = "\n".join(render_file(file) for file in files)
        user_message = (
            f"Analyze these {len(files)} sales/accounts receivable file(s):\n\n{combined}"
        )
        logger.info(f"Requesting analysis of {len(files)} file(s) ({len(user_message):,} chars)")

        payload = await self.service.create_message(
            model=self.model,
            max_tokens=self.analysis_max_tokens,
            system=ANALYSIS_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": user_message}],
        )
        return extract_reply_text(payload, ANALYSIS_FALLBACK)

    async def continue_chat(
        self,
        prior_turns: Iterable[ChatTurn],
        new_user_text: str,
        file_context: str = "",
    ) -> str:
        """Send the running conversation plus a new user message."""
        messages = [
            turn.to_message() for turn in prior_turns if turn.role is not ChatRole.SYSTEM
        ]
        # The Messages API wants the conversation to open with a user turn
        if messages and messages[0]["role"] != ChatRole.USER.value:
            messages.insert(0, {"role": "user", "content": ANALYSIS_REQUEST_STANDIN})
        messages.append(ChatTurn.user(new_user_text).to_message())

        payload = await self.service.create_message(
            model=self.model,
            max_tokens=self.chat_max_tokens,
            system=CHAT_SYSTEM_PROMPT + file_context,
            messages=messages,
        )
        return extract_reply_text(payload, CHAT_FALLBACK)
