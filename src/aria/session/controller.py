"""Session controller: the only writer of SessionState."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from aria.errors import AriaError, EmptyInput, ServiceError, SessionBusy
from aria.models import BusyState, ChatTurn, FileRecord, RawFile, SessionState
from aria.orchestrator import AnalysisOrchestrator, format_file_context
from aria.pipeline import prepare_batch
from aria.protocols import Truncator
from aria.truncators import DEFAULT_MAX_CHARS, WindowTruncator
from aria.utils import is_supported

logger = logging.getLogger(__name__)


class SessionController:
    """Owns one conversation and the files analyzed within it.

    Every mutation of the session goes through this class. The ``busy``
    field gates the two operations that call the analysis service; it is
    checked and set before the first await, so at most one request is in
    flight per session.
    """

    def __init__(
        self,
        orchestrator: AnalysisOrchestrator,
        max_chars: int = DEFAULT_MAX_CHARS,
        truncator: Truncator | None = None,
    ):
        self.orchestrator = orchestrator
        self.truncator = truncator or WindowTruncator(max_chars)
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.busy is not BusyState.IDLE

    def file_context(self) -> str:
        return format_file_context(self._state.analyzed_files)

    # Queue management

    def queue_files(self, files: Iterable[RawFile]) -> list[str]:
        """Add files to the pending queue, dropping unsupported ones.

        Returns:
            Warnings for the files that were skipped (also kept in
            ``state.warnings`` until the next call)
        """
        warnings = []
        for raw in files:
            if not is_supported(raw.name):
                warnings.append(f"Skipped {raw.name}: unsupported format")
                logger.warning(f"Skipping {raw.name}: unsupported format")
                continue
            self._state.pending_files.append(raw)

        self._state.warnings = warnings
        return warnings

    def remove_pending(self, index: int) -> None:
        """Remove one pending file; out-of-range indexes are ignored."""
        if 0 <= index < len(self._state.pending_files):
            del self._state.pending_files[index]

    # Service-backed operations

    @contextmanager
    def _occupy(self, phase: BusyState) -> Iterator[None]:
        if self.is_busy:
            raise SessionBusy(f"Session is busy ({self._state.busy.value})")
        self._state.busy = phase
        try:
            yield
        finally:
            self._state.busy = BusyState.IDLE

    async def run_analysis(self) -> Optional[str]:
        """Analyze every pending file in one batch.

        Returns:
            The assistant's reply, or None if the batch failed (the reason
            is in ``state.last_error``)

        Raises:
            EmptyInput: if nothing is pending
            SessionBusy: if another operation is in flight
        """
        state = self._state
        if not state.pending_files:
            raise EmptyInput("No pending files to analyze")

        with self._occupy(BusyState.EXTRACTING_FILES):
            batch = list(state.pending_files)
            state.last_error = None
            logger.info(f"Preparing {len(batch)} file(s)")

            try:
                prepared = await prepare_batch(batch, self.truncator)
            except AriaError as e:
                # Nothing has been sent; the queue stays as it was for a retry
                state.transcript.append(ChatTurn.system(f"Error: {e}"))
                state.last_error = str(e)
                logger.warning(f"Batch aborted: {e}")
                return None

            state.busy = BusyState.AWAITING_SERVICE
            names = ", ".join(file.name for file in prepared)
            state.transcript.append(ChatTurn.system(f"{len(prepared)} file(s) analyzed: {names}"))

            # The batch leaves the queue whatever the outcome, so a retry
            # never presents the same files twice.
            self._retire(batch)
            state.analyzed_files.extend(FileRecord.from_prepared(file) for file in prepared)

            try:
                reply = await self.orchestrator.batch_analyze(prepared)
            except ServiceError as e:
                state.transcript.append(ChatTurn.system(f"Error: {e.message}"))
                state.last_error = e.message
                logger.warning(f"Analysis failed: {e.message}")
                return None

            state.transcript.append(ChatTurn.assistant(reply))
            state.last_error = None
            logger.info(f"Analysis complete for {len(prepared)} file(s)")
            return reply

    def _retire(self, batch: list[RawFile]) -> None:
        # Match by identity: files queued while the batch ran stay pending
        batch_ids = {id(raw) for raw in batch}
        self._state.pending_files = [
            raw for raw in self._state.pending_files if id(raw) not in batch_ids
        ]

    async def send_message(self, text: str) -> str:
        """Send a chat message and append the assistant's answer.

        Returns:
            The assistant turn's text (an apology carrying the error message
            if the service call failed)

        Raises:
            EmptyInput: if ``text`` is blank
            SessionBusy: if another operation is in flight
        """
        if not text or not text.strip():
            raise EmptyInput("Message is blank")

        state = self._state
        with self._occupy(BusyState.AWAITING_SERVICE):
            prior_turns = list(state.transcript)
            state.transcript.append(ChatTurn.user(text))
            state.last_error = None

            try:
                reply = await self.orchestrator.continue_chat(
                    prior_turns, text, self.file_context()
                )
            except ServiceError as e:
                state.last_error = e.message
                logger.warning(f"Chat failed: {e.message}")
                reply = f"I encountered an error: {e.message}. Please try again."

            state.transcript.append(ChatTurn.assistant(reply))
            return reply

    # Session lifecycle

    def reset(self) -> None:
        """Start a new conversation."""
        if self.is_busy:
            raise SessionBusy("Cannot reset while an operation is in flight")
        self._state = SessionState()
        logger.info("Session reset")

    def dismiss_error(self) -> None:
        self._state.last_error = None
