"""Aria Console - an interactive TUI for one analysis session."""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Log,
    Rule,
    Static,
)

from aria.errors import AriaError
from aria.models import BusyState, ChatRole, RawFile, SessionState
from aria.session import SessionController
from aria.utils import SUPPORTED_EXTENSIONS, detect

STATUS_COLORS = {
    BusyState.IDLE: "green",
    BusyState.EXTRACTING_FILES: "yellow",
    BusyState.AWAITING_SERVICE: "cyan",
}

ROLE_LABELS = {
    ChatRole.SYSTEM: "--",
    ChatRole.USER: "you>",
    ChatRole.ASSISTANT: "aria>",
}


class StatusPanel(Static):
    """Session status display."""

    def compose(self) -> ComposeResult:
        yield Static(id="status-content")

    def update_display(self, state: SessionState) -> None:
        content = self.query_one("#status-content", Static)
        color = STATUS_COLORS[state.busy]
        error = f"\n\n[b red]ERROR[/]\n[red]{escape(state.last_error)}[/]" if state.last_error else ""

        content.update(f"""[b]STATUS[/b]  [{color}]{state.busy.value.upper()}[/]

[b]FILES[/b]
  Pending     [yellow]{len(state.pending_files):,}[/]
  Analyzed    [green]{len(state.analyzed_files):,}[/]

[b]CHAT[/b]
  Turns       [magenta]{len(state.transcript):,}[/]{error}""")


class PendingTable(DataTable):
    """Files waiting for the next analysis batch."""

    def on_mount(self) -> None:
        self.add_columns("File", "Kind", "Size")
        self.cursor_type = "row"

    def show(self, files: list[RawFile]) -> None:
        self.clear()
        for raw in files:
            kind = detect(raw.name)
            size = raw.size_bytes
            size_str = f"{size / 1024:.1f}KB" if size >= 1024 else f"{size}B"
            display_name = raw.name if len(raw.name) <= 30 else raw.name[:27] + "..."
            self.add_row(display_name, kind.value if kind else "?", size_str)


class AriaConsole(App):
    """Upload files, analyze them and chat about the results."""

    CSS = """
    #main-container {
        layout: horizontal;
        height: 100%;
    }

    #left-panel {
        width: 42;
        background: $surface-darken-1;
        border-right: solid $primary-darken-2;
        padding: 1;
    }

    #center-panel {
        width: 1fr;
        padding: 1;
    }

    StatusPanel {
        height: auto;
        padding: 1;
        background: $surface-darken-2;
        border: round $primary;
        margin-bottom: 1;
    }

    .button-row {
        layout: horizontal;
        height: 3;
        margin-bottom: 1;
    }

    .button-row Button {
        margin-right: 1;
    }

    PendingTable {
        height: 1fr;
        border: round $primary-darken-1;
    }

    #chat-log {
        height: 1fr;
        border: round $primary-darken-2;
        background: $surface-darken-2;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("f5", "analyze", "Analyze", show=True),
        Binding("f8", "new_conversation", "New conversation", show=True),
        Binding("f2", "remove_pending", "Remove file", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    TITLE = "Aria"
    SUB_TITLE = "Sales Intelligence"

    def __init__(self, controller: SessionController):
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            # Left panel - status and file queue
            with Vertical(id="left-panel"):
                yield StatusPanel()
                yield Label("Add files", classes="section-title")
                yield Input(
                    placeholder=f"Path(s): {', '.join('.' + e for e in SUPPORTED_EXTENSIONS)}",
                    id="path-input",
                )
                with Horizontal(classes="button-row"):
                    yield Button("Queue", id="queue-btn", variant="primary")
                    yield Button("Analyze", id="analyze-btn", variant="success")
                    yield Button("Remove", id="remove-btn", variant="warning")
                yield Label("PENDING", classes="section-title")
                yield PendingTable(id="pending-table")

            # Center panel - conversation
            with Vertical(id="center-panel"):
                yield Label("CONVERSATION", classes="section-title")
                yield Log(id="chat-log", auto_scroll=True)
                yield Rule()
                yield Input(placeholder="Ask about your data...", id="message-input")
                with Horizontal(classes="button-row"):
                    yield Button("Send", id="send-btn", variant="primary")
                    yield Button("Dismiss error", id="dismiss-btn")
                    yield Button("New conversation", id="reset-btn", variant="error")

        yield Footer()

    def on_mount(self) -> None:
        self.refresh_view()
        # Busy transitions happen inside workers; poll to show them
        self.set_interval(0.25, self.refresh_status)

    def refresh_status(self) -> None:
        state = self.controller.state
        self.query_one(StatusPanel).update_display(state)
        busy = self.controller.is_busy
        for button_id in ("#analyze-btn", "#send-btn", "#reset-btn"):
            self.query_one(button_id, Button).disabled = busy

    def refresh_view(self) -> None:
        """Redraw everything from the session state."""
        state = self.controller.state
        self.refresh_status()
        self.query_one("#pending-table", PendingTable).show(state.pending_files)

        chat_log = self.query_one("#chat-log", Log)
        chat_log.clear()
        if not state.transcript:
            chat_log.write_line("Upload your sales data to get started.")
        for turn in state.transcript:
            chat_log.write_line(f"{ROLE_LABELS[turn.role]} {turn.text}")
            chat_log.write_line("")

    def _notify(self, message: str, severity: str = "information") -> None:
        self.notify(escape(message), severity=severity)

    # Event handlers

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        actions = {
            "queue-btn": self.action_queue,
            "analyze-btn": self.action_analyze,
            "remove-btn": self.action_remove_pending,
            "send-btn": self.action_send,
            "dismiss-btn": self.action_dismiss_error,
            "reset-btn": self.action_new_conversation,
        }
        action = actions.get(event.button.id or "")
        if action:
            action()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "path-input":
            self.action_queue()
        elif event.input.id == "message-input":
            self.action_send()

    # Actions

    def action_queue(self) -> None:
        """Queue the files named in the path input."""
        path_input = self.query_one("#path-input", Input)
        paths = [p for p in path_input.value.split() if p]
        if not paths:
            return

        files = []
        for path in paths:
            try:
                files.append(RawFile.from_path(Path(path).expanduser()))
            except OSError as e:
                self._notify(f"Cannot read {path}: {e.strerror or e}", "error")

        for warning in self.controller.queue_files(files):
            self._notify(warning, "warning")
        path_input.value = ""
        self.refresh_view()

    def action_remove_pending(self) -> None:
        table = self.query_one("#pending-table", PendingTable)
        if table.row_count:
            self.controller.remove_pending(table.cursor_row)
            self.refresh_view()

    def action_dismiss_error(self) -> None:
        self.controller.dismiss_error()
        self.refresh_status()

    def action_new_conversation(self) -> None:
        try:
            self.controller.reset()
        except AriaError as e:
            self._notify(str(e), "warning")
            return
        self.refresh_view()

    def action_analyze(self) -> None:
        if not self.controller.state.pending_files:
            self._notify("Queue at least one file first", "warning")
            return
        self.run_analysis()

    def action_send(self) -> None:
        message_input = self.query_one("#message-input", Input)
        text = message_input.value
        if not text.strip():
            return
        message_input.value = ""
        self.send_message(text)

    @work(group="session")
    async def run_analysis(self) -> None:
        """Run the pending batch in a worker."""
        try:
            await self.controller.run_analysis()
        except AriaError as e:
            self._notify(str(e), "warning")
        self.refresh_view()

    @work(group="session")
    async def send_message(self, text: str) -> None:
        """Send a chat message in a worker."""
        try:
            await self.controller.send_message(text)
        except AriaError as e:
            self._notify(str(e), "warning")
        self.refresh_view()


def main(controller: SessionController) -> None:
    """Run the Aria Console."""
    app = AriaConsole(controller)
    app.run()
