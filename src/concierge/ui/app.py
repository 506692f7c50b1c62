"""Main Textual TUI application.

Turns widget events into session commands and hosts the presentation
sink the session renders through.
"""

import asyncio
import contextlib
from typing import TypeVar

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Footer, Header, Static

from ..config import LogLevel
from ..errors import SessionError
from ..session import (
    CloseSession,
    OpenSession,
    SendMessage,
    SessionController,
    ToggleSession,
)
from .sink import TextualSink
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, PendingIndicator

WidgetType = TypeVar("WidgetType", bound=Widget)


class ConciergeApp(App):
    """Textual TUI for the Versico assistant."""

    CSS = APP_CSS
    TITLE = "Versico Assistant"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_chat", "Toggle Chat"),
        Binding("escape", "close_chat", "Close Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
    ]

    def __init__(
        self,
        session: SessionController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self.sink = TextualSink(self)

    @property
    def session(self) -> SessionController:
        return self._session

    def query_chat(self, selector: str, expect_type: type[WidgetType]) -> WidgetType:
        """Query the chat screen, even while a modal is on top of it."""
        return self.screen_stack[0].query_one(selector, expect_type)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static("Press Ctrl+T to chat with the Versico assistant", id="launcher")
        with Vertical(id="chat-panel", classes="-closed"):
            yield ChatHistoryWidget(id="chat-history")
            yield PendingIndicator(id="pending-indicator")
            yield ChatInputBar(id="chat-input-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Attach the sink, replay the log and open the session."""
        self.theme = "catppuccin-mocha"

        log_panel = self.query_chat("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry("info", "TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(log_panel.log_entry)
        self._session.attach_sink(self.sink)

        # Messages appended before the app mounted (or while detached)
        for message in self._session.log:
            self.sink.render_message(message)

        await self._apply(OpenSession())

    def on_unmount(self) -> None:
        """Stop rendering into widgets that are going away."""
        self._session.detach_sink()

    def _sync_panel(self) -> None:
        panel = self.query_chat("#chat-panel", Vertical)
        launcher = self.query_chat("#launcher", Static)
        if self._session.is_open:
            panel.remove_class("-closed")
            launcher.display = False
            self.query_chat("#chat-input-bar", ChatInputBar).focus_input()
        else:
            panel.add_class("-closed")
            launcher.display = True

    async def _apply(self, command) -> None:
        await self._session.dispatch(command)
        self._sync_panel()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if event.value:
            self._send(event.value)

    @work(group="send")
    async def _send(self, text: str) -> None:
        """Send a message as a background worker.

        Not exclusive: a second send while one is pending is rejected by
        the session rather than cancelling the first.
        """
        try:
            await self._session.dispatch(SendMessage(text=text))
        except SessionError as e:
            self.notify(str(e), severity="warning", timeout=3)
        except Exception as e:
            self.query_chat("#debug-panel", DebugPanel).log_entry("error", "TUI", f"Exception: {e}")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)

    async def action_toggle_chat(self) -> None:
        await self._apply(ToggleSession())

    async def action_close_chat(self) -> None:
        await self._apply(CloseSession())

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_chat("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_chat("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    session: SessionController,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    The session is started before the app runs and shut down after it
    exits, whichever way it exits.

    Args:
        session: Session controller the UI drives
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ConciergeApp(session=session, log_level=log_level)
    async with session:
        with contextlib.suppress(KeyboardInterrupt, asyncio.CancelledError):
            await app.run_async()
