"""Textual implementation of the presentation sink.

Hides how render commands map onto widgets. The session calls these
methods from the app's event loop, so widgets are updated directly.
"""

from typing import TYPE_CHECKING

from ..conversation import Message, MessageHandle
from ..session import CredentialCallback, PresentationSink
from .screens import CredentialScreen
from .widgets import ChatHistoryWidget, PendingIndicator

if TYPE_CHECKING:
    from .app import ConciergeApp


class TextualSink(PresentationSink):
    """Routes render commands to the chat widgets of a running app."""

    def __init__(self, app: "ConciergeApp") -> None:
        self.app = app
        self._prompt_open = False

    @property
    def _history(self) -> ChatHistoryWidget:
        return self.app.query_chat("#chat-history", ChatHistoryWidget)

    def render_message(self, message: Message) -> None:
        self._history.add_message(message)

    def remove_message(self, handle: MessageHandle) -> None:
        self._history.remove_message(handle)

    def set_pending_indicator(self, visible: bool) -> None:
        self.app.query_chat("#pending-indicator", PendingIndicator).display = visible

    def prompt_for_credential(self, on_submit: CredentialCallback) -> None:
        if self._prompt_open:
            return
        self._prompt_open = True

        def _closed(accepted: bool | None) -> None:
            self._prompt_open = False
            if not accepted:
                self.app.notify("No API key saved", severity="warning", timeout=3)

        self.app.push_screen(CredentialScreen(on_submit), _closed)
