"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering and removal
- Pending indicator display
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..config import LogLevel
from ..conversation import Message, MessageHandle, MessageKind, Role


class HistoryInput(Input):
    """Single-line chat input that remembers what was sent.

    Up/Down walk back and forth through earlier messages; stepping past
    the newest entry restores the draft that was being typed. Pasted
    text is flattened onto one line.
    """

    BINDINGS = [
        Binding("up", "history_back", "Previous", show=False),
        Binding("down", "history_forward", "Next", show=False),
    ]

    MAX_HISTORY = 100

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._cursor: int | None = None  # None while editing the draft
        self._draft: str = ""

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def add_to_history(self, text: str) -> None:
        """Remember a sent message and return to an empty draft."""
        if text and (not self._history or self._history[-1] != text):
            self._history.append(text)
            del self._history[:-self.MAX_HISTORY]
        self._cursor = None
        self._draft = ""

    def action_history_back(self) -> None:
        if not self._history:
            return
        if self._cursor is None:
            self._draft = self.value
            self._cursor = len(self._history) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        self._show(self._history[self._cursor])

    def action_history_forward(self) -> None:
        if self._cursor is None:
            return
        if self._cursor + 1 < len(self._history):
            self._cursor += 1
            self._show(self._history[self._cursor])
        else:
            self._cursor = None
            self._show(self._draft)

    def _show(self, text: str) -> None:
        self.value = text
        self.cursor_position = len(text)

    def _on_paste(self, event: events.Paste) -> None:
        if not event.text:
            return
        flat = " ".join(event.text.split())
        position = self.cursor_position
        self.value = self.value[:position] + flat + self.value[position:]
        self.cursor_position = position + len(flat)
        event.prevent_default()
        event.stop()


class ChatInputBar(Horizontal):
    """Chat input bar with single-line input and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder="Ask me anything...", id="chat-input")
        yield Button("Send", id="send-btn", variant="success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value.strip()
        if value:
            text_input.add_to_history(value)
            text_input.value = ""
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class PendingIndicator(Static):
    """Transient 'typing' line shown while a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("Assistant is typing...", *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history keyed by message id."""

    BORDER_TITLE = "Versico Assistant"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: dict[str, Message] = {}

    @staticmethod
    def entry_id(message_id: str) -> str:
        return f"msg-{message_id}"

    def add_message(self, message: Message) -> None:
        """Render a message at the end of the history."""
        self._messages[message.id] = message
        self.mount(self._build_entry(message))
        self._update_subtitle()
        self.scroll_end(animate=False)

    def remove_message(self, handle: MessageHandle) -> None:
        """Remove a rendered message, if present."""
        if self._messages.pop(handle.message_id, None) is None:
            return
        for entry in self.query(f"#{self.entry_id(handle.message_id)}"):
            entry.remove()
        self._update_subtitle()

    def get_last_response(self) -> str | None:
        """Get the last assistant text response."""
        for msg in reversed(self._messages.values()):
            if msg.role == Role.ASSISTANT and msg.kind == MessageKind.TEXT:
                return msg.content
        return None

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"{len(self._messages)} messages"

    def _build_entry(self, msg: Message) -> Vertical:
        if msg.role == Role.USER:
            header, css_class = "> You", "user-message"
        else:
            header, css_class = "< Assistant", "assistant-message"
        if msg.kind == MessageKind.RICH:
            css_class = "prompt-message"

        timestamp = datetime.now().strftime("%H:%M:%S")
        container = Vertical(
            id=self.entry_id(msg.id),
            classes=f"chat-message {css_class}",
        )
        container.compose_add_child(Static(f"{header} [{timestamp}]", classes="message-header", markup=False))

        if msg.kind == MessageKind.RICH:
            # Rich console markup, not Textual content markup
            container.compose_add_child(Static(Text.from_markup(msg.content), classes="message-content"))
        elif msg.role == Role.ASSISTANT:
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            # Plain text for user messages, never parsed as markup
            container.compose_add_child(Static(Text(msg.content), classes="message-content"))
        return container


class DebugPanel(RichLog):
    """Log panel for session tracing with level filtering.

    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Gateway": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(self, level: str, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            level: 'debug', 'info', 'warning' or 'error'
            component: Component name (TUI, Session, Gateway)
            message: Log message
        """
        numeric = LogLevel.from_string(level)
        if numeric < self._log_level:
            return

        timestamp = datetime.now().strftime("%H:%M:%S")
        level_color = self.LEVEL_COLORS.get(numeric, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        self.write(Text.assemble(
            (timestamp, "dim"),
            " ",
            (f"{LogLevel.name(numeric):<5}", level_color),
            " ",
            (f"[{component}]", comp_color),
            " ",
            message,
        ))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
