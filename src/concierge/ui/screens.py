"""Modal screens for the TUI.

This module hides the design decisions about:
- How the credential prompt is presented
- Validation feedback for rejected input
- Keyboard shortcuts for dialogs
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from ..errors import InvalidCredentialError
from ..session import CredentialCallback


class CredentialScreen(ModalScreen[bool]):
    """Modal password prompt for the completion-service key.

    Dismisses with True once the key is accepted, False if cancelled.
    """

    CSS = """
    CredentialScreen {
        align: center middle;
        background: $background 70%;
    }

    #credential-dialog {
        width: 64;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #credential-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
    }

    #credential-error {
        width: 100%;
        color: $error;
        height: auto;
    }

    #credential-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #credential-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, on_submit: CredentialCallback) -> None:
        super().__init__()
        self._on_submit = on_submit

    def compose(self) -> ComposeResult:
        with Vertical(id="credential-dialog"):
            yield Static("OpenAI API key", id="credential-title")
            yield Input(
                placeholder="Enter your OpenAI API key",
                password=True,
                id="credential-input",
            )
            yield Static("", id="credential-error")
            with Horizontal(id="credential-buttons"):
                yield Button("Save API Key", id="btn-save", variant="primary")
                yield Button("Cancel", id="btn-cancel", variant="default")

    def on_mount(self) -> None:
        self.query_one("#credential-input", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        await self._submit()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            await self._submit()
        elif event.button.id == "btn-cancel":
            self.dismiss(False)

    def action_cancel(self) -> None:
        self.dismiss(False)

    async def _submit(self) -> None:
        value = self.query_one("#credential-input", Input).value
        try:
            await self._on_submit(value)
        except InvalidCredentialError as e:
            self.query_one("#credential-error", Static).update(str(e))
            return
        self.dismiss(True)
