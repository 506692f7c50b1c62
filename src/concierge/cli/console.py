"""Console presentation sink for headless commands."""

from rich.console import Console
from rich.status import Status
from rich.text import Text

from ..conversation import Message, MessageHandle, MessageKind, Role
from ..session import CredentialCallback, PresentationSink


class ConsoleSink(PresentationSink):
    """Prints conversation entries to a Rich console.

    Removal is a no-op: printed lines cannot be retracted.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._status: Status | None = None

    def render_message(self, message: Message) -> None:
        if message.role == Role.USER:
            return  # the user already typed it
        if message.kind == MessageKind.RICH:
            self.console.print(message.content)
        else:
            self.console.print(Text(message.content))

    def remove_message(self, handle: MessageHandle) -> None:
        pass

    def set_pending_indicator(self, visible: bool) -> None:
        if visible and self._status is None:
            self._status = self.console.status("Assistant is typing...")
            self._status.start()
        elif not visible and self._status is not None:
            self._status.stop()
            self._status = None

    def prompt_for_credential(self, on_submit: CredentialCallback) -> None:
        self.console.print("[yellow]Run 'concierge set-key' to store an API key.[/yellow]")
