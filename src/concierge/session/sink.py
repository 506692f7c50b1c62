"""Presentation sink interface.

The session pushes render commands through this interface and never
reads anything back. Implementations live in the presentation layer.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from ..conversation import Message, MessageHandle

CredentialCallback = Callable[[str], Awaitable[None]]


class PresentationSink(ABC):
    """Receives render commands from a SessionController."""

    @abstractmethod
    def render_message(self, message: Message) -> None:
        """Display a message appended to the conversation."""

    @abstractmethod
    def remove_message(self, handle: MessageHandle) -> None:
        """Remove a previously rendered message."""

    @abstractmethod
    def set_pending_indicator(self, visible: bool) -> None:
        """Show or hide the pending-reply indicator."""

    @abstractmethod
    def prompt_for_credential(self, on_submit: CredentialCallback) -> None:
        """Ask the user for a credential.

        Args:
            on_submit: Coroutine function to call with the entered secret.
                It raises InvalidCredentialError for empty input.
        """
