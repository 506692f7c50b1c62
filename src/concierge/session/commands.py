"""Typed commands delivered from the presentation layer to the session."""

from pydantic import BaseModel, ConfigDict, Field


class SessionCommand(BaseModel):
    """Base class for UI-originated commands."""

    model_config = ConfigDict(frozen=True)


class OpenSession(SessionCommand):
    """Show the conversation surface."""


class CloseSession(SessionCommand):
    """Hide the conversation surface."""


class ToggleSession(SessionCommand):
    """Open if closed, close otherwise."""


class SubmitCredential(SessionCommand):
    """User entered a credential."""

    model_config = ConfigDict(frozen=True, hide_input_in_errors=True)

    secret: str = Field(repr=False)


class SendMessage(SessionCommand):
    """User submitted a chat message."""

    text: str
