"""Session module.

Session state machine, typed UI commands and the presentation sink port.
"""

from .commands import (
    CloseSession,
    OpenSession,
    SendMessage,
    SessionCommand,
    SubmitCredential,
    ToggleSession,
)
from .controller import SessionController, SessionState
from .sink import CredentialCallback, PresentationSink

__all__ = [
    "CloseSession",
    "CredentialCallback",
    "OpenSession",
    "PresentationSink",
    "SendMessage",
    "SessionCommand",
    "SessionController",
    "SessionState",
    "SubmitCredential",
    "ToggleSession",
]
