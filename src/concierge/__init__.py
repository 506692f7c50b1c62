"""
Concierge: the conversational assistant client of the Versico site.

Each module hides one design decision: how the credential is persisted
(credentials), how messages are recorded (conversation), how the
completion service is called (gateway), and how a session sequences
them (session).
"""

__version__ = "0.1.0"

from .conversation import ConversationLog, Message, MessageHandle, MessageKind, Role
from .credentials import CredentialStore, create_key_value_store
from .errors import (
    CompletionError,
    CompletionErrorKind,
    ConciergeError,
    InvalidCredentialError,
    MalformedResponseError,
    ProviderRejected,
    RequestPendingError,
    SessionClosedError,
    TransportFailure,
)
from .gateway import CompletionGateway
from .session import PresentationSink, SessionController, SessionState

__all__ = [
    "CompletionError",
    "CompletionErrorKind",
    "CompletionGateway",
    "ConciergeError",
    "ConversationLog",
    "CredentialStore",
    "InvalidCredentialError",
    "MalformedResponseError",
    "Message",
    "MessageHandle",
    "MessageKind",
    "PresentationSink",
    "ProviderRejected",
    "RequestPendingError",
    "Role",
    "SessionClosedError",
    "SessionController",
    "SessionState",
    "TransportFailure",
    "create_key_value_store",
]
