"""Exception hierarchy for the assistant client.

Completion failures are recovered inside the session (one apology message);
session and credential errors are raised to the caller.
"""

from enum import Enum


class ConciergeError(Exception):
    """Base class for all client errors."""


class InvalidCredentialError(ConciergeError, ValueError):
    """Submitted credential is empty after trimming (user-correctable)."""

    def __init__(self, message: str = "Please enter a valid API key"):
        super().__init__(message)


class CompletionErrorKind(str, Enum):
    """Why a completion request failed."""

    PROVIDER_REJECTED = "provider_rejected"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"


class CompletionError(ConciergeError):
    """Base class for completion request failures."""

    kind: CompletionErrorKind

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ProviderRejected(CompletionError):
    """The provider answered with a non-2xx status."""

    kind = CompletionErrorKind.PROVIDER_REJECTED

    def __init__(self, status: int, detail: str = ""):
        msg = f"Provider rejected request with status {status}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg, status=status)


class TransportFailure(CompletionError):
    """Timeout, DNS, connection or abort before a response arrived."""

    kind = CompletionErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str):
        super().__init__(f"Transport failure: {message}")


class MalformedResponseError(CompletionError):
    """Response body lacks a non-empty choices[0].message.content."""

    kind = CompletionErrorKind.MALFORMED_RESPONSE

    def __init__(self, message: str):
        super().__init__(f"Malformed response: {message}")


class SessionError(ConciergeError):
    """Base class for session state violations."""


class RequestPendingError(SessionError):
    """A completion request is already in flight."""

    def __init__(self) -> None:
        super().__init__("A reply is still pending; wait for it before sending again")


class SessionClosedError(SessionError):
    """The session is closed and cannot accept messages."""

    def __init__(self) -> None:
        super().__init__("Open the session before sending messages")
