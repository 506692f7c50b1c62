"""Session controller.

Owns the conversation log and the session state machine:

    closed -> open -> awaiting_credential -> open

At most one completion request is in flight at a time. Message append
order equals the order operations were invoked, because the reply to
call N is appended before call N+1 can pass the pending check.
"""

from enum import Enum
from typing import Any

from ..config import (
    APOLOGY_TEXT,
    CHAT_MESSAGE_MAX_PREVIEW,
    CREDENTIAL_PROMPT_MARKUP,
    CREDENTIAL_SAVED_TEXT,
)
from ..conversation import ConversationLog, Message, MessageHandle, MessageKind, Role
from ..credentials import CredentialStore
from ..errors import CompletionError, RequestPendingError, SessionClosedError
from ..gateway import CompletionGateway
from .commands import (
    CloseSession,
    OpenSession,
    SendMessage,
    SessionCommand,
    SubmitCredential,
    ToggleSession,
)
from .sink import PresentationSink


class SessionState(str, Enum):
    """Visibility and readiness of the conversation surface."""

    CLOSED = "closed"
    OPEN = "open"
    AWAITING_CREDENTIAL = "awaiting_credential"


class SessionController:
    """Drives one chat session.

    Construct one per client, then use it as an async context manager
    (or call start() and shutdown()) to make its lifetime explicit:

        async with SessionController(credentials, gateway, sink=sink) as session:
            await session.open()
            reply = await session.send("What plans do you offer?")
    """

    def __init__(
        self,
        credentials: CredentialStore,
        gateway: CompletionGateway,
        log: ConversationLog | None = None,
        sink: PresentationSink | None = None,
    ) -> None:
        self._credentials = credentials
        self._gateway = gateway
        self._log = log if log is not None else ConversationLog()
        self._sink = sink
        self._state = SessionState.CLOSED
        self._pending = False
        self._prompt_handle: MessageHandle | None = None
        self._debug_callback: Any | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while a completion request is in flight."""
        return self._pending

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def is_open(self) -> bool:
        return self._state is not SessionState.CLOSED

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def attach_sink(self, sink: PresentationSink) -> None:
        self._sink = sink

    def detach_sink(self) -> None:
        """Stop delivering render commands. Later calls become no-ops."""
        self._sink = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for session and gateway logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback
        if hasattr(self._gateway, "set_debug_callback"):
            self._gateway.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Connect the credential backend."""
        await self._credentials.connect()
        self._debug("debug", f"Credential backend connected ({self._credentials.backend.backend_type})")

    async def shutdown(self) -> None:
        """Tear down the session: detach the sink and release resources."""
        self.detach_sink()
        self._state = SessionState.CLOSED
        try:
            await self._gateway.close()
        finally:
            await self._credentials.disconnect()
        self._debug("debug", "Session shut down")

    async def __aenter__(self) -> "SessionController":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.shutdown()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def dispatch(self, command: SessionCommand) -> Message | None:
        """Apply a typed UI command.

        Returns the assistant reply for SendMessage, None otherwise.
        """
        if isinstance(command, ToggleSession):
            await self.toggle()
        elif isinstance(command, OpenSession):
            await self.open()
        elif isinstance(command, CloseSession):
            self.close()
        elif isinstance(command, SubmitCredential):
            await self.submit_credential(command.secret)
        elif isinstance(command, SendMessage):
            return await self.send(command.text)
        else:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        return None

    async def toggle(self) -> None:
        if self._state is SessionState.CLOSED:
            await self.open()
        else:
            self.close()

    async def open(self) -> None:
        """Open the session, prompting for a credential if none is stored."""
        if self._state is not SessionState.CLOSED:
            return
        self._state = SessionState.OPEN
        self._debug("info", "Session opened")

        credential = await self._credentials.load()
        if self._state is SessionState.CLOSED:
            # closed while the store was being read
            return
        if credential is None:
            self._request_credential()

    def close(self) -> None:
        """Close the session. An in-flight request still completes."""
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        self._debug("info", "Session closed")

    async def submit_credential(self, secret: str) -> None:
        """Store a credential and retract the prompt.

        Raises:
            InvalidCredentialError: If the secret is empty; state is unchanged
        """
        await self._credentials.save(secret)
        self._debug("info", "Credential saved")

        if self._prompt_handle is not None:
            if self._log.remove(self._prompt_handle) and self._sink is not None:
                self._sink.remove_message(self._prompt_handle)
            self._prompt_handle = None

        self._append(Message(role=Role.ASSISTANT, content=CREDENTIAL_SAVED_TEXT))
        self._state = SessionState.OPEN

    async def send(self, text: str) -> Message | None:
        """Send a user message and append the reply.

        Returns:
            The appended assistant message, or None if nothing was sent
            (empty text, or the credential is missing and was re-prompted)

        Raises:
            SessionClosedError: If the session is closed
            RequestPendingError: If a reply is still pending
        """
        text = text.strip() if text else ""
        if not text:
            return None
        if self._state is SessionState.CLOSED:
            raise SessionClosedError()

        credential = await self._credentials.load()
        if credential is None:
            self._request_credential()
            return None

        # no await between the pending check and setting it
        if self._pending:
            self._debug("warning", "Send rejected: reply still pending")
            raise RequestPendingError()

        self._append(Message(role=Role.USER, content=text))
        self._set_pending(True)
        self._debug("info", f"Sending: '{text[:CHAT_MESSAGE_MAX_PREVIEW]}'")

        try:
            reply_text = await self._gateway.complete(text, credential)
        except CompletionError as e:
            self._debug("error", f"Completion failed ({e.kind.value}): {e}")
            reply = Message(role=Role.ASSISTANT, content=APOLOGY_TEXT)
        else:
            reply = Message(role=Role.ASSISTANT, content=reply_text)
        finally:
            self._set_pending(False)

        self._append(reply)
        return reply

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append(self, message: Message) -> MessageHandle:
        handle = self._log.append(message)
        if self._sink is not None:
            self._sink.render_message(message)
        return handle

    def _set_pending(self, pending: bool) -> None:
        self._pending = pending
        if self._sink is not None:
            self._sink.set_pending_indicator(pending)

    def _request_credential(self) -> None:
        """Enter awaiting_credential and ask the sink for a credential.

        The prompt message is logged once; the sink is asked every time.
        """
        self._state = SessionState.AWAITING_CREDENTIAL
        self._debug("info", "No credential stored, prompting")
        if self._prompt_handle is None or self._prompt_handle not in self._log:
            prompt = Message(
                role=Role.ASSISTANT,
                content=CREDENTIAL_PROMPT_MARKUP,
                kind=MessageKind.RICH,
            )
            self._prompt_handle = self._append(prompt)
        if self._sink is not None:
            self._sink.prompt_for_credential(self.submit_credential)
