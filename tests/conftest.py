"""Pytest configuration and shared fixtures."""
import asyncio
import json

import httpx
import pytest

from concierge.conversation import Message, MessageHandle
from concierge.credentials import CredentialStore, create_key_value_store
from concierge.session import CredentialCallback, PresentationSink, SessionController


class RecordingSink(PresentationSink):
    """Sink that records every render command it receives."""

    def __init__(self) -> None:
        self.rendered: list[Message] = []
        self.removed: list[MessageHandle] = []
        self.indicator: list[bool] = []
        self.prompts: list[CredentialCallback] = []

    def render_message(self, message: Message) -> None:
        self.rendered.append(message)

    def remove_message(self, handle: MessageHandle) -> None:
        self.removed.append(handle)

    def set_pending_indicator(self, visible: bool) -> None:
        self.indicator.append(visible)

    def prompt_for_credential(self, on_submit: CredentialCallback) -> None:
        self.prompts.append(on_submit)


class FakeGateway:
    """In-process stand-in for CompletionGateway.

    Replies are taken in order from `replies`; a CompletionError (or any
    exception) entry is raised instead of returned. When `gate` is set the
    call blocks until it is released.
    """

    def __init__(self, replies: list | None = None, gate: bool = False) -> None:
        self.replies = list(replies or ["We offer three tiers..."])
        self.calls: list[tuple[str, str]] = []
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        if not gate:
            self.release.set()
        self.closed = False

    async def complete(self, user_text: str, credential: str) -> str:
        self.calls.append((user_text, credential))
        self.started.set()
        await self.release.wait()
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def sink():
    """Return a recording presentation sink."""
    return RecordingSink()


@pytest.fixture
def credential_store():
    """Return an empty in-memory credential store."""
    return CredentialStore(create_key_value_store("memory"))


@pytest.fixture
def stored_credential_store():
    """Return an in-memory credential store that already holds a key."""
    return CredentialStore(create_key_value_store("memory", initial={"openai_api_key": "sk-stored"}))


def make_session(
    store: CredentialStore,
    gateway=None,
    sink: PresentationSink | None = None,
) -> SessionController:
    """Build a session around a fake gateway."""
    return SessionController(
        credentials=store,
        gateway=gateway if gateway is not None else FakeGateway(),
        sink=sink,
    )


def completion_body(content) -> dict:
    """Return a Chat Completions response body with one choice."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def mock_http_client(handler) -> httpx.AsyncClient:
    """Return an httpx client whose requests are answered by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)

