"""Completion gateway.

Hidden design decisions:
- OpenAI client construction and authentication
- Request body layout (persona system turn + single user turn)
- Response shape validation
- Mapping of SDK and transport failures to CompletionError subclasses
"""

import asyncio
from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from ..config import (
    COMPLETION_MAX_TOKENS,
    COMPLETION_MODEL,
    COMPLETION_TEMPERATURE,
    REQUEST_TIMEOUT_SECONDS,
)
from ..errors import MalformedResponseError, ProviderRejected, TransportFailure
from ..prompts import get_persona_prompt
from .models import CompletionPayload


class CompletionGateway:
    """Issues one Chat Completions request per call.

    The gateway is stateless across calls: no earlier turns are sent
    upstream. Retries are disabled; a failed call surfaces exactly once.

    Supports async context manager protocol for proper resource cleanup:
        async with CompletionGateway() as gateway:
            text = await gateway.complete("Hi", credential)
    """

    def __init__(
        self,
        model: str = COMPLETION_MODEL,
        max_tokens: int = COMPLETION_MAX_TOKENS,
        temperature: float = COMPLETION_TEMPERATURE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        base_url: str | None = None,
        system_prompt: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the gateway.

        Args:
            model: Model identifier sent with every request
            max_tokens: Output length bound
            temperature: Sampling temperature
            timeout: Seconds to wait before surfacing TransportFailure
            base_url: Optional custom API base URL
            system_prompt: Persona text (defaults to the packaged persona)
            http_client: Optional httpx client for the OpenAI SDK to use
        """
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout = timeout
        self._base_url = base_url
        self._system_prompt = system_prompt or get_persona_prompt()
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None
        self._client_credential: str | None = None
        self._debug_callback: Any | None = None

    @property
    def model(self) -> str:
        return self._model

    @property
    def timeout(self) -> float:
        return self._timeout

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Gateway", message)

    def build_messages(self, user_text: str) -> list[dict[str, str]]:
        """Build the upstream message list for one user turn."""
        return [
            {"role": "system", "content": self._system_prompt},
            {"role": "user", "content": user_text},
        ]

    def _client_for(self, credential: str) -> AsyncOpenAI:
        """Get an OpenAI client authenticated with the credential.

        A changed credential derives a new client that shares the same
        HTTP connection pool.
        """
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=credential,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        elif credential != self._client_credential:
            self._client = self._client.with_options(api_key=credential)
        self._client_credential = credential
        return self._client

    async def complete(self, user_text: str, credential: str) -> str:
        """Request a completion for a single user turn.

        Args:
            user_text: The user's message
            credential: Bearer credential for the provider

        Returns:
            The first candidate's text, trimmed and non-empty

        Raises:
            ProviderRejected: Non-2xx status from the provider
            TransportFailure: Timeout or network failure
            MalformedResponseError: Body lacks choices[0].message.content
        """
        client = self._client_for(credential)
        request = client.chat.completions.with_raw_response.create(
            model=self._model,
            messages=self.build_messages(user_text),
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )

        self._debug("debug", f"POST chat/completions model={self._model}")
        try:
            raw = await asyncio.wait_for(request, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise TransportFailure(f"no response within {self._timeout}s") from e
        except APIStatusError as e:
            raise ProviderRejected(e.status_code, e.message) from e
        except APITimeoutError as e:
            raise TransportFailure("request timed out") from e
        except APIConnectionError as e:
            raise TransportFailure(str(e)) from e
        except APIError as e:
            raise TransportFailure(str(e)) from e

        try:
            payload = CompletionPayload.model_validate(raw.http_response.json())
        except ValueError as e:
            raise MalformedResponseError("expected choices[0].message.content") from e

        text = payload.first_text
        if not text:
            raise MalformedResponseError("empty completion content")

        self._debug("debug", f"Received {len(text)} characters")
        return text

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._client_credential = None
        elif self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self) -> "CompletionGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
