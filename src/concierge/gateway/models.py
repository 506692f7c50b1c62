"""Wire models for the completion response.

Only the fields the client reads are modelled; anything else the
provider returns is ignored.
"""

from pydantic import BaseModel, Field


class CompletionMessage(BaseModel):
    """Message inside a completion choice."""

    role: str | None = None
    content: str = Field(description="Generated text")


class CompletionChoice(BaseModel):
    """One candidate returned by the provider."""

    index: int = 0
    message: CompletionMessage


class CompletionPayload(BaseModel):
    """Expected shape of a Chat Completions response body."""

    model: str | None = None
    choices: list[CompletionChoice] = Field(min_length=1)

    @property
    def first_text(self) -> str:
        """Content of the first candidate, trimmed."""
        return self.choices[0].message.content.strip()
