"""Data models for the conversation log."""

import time
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class MessageKind(str, Enum):
    """How message content should be rendered."""

    TEXT = "text"
    RICH = "rich"  # Rich markup fragment, assistant prompts only


class Message(BaseModel):
    """A single entry in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role = Field(description="Role of the message sender")
    content: str = Field(description="Text payload or markup fragment")
    kind: MessageKind = Field(default=MessageKind.TEXT)
    created_at: int = Field(
        default_factory=time.monotonic_ns,
        description="Monotonic creation time in nanoseconds"
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject empty and whitespace-only content."""
        if not v.strip():
            raise ValueError("message content must not be empty")
        return v

    @property
    def handle(self) -> "MessageHandle":
        """Handle referring to this message."""
        return MessageHandle(message_id=self.id)


class MessageHandle(BaseModel):
    """Stable reference to a message in a log."""

    model_config = ConfigDict(frozen=True)

    message_id: str
