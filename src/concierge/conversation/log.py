"""Ordered, append-only conversation log.

Hides how messages are stored and indexed. Insertion order is display
order; messages are never edited in place, only appended or removed
as a whole.
"""

from collections.abc import Iterator

from .models import Message, MessageHandle, Role


class ConversationLog:
    """In-memory record of the messages exchanged in one session."""

    def __init__(self) -> None:
        # dicts preserve insertion order
        self._messages: dict[str, Message] = {}

    def append(self, message: Message) -> MessageHandle:
        """Append a message and return a handle for later removal.

        Raises:
            ValueError: If a message with the same id is already present
        """
        if message.id in self._messages:
            raise ValueError(f"Message {message.id} is already in the log")
        self._messages[message.id] = message
        return message.handle

    def remove(self, handle: MessageHandle) -> bool:
        """Remove a message. Returns True if it existed."""
        return self._messages.pop(handle.message_id, None) is not None

    def get(self, handle: MessageHandle) -> Message | None:
        return self._messages.get(handle.message_id)

    def all(self) -> tuple[Message, ...]:
        """Snapshot of all messages in insertion order."""
        return tuple(self._messages.values())

    def filter_by_role(self, role: Role) -> list[Message]:
        return [msg for msg in self._messages.values() if msg.role == role]

    def last(self, role: Role | None = None) -> Message | None:
        """Most recent message, optionally restricted to one role."""
        for msg in reversed(self._messages.values()):
            if role is None or msg.role == role:
                return msg
        return None

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, MessageHandle) and handle.message_id in self._messages
