"""Unit tests for the conversation module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from concierge.conversation import (
    ConversationLog,
    Message,
    MessageHandle,
    MessageKind,
    Role,
)

whitespace = st.text(alphabet=" \t\n\r  ", max_size=20)


class TestMessage:
    """Tests for the Message model."""

    def test_create_basic_message(self):
        """Test creating a message with defaults."""
        msg = Message(role=Role.USER, content="What plans do you offer?")

        assert msg.role == Role.USER
        assert msg.content == "What plans do you offer?"
        assert msg.kind == MessageKind.TEXT
        assert msg.id

    def test_ids_are_unique(self):
        """Test that each message gets its own id."""
        first = Message(role=Role.USER, content="a")
        second = Message(role=Role.USER, content="a")
        assert first.id != second.id

    def test_created_at_is_monotonic(self):
        """Test that later messages never sort before earlier ones."""
        first = Message(role=Role.USER, content="a")
        second = Message(role=Role.ASSISTANT, content="b")
        assert second.created_at >= first.created_at

    def test_message_is_immutable(self):
        """Test that messages cannot be edited in place."""
        msg = Message(role=Role.USER, content="hello")
        with pytest.raises(ValueError):
            msg.content = "changed"  # type: ignore[misc]

    @given(whitespace)
    def test_empty_content_is_rejected(self, content: str):
        """Property test: whitespace-only content never builds a Message."""
        with pytest.raises(ValueError):
            Message(role=Role.USER, content=content)

    def test_role_accepts_plain_strings(self):
        """Test that roles validate from their string values."""
        msg = Message(role="assistant", content="hi", kind="rich")
        assert msg.role == Role.ASSISTANT
        assert msg.kind == MessageKind.RICH

    def test_unknown_role_fails(self):
        """Test that roles outside user/assistant/system fail validation."""
        with pytest.raises(ValueError):
            Message(role="tool", content="hi")

    def test_handle_refers_to_message(self):
        """Test that a message's handle carries its id."""
        msg = Message(role=Role.USER, content="hello")
        assert msg.handle == MessageHandle(message_id=msg.id)


class TestConversationLog:
    """Tests for ConversationLog."""

    def test_append_preserves_order(self):
        """Test that insertion order is display order."""
        log = ConversationLog()
        messages = [
            Message(role=Role.ASSISTANT, content="welcome"),
            Message(role=Role.USER, content="question"),
            Message(role=Role.ASSISTANT, content="answer"),
        ]
        for msg in messages:
            log.append(msg)

        assert log.all() == tuple(messages)
        assert list(log) == messages
        assert len(log) == 3

    def test_all_is_a_snapshot(self):
        """Test that later appends don't change an earlier snapshot."""
        log = ConversationLog()
        log.append(Message(role=Role.USER, content="one"))
        snapshot = log.all()
        log.append(Message(role=Role.USER, content="two"))

        assert len(snapshot) == 1
        assert len(log.all()) == 2

    def test_remove_by_handle(self):
        """Test removing a message as a whole unit."""
        log = ConversationLog()
        keep = Message(role=Role.ASSISTANT, content="keep")
        drop = Message(role=Role.ASSISTANT, content="prompt", kind=MessageKind.RICH)
        log.append(keep)
        handle = log.append(drop)

        assert handle in log
        assert log.remove(handle) is True
        assert handle not in log
        assert log.all() == (keep,)

    def test_remove_missing_returns_false(self):
        """Test that removing twice reports the second removal as a miss."""
        log = ConversationLog()
        handle = log.append(Message(role=Role.USER, content="hello"))

        assert log.remove(handle) is True
        assert log.remove(handle) is False
        assert log.remove(MessageHandle(message_id="unknown")) is False

    def test_duplicate_append_fails(self):
        """Test that the same message cannot be appended twice."""
        log = ConversationLog()
        msg = Message(role=Role.USER, content="hello")
        log.append(msg)
        with pytest.raises(ValueError, match="already in the log"):
            log.append(msg)

    def test_filter_by_role(self):
        """Test the role filter view."""
        log = ConversationLog()
        user = Message(role=Role.USER, content="q")
        reply = Message(role=Role.ASSISTANT, content="a")
        log.append(user)
        log.append(reply)

        assert log.filter_by_role(Role.USER) == [user]
        assert log.filter_by_role(Role.ASSISTANT) == [reply]
        assert log.filter_by_role(Role.SYSTEM) == []

    def test_last(self):
        """Test the last-message view with and without a role filter."""
        log = ConversationLog()
        assert log.last() is None

        user = Message(role=Role.USER, content="q")
        reply = Message(role=Role.ASSISTANT, content="a")
        log.append(user)
        log.append(reply)

        assert log.last() == reply
        assert log.last(Role.USER) == user
        assert log.last(Role.SYSTEM) is None

    def test_get_and_clear(self):
        """Test lookup by handle and clearing the log."""
        log = ConversationLog()
        msg = Message(role=Role.USER, content="hello")
        handle = log.append(msg)

        assert log.get(handle) == msg
        log.clear()
        assert len(log) == 0
        assert log.get(handle) is None

    def test_contains_ignores_other_types(self):
        """Test that membership only accepts handles."""
        log = ConversationLog()
        msg = Message(role=Role.USER, content="hello")
        log.append(msg)
        assert msg.id not in log
