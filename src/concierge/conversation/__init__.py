"""Conversation module.

Provides the message model and the ordered log displayed to the user.
"""

from .log import ConversationLog
from .models import Message, MessageHandle, MessageKind, Role

__all__ = [
    "ConversationLog",
    "Message",
    "MessageHandle",
    "MessageKind",
    "Role",
]
