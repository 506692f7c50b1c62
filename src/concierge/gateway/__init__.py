from .gateway import CompletionGateway
from .models import CompletionChoice, CompletionMessage, CompletionPayload

__all__ = [
    "CompletionGateway",
    "CompletionChoice",
    "CompletionMessage",
    "CompletionPayload",
]
