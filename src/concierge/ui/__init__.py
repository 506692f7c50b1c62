"""Terminal UI module for concierge.

Provides a Textual-based presentation layer for the assistant session.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (chat history, input history, pending indicator, log panel)
- styles.py: CSS styling (layout decisions)
- screens.py: Modal dialogs (credential prompt)
- sink.py: Presentation sink (how render commands reach widgets)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ConciergeApp, run_textual_tui
from .sink import TextualSink
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, PendingIndicator

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConciergeApp",
    "DebugPanel",
    "PendingIndicator",
    "TextualSink",
    "run_textual_tui",
]
