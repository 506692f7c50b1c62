"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

#launcher {
    height: 1fr;
    content-align: center middle;
    color: $text-muted;
}

/* ============================================
   Chat Panel - shown while the session is open
   ============================================ */
#chat-panel {
    height: 1fr;
    background: transparent;

    &.-closed {
        display: none;
    }
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Pending Indicator
   ============================================ */
#pending-indicator {
    height: 1;
    padding: 0 2;
    color: $secondary;
    text-style: italic;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    scrollbar-gutter: stable;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 3;
    background: $panel;
}

#chat-input {
    width: 1fr;
    border: round $primary 60%;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    width: 10;
    min-width: 8;
    margin: 0 0 0 1;
    text-style: bold;
}

/* ============================================
   Chat Messages - Conversation Display
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.prompt-message {
    border-left: tall $accent;
    background: $accent 8%;
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    margin: 0;
}
"""
