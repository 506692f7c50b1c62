"""Configuration constants.

Centralizes the fixed request parameters, storage locations and
user-facing message texts for the assistant client.
"""

from pathlib import Path


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Completion request parameters (not tunable per call)
COMPLETION_MODEL = "gpt-3.5-turbo"
COMPLETION_MAX_TOKENS = 300
COMPLETION_TEMPERATURE = 0.7
REQUEST_TIMEOUT_SECONDS = 30.0

# Durable credential storage
CREDENTIAL_STORAGE_KEY = "openai_api_key"
DEFAULT_STORE_BACKEND = "sqlite"
DEFAULT_STORE_PATH = Path.home() / ".concierge" / "store.db"

# Fixed assistant texts
CREDENTIAL_SAVED_TEXT = "✅ API key saved! You can now ask me anything."
APOLOGY_TEXT = "Sorry, I encountered an error. Please check your API key and try again."
CREDENTIAL_PROMPT_MARKUP = (
    "[bold]To use the AI assistant, please provide your OpenAI API key.[/bold]\n"
    "[dim]Your API key is stored locally and never shared. "
    "Get one from [link=https://platform.openai.com/api-keys]OpenAI[/link].[/dim]"
)

# Chat display configuration
CHAT_MESSAGE_MAX_PREVIEW = 50  # Characters of user text echoed into debug logs
