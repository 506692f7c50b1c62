"""Prompt management module.

Prompts ship as text files inside the package. They are static: neither
the end user nor the working directory can override them.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a packaged prompt.

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content with surrounding whitespace removed

    Raises:
        FileNotFoundError: If the prompt file is not packaged
    """
    package_path = _PROMPTS_DIR / f"{name}.txt"
    if not package_path.exists():
        raise FileNotFoundError(f"Prompt '{name}' not found at {package_path}")
    return package_path.read_text(encoding="utf-8").strip()


def get_persona_prompt() -> str:
    """Get the system instruction describing the assistant's persona."""
    return load_prompt("persona")


__all__ = [
    "load_prompt",
    "get_persona_prompt",
]
