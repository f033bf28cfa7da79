"""
Natural language to shell commands.

This package sends a plain language request, together with a description of the
shell environment, to an OpenAI-compatible or Gemini API and returns the single
shell command the model produced.
"""

__version__ = "0.3.0"

from .client import LLMClient, get_command
from .config import Config
from .errors import CommandResult, ErrorKind, LLMError

__all__ = ["CommandResult", "Config", "ErrorKind", "LLMClient", "LLMError", "get_command"]
