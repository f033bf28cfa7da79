import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import ApiError, ConfigurationError


COMMAND_INSTRUCTION = (
    "You are a shell command generator. Only output the exact command to execute in plain text. "
    "Do not include any other text. Do not use Markdown."
)


@dataclass(frozen=True)
class Endpoint:
    """Where and how a payload is posted."""

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


class Provider(ABC):
    """
    One remote LLM backend.

    Subclasses set ``name``, ``label`` and ``api_key_env`` and implement the
    payload, endpoint and response-shape methods. The error envelope check and
    the final command clean-up are shared.
    """

    name: str
    label: str
    api_key_env: str

    def __init__(self, config):
        self.config = config

    @property
    @abstractmethod
    def api_key(self) -> Optional[str]:
        """The credential for this provider, taken from the config."""

    @property
    @abstractmethod
    def model(self) -> str:
        """The model name requests are made for."""

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigurationError(f"{self.api_key_env} environment variable is not set")
        if not self.config.timeout or self.config.timeout <= 0:
            raise ConfigurationError(f"Request timeout must be a positive number of seconds, got {self.config.timeout}")

    @abstractmethod
    def build_payload(self, instruction: str, system_context: str = "") -> str:
        """Render the JSON request body for ``instruction``."""

    @abstractmethod
    def endpoint(self) -> Endpoint:
        """URL, headers and query parameters of the completion endpoint."""

    @abstractmethod
    def parse_response(self, raw: str) -> str:
        """
        Extract the generated text from a response body.

        Raises:
            ApiError: if the body carries a provider error instead of text
            ParseError: if the body is not JSON or has an unknown shape
        """

    def decode(self, raw: str) -> Any:
        """Decode a response body. Raises ValueError when it is not JSON."""
        return json.loads(raw)

    def check_error(self, raw: str) -> None:
        """
        Raise ApiError if the body is a provider error envelope.

        Bodies that do not decode are left for parse_response to report.
        """
        try:
            document = self.decode(raw)
        except ValueError:
            return
        if isinstance(document, dict) and document.get("error") is not None:
            raise ApiError(f"{self.label} API request failed - {error_message(document['error'])}")

    def extract_command(self, raw: str) -> str:
        """Parse ``raw`` and return the command with trailing whitespace removed."""
        return self.parse_response(raw).rstrip()

    @staticmethod
    def render(payload: Dict[str, Any]) -> str:
        return json.dumps(payload, ensure_ascii=False, indent=4)


def error_message(error: Any) -> str:
    """Human readable text of an ``error`` member."""
    if isinstance(error, dict):
        message = error.get("message")
        if message is not None:
            return str(message)
        return json.dumps(error)
    return str(error)


def dig(document: Any, *path: Any) -> Any:
    """Follow ``path`` of keys and indexes into ``document``; None where it breaks off."""
    current = document
    for step in path:
        try:
            current = current[step]
        except (KeyError, IndexError, TypeError):
            return None
    return current
