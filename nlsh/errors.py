from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Category of a failed command generation."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    API = "api"
    PARSE = "parse"


class LLMError(Exception):
    """Base class for all failures of the command generation pipeline."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(LLMError):
    kind = ErrorKind.CONFIGURATION


class TransportError(LLMError):
    kind = ErrorKind.TRANSPORT


class ApiError(LLMError):
    kind = ErrorKind.API


class ParseError(LLMError):
    kind = ErrorKind.PARSE


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one call: either a command or the error that stopped it."""

    command: Optional[str] = None
    error: Optional[LLMError] = None

    @classmethod
    def success(cls, command: str) -> "CommandResult":
        return cls(command=command)

    @classmethod
    def failure(cls, error: LLMError) -> "CommandResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None
