import logging
from typing import Optional

import requests

from .config import Config, get_config
from .errors import CommandResult, LLMError
from .providers import get_provider
from .transport import send_request

# Configure logging
logger = logging.getLogger(__name__)


class LLMClient:
    """Turns natural language requests into shell commands with the configured provider."""

    def __init__(self, config: Optional[Config] = None, session: Optional[requests.Session] = None):
        """
        Initializes the LLMClient.

        Args:
            config: Settings to use; the process-wide config when omitted.
            session: Optional requests session the single API call goes through.
        """
        self.config = config or get_config()
        self.session = session

    def get_command(self, instruction: str, system_context: str = "") -> CommandResult:
        """
        Generate the shell command for ``instruction``.

        Runs validation, payload construction, the API request, the error check
        and response parsing in order, stopping at the first failure.

        Args:
            instruction: What the user wants to do, in plain language
            system_context: Description of the shell environment

        Returns:
            CommandResult carrying the command or the error that stopped it
        """
        try:
            provider = get_provider(self.config)
            payload = provider.build_payload(instruction, system_context)
            logger.info(f"Requesting command from {provider.label} ({provider.model})")

            raw = send_request(provider.endpoint(), payload, self.config, session=self.session)
            provider.check_error(raw)
            command = provider.extract_command(raw)
        except LLMError as e:
            logger.error(f"Command generation failed ({e.kind.value}): {e.message}")
            return CommandResult.failure(e)

        logger.info(f"Generated command: {command}")
        return CommandResult.success(command)


def get_command(instruction: str, system_context: str = "", config: Optional[Config] = None,
                session: Optional[requests.Session] = None) -> CommandResult:
    """Generate one command without keeping a client around."""
    return LLMClient(config, session=session).get_command(instruction, system_context)
