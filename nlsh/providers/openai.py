from typing import Optional

from ..errors import ParseError
from .base import COMMAND_INSTRUCTION, Endpoint, Provider, dig


class OpenAIProvider(Provider):
    """OpenAI-compatible chat completions API."""

    name = "openai"
    label = "OpenAI"
    api_key_env = "OPENAI_API_KEY"

    @property
    def api_key(self) -> Optional[str]:
        return self.config.openai_api_key

    @property
    def model(self) -> str:
        return self.config.openai_model

    def build_payload(self, instruction: str, system_context: str = "") -> str:
        return self.render({
            "model": self.model,
            "messages": [
                {"role": "system", "content": f"{COMMAND_INSTRUCTION} System context: {system_context}"},
                {"role": "user", "content": instruction},
            ],
            # Same request, same command.
            "temperature": 0,
        })

    def endpoint(self) -> Endpoint:
        return Endpoint(
            url=f"{self.config.openai_url_base.rstrip('/')}/v1/chat/completions",
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
        )

    def parse_response(self, raw: str) -> str:
        try:
            document = self.decode(raw)
        except ValueError:
            raise ParseError(f"Failed to parse OpenAI response: {raw}")

        content = dig(document, "choices", 0, "message", "content")
        if not isinstance(content, str):
            raise ParseError(f"Unknown OpenAI response format: {raw}")
        return content
