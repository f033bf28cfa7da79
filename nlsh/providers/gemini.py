import json
from typing import Any, Optional

from ..errors import ApiError, ParseError
from .base import COMMAND_INSTRUCTION, Endpoint, Provider, dig, error_message

GENERATION_CONFIG = {
    "temperature": 1,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 8192,
    "responseMimeType": "text/plain",
}


class GeminiProvider(Provider):
    """Google Gemini ``generateContent`` API."""

    name = "gemini"
    label = "Gemini"
    api_key_env = "GOOGLE_API_KEY"

    @property
    def api_key(self) -> Optional[str]:
        return self.config.google_api_key

    @property
    def model(self) -> str:
        return self.config.gemini_model

    def build_payload(self, instruction: str, system_context: str = "") -> str:
        prompt = (
            f"{COMMAND_INSTRUCTION} Do not add trailing newlines to your response. "
            f"System context: {system_context}\n\nUser request: {instruction}"
        )
        return self.render({
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
            "generationConfig": dict(GENERATION_CONFIG),
        })

    def endpoint(self) -> Endpoint:
        base = self.config.google_url_base.rstrip("/")
        return Endpoint(
            url=f"{base}/v1beta/models/{self.model}:generateContent",
            headers={"Content-Type": "application/json"},
            params={"key": self.api_key},
        )

    def decode(self, raw: str) -> Any:
        # Gemini sometimes puts literal newlines inside string values, which a
        # strict decoder rejects. Non-strict decoding keeps them as text.
        return json.loads(raw, strict=False)

    def parse_response(self, raw: str) -> str:
        try:
            document = self.decode(raw)
        except ValueError:
            raise ParseError(f"Failed to parse Gemini response: {raw}")

        text = dig(document, "candidates", 0, "content", "parts", 0, "text")
        if isinstance(text, str):
            return text
        if isinstance(document, dict) and document.get("error") is not None:
            raise ApiError(error_message(document["error"]))
        raise ParseError(f"Unknown Gemini response format: {raw}")
