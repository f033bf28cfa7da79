import json
import unittest
from unittest.mock import MagicMock, patch

import requests

from nlsh import get_command
from nlsh.client import LLMClient
from nlsh.config import Config
from nlsh.errors import ErrorKind


def _response(body):
    text = body if isinstance(body, str) else json.dumps(body)
    response = MagicMock()
    response.status_code = 200
    response.text = text
    response.content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


def _openai_body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class TestLLMClient(unittest.TestCase):
    """End-to-end pipeline with the HTTP call mocked."""

    @patch("nlsh.transport.requests.post")
    def test_openai_end_to_end(self, mock_post):
        mock_post.return_value = _response(_openai_body("ls \n"))
        client = LLMClient(Config(openai_api_key="sk-test"))

        result = client.get_command("list files in current directory", "OS: Linux; Shell: /bin/zsh")

        self.assertTrue(result.ok)
        self.assertEqual(result.command, "ls")
        self.assertIsNone(result.kind)
        _, kwargs = mock_post.call_args
        payload = json.loads(kwargs["data"])
        self.assertEqual(payload["messages"][1]["content"], "list files in current directory")
        self.assertIn("OS: Linux; Shell: /bin/zsh", payload["messages"][0]["content"])

    @patch("nlsh.transport.requests.post")
    def test_gemini_end_to_end(self, mock_post):
        mock_post.return_value = _response(
            '{"candidates": [{"content": {"parts": [{"text": "du -sh *\n"}], "role": "model"}}]}'
        )
        config = Config(provider="gemini", google_api_key="g-key", gemini_model="gemini-1.5-flash")

        result = get_command("show folder sizes", "OS: Darwin", config=config)

        self.assertTrue(result.ok)
        self.assertEqual(result.command, "du -sh *")
        args, kwargs = mock_post.call_args
        self.assertTrue(args[0].endswith("/v1beta/models/gemini-1.5-flash:generateContent"))
        self.assertEqual(kwargs["params"], {"key": "g-key"})

    @patch("nlsh.transport.requests.post")
    def test_unsupported_provider_makes_no_request(self, mock_post):
        for provider in ("anthropic", "OPENAI", "gemini ", "ollama"):
            with self.subTest(provider=provider):
                config = Config(provider=provider, openai_api_key="sk", google_api_key="g")
                result = LLMClient(config).get_command("list files")

                self.assertFalse(result.ok)
                self.assertEqual(result.kind, ErrorKind.CONFIGURATION)
                self.assertIn(provider, result.error.message)
        self.assertEqual(mock_post.call_count, 0)

    @patch("nlsh.transport.requests.post")
    def test_missing_key_makes_no_request(self, mock_post):
        result = LLMClient(Config(provider="gemini")).get_command("list files")

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, ErrorKind.CONFIGURATION)
        self.assertIn("GOOGLE_API_KEY", result.error.message)
        mock_post.assert_not_called()

    @patch("nlsh.transport.requests.post")
    def test_non_positive_timeout_makes_no_request(self, mock_post):
        session = MagicMock()
        for timeout in (0, -1, None):
            with self.subTest(timeout=timeout):
                config = Config(openai_api_key="sk", timeout=timeout)
                result = LLMClient(config, session=session).get_command("list files")

                self.assertFalse(result.ok)
                self.assertEqual(result.kind, ErrorKind.CONFIGURATION)
                self.assertIn("timeout", result.error.message)
        mock_post.assert_not_called()
        session.post.assert_not_called()

    @patch("nlsh.transport.requests.post")
    def test_api_error_for_both_providers(self, mock_post):
        mock_post.return_value = _response({"error": {"code": 401, "message": "Invalid authentication"}})
        configs = [
            Config(openai_api_key="sk"),
            Config(provider="gemini", google_api_key="g"),
        ]
        for config in configs:
            with self.subTest(provider=config.provider):
                result = get_command("list files", config=config)
                self.assertFalse(result.ok)
                self.assertEqual(result.kind, ErrorKind.API)
                self.assertIn("Invalid authentication", result.error.message)

    @patch("nlsh.transport.requests.post")
    def test_unknown_format(self, mock_post):
        mock_post.return_value = _response({"object": "list", "data": []})

        result = get_command("list files", config=Config(openai_api_key="sk"))

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, ErrorKind.PARSE)
        self.assertIn('"object": "list"', result.error.message)

    @patch("nlsh.transport.requests.post")
    def test_transport_failure_skips_parsing(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("Read timed out. (read timeout=30)")

        with patch("nlsh.providers.openai.OpenAIProvider.parse_response") as mock_parse:
            result = get_command("list files", config=Config(openai_api_key="sk"))

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, ErrorKind.TRANSPORT)
        self.assertIn("Read timed out", result.error.message)
        mock_parse.assert_not_called()

    def test_uses_session(self):
        session = MagicMock()
        session.post.return_value = _response(_openai_body("pwd"))

        result = LLMClient(Config(openai_api_key="sk"), session=session).get_command("where am I")

        self.assertEqual(result.command, "pwd")
        session.post.assert_called_once()


if __name__ == "__main__":
    unittest.main()
