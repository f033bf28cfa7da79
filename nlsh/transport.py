import logging
from typing import Optional

import requests

from .errors import TransportError
from .providers.base import Endpoint

logger = logging.getLogger(__name__)


def send_request(endpoint: Endpoint, payload: str, config,
                 session: Optional[requests.Session] = None) -> str:
    """
    POST ``payload`` to ``endpoint`` once and return the response body.

    The body is returned whatever the HTTP status, since providers report
    their errors in it.

    Args:
        endpoint: URL, headers and query parameters
        payload: JSON request body
        config: Supplies ``timeout`` and the optional ``proxy``
        session: Session to send through instead of the module-level API

    Returns:
        The raw response text

    Raises:
        TransportError: on DNS, connection, TLS or timeout failures
    """
    proxies = {"http": config.proxy, "https": config.proxy} if config.proxy else None
    post = session.post if session is not None else requests.post

    logger.info(f"POST {endpoint.url} (timeout {config.timeout}s{', via proxy' if proxies else ''})")
    try:
        response = post(
            endpoint.url,
            data=payload.encode("utf-8"),
            headers=endpoint.headers,
            params=endpoint.params or None,
            timeout=config.timeout,
            proxies=proxies,
        )
    except requests.exceptions.RequestException as e:
        detail = _redact(str(e), endpoint)
        logger.error(f"Request to {endpoint.url} failed: {detail}")
        raise TransportError(f"Failed to connect to API - {detail}")

    logger.info(f"Received HTTP {response.status_code} ({len(response.content)} bytes)")
    response.encoding = response.encoding or "utf-8"
    return response.text


def _redact(text: str, endpoint: Endpoint) -> str:
    """Mask query parameter values (the Gemini API key) in error text."""
    for value in endpoint.params.values():
        if value:
            text = text.replace(value, "****")
    return text
