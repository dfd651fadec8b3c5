import logging
from typing import Dict, Iterator, List

import requests

from settings import settings

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Upstream completion failure, classified for the HTTP layer."""

    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    FAILED = "failed"
    NOT_CONFIGURED = "not_configured"

    def __init__(self, kind: str, status_code: int = 500, detail: str = ""):
        super().__init__(detail or kind)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail


def classify_status(status_code: int) -> str:
    if status_code == 429:
        return CompletionError.RATE_LIMITED
    if status_code == 402:
        return CompletionError.QUOTA_EXCEEDED
    return CompletionError.FAILED


def open_completion_stream(messages: List[Dict[str, str]]) -> requests.Response:
    """
    Start a streaming chat completion.

    Returns the open upstream response; the caller owns it and must
    close it. Raises CompletionError when the provider rejects the call.
    """
    if not settings.google_api_key:
        raise CompletionError(CompletionError.NOT_CONFIGURED, 500, "Completion API key is not configured")

    payload = {
        "model": settings.completion_model,
        "messages": messages,
        "stream": True,
    }
    headers = {
        "Authorization": f"Bearer {settings.google_api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            settings.completion_api_url,
            json=payload,
            headers=headers,
            stream=True,
            timeout=(settings.http_timeout, settings.completion_timeout),
        )
    except requests.RequestException as e:
        logger.error(f"Completion request failed: {str(e)}")
        raise CompletionError(CompletionError.FAILED, 500, str(e)) from e

    if not response.ok:
        error_text = response.text
        response.close()
        logger.error(f"Completion gateway error: {response.status_code} {error_text[:200]}")
        raise CompletionError(classify_status(response.status_code), response.status_code, error_text)

    logger.info(f"Completion stream opened with {len(messages)} messages")
    return response


def relay_stream(response: requests.Response) -> Iterator[bytes]:
    """Yield upstream bytes unchanged; closes the upstream connection when the consumer stops."""
    try:
        for chunk in response.iter_content(chunk_size=None):
            if chunk:
                yield chunk
    except requests.RequestException as e:
        logger.error(f"Completion stream interrupted: {str(e)}")
    finally:
        response.close()
