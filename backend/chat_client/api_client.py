import logging
from typing import Dict, Iterator, List, Optional

import requests

from .stream import StreamReassembler

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Non-stream response from the chat endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(APIError):
    """The daily free message quota is used up."""

    def __init__(self, message: str, messages_used: Optional[int] = None, remaining: Optional[int] = 0):
        super().__init__(message, status_code=429)
        self.messages_used = messages_used
        self.remaining = remaining


class LocalAgentClient:
    """
    Talks to the backend API.

    `stream_chat` yields the accumulated assistant text after every
    content delta, so callers can re-render the whole message each time.
    """

    def __init__(self, base_url: str, access_token: Optional[str] = None, timeout: float = 120):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        if access_token:
            self.session.headers['Authorization'] = f'Bearer {access_token}'

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _raise_for_error(self, response: requests.Response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get('error') or f"HTTP {response.status_code}"

        if response.status_code == 429 and body.get('rateLimited'):
            raise RateLimitError(message, messages_used=body.get('messagesUsed'), remaining=body.get('remaining', 0))
        raise APIError(message, status_code=response.status_code)

    def stream_chat(self, messages: List[Dict[str, str]]) -> Iterator[str]:
        try:
            response = self.session.post(
                self._url('/api/chat/'),
                json={"messages": messages},
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Chat request failed: {str(e)}")
            raise APIError("Eroare de conexiune") from e

        with response:
            if not response.ok:
                self._raise_for_error(response)

            reassembler = StreamReassembler()
            for chunk in response.iter_content(chunk_size=None):
                if reassembler.feed(chunk):
                    yield reassembler.content
                if reassembler.done:
                    break

    def get_usage(self) -> Dict:
        response = self.session.get(self._url('/api/account/usage/'), timeout=self.timeout)
        if not response.ok:
            self._raise_for_error(response)
        return response.json()

    def add_to_wishlist(self, url: str, title: Optional[str] = None,
                        price: Optional[str] = None, image: Optional[str] = None) -> Dict:
        payload = {"url": url, "title": title, "price": price, "image": image}
        response = self.session.post(
            self._url('/api/wishlist/'),
            json={k: v for k, v in payload.items() if v},
            timeout=self.timeout,
        )
        if not response.ok:
            self._raise_for_error(response)
        return response.json()
