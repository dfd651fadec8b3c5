"""Python client for the chat endpoint: stream reassembly and product marker extraction."""
from .api_client import APIError, LocalAgentClient, RateLimitError
from .markers import ParsedMessage, ProductReference, parse_message_content
from .stream import StreamReassembler

__all__ = [
    'LocalAgentClient', 'APIError', 'RateLimitError',
    'StreamReassembler', 'ParsedMessage', 'ProductReference', 'parse_message_content'
]
