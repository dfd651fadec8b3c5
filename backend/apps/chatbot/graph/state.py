import operator
from typing import Annotated, Dict, List, Literal, Optional, TypedDict

from apps.chatbot.tools.candidates import Candidate


class ChatMessage(TypedDict):
    """A single chat message."""
    role: Literal["user", "assistant"]
    content: str


class DiscoveryState(TypedDict):
    """State schema for the product discovery workflow."""

    # Input
    query: str

    # SME registry branch
    sme_companies: List[Dict]

    # Web search branch
    candidates: List[Candidate]
    search_error: Optional[str]

    # Output
    context: str

    # Both branches append here in the same step
    logs: Annotated[List[Dict], operator.add]
