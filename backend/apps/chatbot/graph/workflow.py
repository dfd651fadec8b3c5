import logging
from typing import Dict, List

from langgraph.graph import StateGraph, START, END

from apps.chatbot.graph.state import ChatMessage, DiscoveryState
from apps.chatbot.agents import (
    sme_lookup_node,
    candidate_search_node,
    build_context_node,
    build_completion_messages,
    last_user_message
)

logger = logging.getLogger(__name__)


class WorkflowManager:
    """Manages the LangGraph workflow that gathers product discovery context."""

    def __init__(self):
        self.app = self._build_workflow_graph()
        logger.info("WorkflowManager initialized")

    def _build_workflow_graph(self):
        """Build and compile the LangGraph workflow."""

        workflow = StateGraph(DiscoveryState)

        # Add nodes
        workflow.add_node("sme_lookup", sme_lookup_node)
        workflow.add_node("candidate_search", candidate_search_node)
        workflow.add_node("build_context", build_context_node)

        # Both lookups start together and run in the same superstep
        workflow.add_edge(START, "sme_lookup")
        workflow.add_edge(START, "candidate_search")

        # Join waits for both branches
        workflow.add_edge(["sme_lookup", "candidate_search"], "build_context")
        workflow.add_edge("build_context", END)

        # Compile
        return workflow.compile()

    def gather_context(self, query: str) -> Dict:
        """
        Run the lookups for a query.

        Args:
            query: The user's latest message

        Returns:
            Dict with context, sme_companies, candidates, search_error and logs
        """
        initial_state: DiscoveryState = {
            "query": query,
            "sme_companies": [],
            "candidates": [],
            "search_error": None,
            "context": "",
            "logs": []
        }

        logger.info(f"Gathering context for: {query[:50]}...")
        result = self.app.invoke(initial_state)

        for entry in result.get("logs", []):
            if entry.get("error"):
                logger.warning(f"Node {entry.get('node')} degraded: {entry['error']}")

        return result

    def prepare_chat_completion(self, messages: List[ChatMessage]) -> List[Dict]:
        """
        Build the message list for the completion model.

        Only the last user message drives the lookups; the whole history
        follows the system message.
        """
        query = last_user_message(messages)
        context = self.gather_context(query).get("context", "") if query else ""
        return build_completion_messages(messages, context)


_workflow_manager = None


def get_workflow_manager() -> WorkflowManager:
    """Lazily build the shared workflow."""
    global _workflow_manager
    if _workflow_manager is None:
        _workflow_manager = WorkflowManager()
    return _workflow_manager


def prepare_chat_completion(messages: List[ChatMessage]) -> List[Dict]:
    """Convenience function to build completion messages."""
    return get_workflow_manager().prepare_chat_completion(messages)
