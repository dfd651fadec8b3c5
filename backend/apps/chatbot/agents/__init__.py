from .orchestrator_agent import build_completion_messages, build_context_node, last_user_message
from .sme_agent import sme_lookup_node
from .web_search_agent import candidate_search_node

__all__ = [
    'sme_lookup_node', 'candidate_search_node', 'build_context_node',
    'build_completion_messages', 'last_user_message'
]
