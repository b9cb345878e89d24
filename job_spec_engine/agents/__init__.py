"""Agent exports."""

from .reasoning import OpenAIReasoningCapability, ReasoningCapability
from .retry import RetryPolicy, RetryState, run_with_retry
from .search_spec_agent import GenerateSearchSpecResult, SearchSpecAgent, generate_search_spec

__all__ = [
    "SearchSpecAgent",
    "GenerateSearchSpecResult",
    "generate_search_spec",
    "ReasoningCapability",
    "OpenAIReasoningCapability",
    "RetryPolicy",
    "RetryState",
    "run_with_retry",
]
