"""
External service integrations for Nexus SEO.

- llm: chat client for OpenAI-compatible endpoints
- insights: AI audit insights with a mock fallback
"""

from nexus_seo.integrations.llm import ChatCompletion, LLMClient, LLMConfig, LLMProvider, Message
from nexus_seo.integrations.insights import InsightsClient, mock_insights

__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "Message",
    "ChatCompletion",
    "InsightsClient",
    "mock_insights",
]
