"""LLM Client Package"""

from commet.config import AIConfig
from commet.llm.base import LLMClient, LLMResponse, LLMError, REQUEST_TIMEOUT, SYSTEM_PROMPT
from commet.llm.claude import ClaudeClient
from commet.llm.openai_compat import OpenAIClient, GroqClient, GoogleClient

PROVIDERS = {
    "openai": OpenAIClient,
    "claude": ClaudeClient,
    "google": GoogleClient,
    "groq": GroqClient,
}


def get_client(ai: AIConfig, timeout: float = REQUEST_TIMEOUT) -> LLMClient:
    """Build the client for the configured provider."""
    client_class = PROVIDERS.get(ai.provider)
    if client_class is None:
        raise LLMError(f"Unsupported provider: {ai.provider}. Use one of: {', '.join(PROVIDERS)}.")
    return client_class(api_key=ai.resolve_api_key(), model=ai.effective_model, timeout=timeout)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OpenAIClient",
    "GroqClient",
    "GoogleClient",
    "get_client",
    "PROVIDERS",
    "REQUEST_TIMEOUT",
    "SYSTEM_PROMPT",
]
