"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Single bounded wait for a provider response; failures are never retried
REQUEST_TIMEOUT = 30.0
MAX_TOKENS = 1000
TEMPERATURE = 0.4

SYSTEM_PROMPT = """You are a senior software engineer who writes precise, informative git commit messages.
You read diffs carefully, identify the primary purpose of a change, and describe it for the developers who will read git log later."""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    def __init__(self, api_key: str, model: str, timeout: float = REQUEST_TIMEOUT):
        if not api_key:
            raise LLMError(
                "No API key configured. Run 'commet config set' first:\n"
                "  commet config set --api-key YOUR_KEY"
            )
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def _timeout_error(self) -> LLMError:
        return LLMError(f"Request timed out after {self.timeout:g}s. Try again or use a smaller change.")
