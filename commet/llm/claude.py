"""Claude (Anthropic) LLM Client"""

from commet.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, MAX_TOKENS, TEMPERATURE, REQUEST_TIMEOUT


class ClaudeClient(LLMClient):
    """Claude API client."""

    def __init__(self, api_key: str, model: str, timeout: float = REQUEST_TIMEOUT):
        super().__init__(api_key, model, timeout)
        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )
        self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, APITimeoutError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except APITimeoutError:
            raise self._timeout_error()
        except AuthenticationError:
            raise LLMError("Invalid API key for Claude. Check 'commet config show'.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        if not content:
            raise LLMError("No response from Claude")

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )
