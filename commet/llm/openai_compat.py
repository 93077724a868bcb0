"""OpenAI-compatible LLM Clients (OpenAI, Groq, Google Gemini)"""

from commet.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, MAX_TOKENS, TEMPERATURE, REQUEST_TIMEOUT


class OpenAIClient(LLMClient):
    """Chat-completions client. Subclasses point it at other endpoints."""

    BASE_URL: str | None = None
    DISPLAY_NAME = "OpenAI"

    def __init__(self, api_key: str, model: str, timeout: float = REQUEST_TIMEOUT):
        super().__init__(api_key, model, timeout)
        try:
            from openai import OpenAI
        except ImportError:
            raise LLMError(
                "OpenAI SDK not installed. Run:\n"
                "  pip install openai"
            )
        self._client = OpenAI(
            api_key=self.api_key,
            base_url=self.BASE_URL,
            timeout=self.timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return f"{self.DISPLAY_NAME} ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from openai import APIError, APITimeoutError, AuthenticationError

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except APITimeoutError:
            raise self._timeout_error()
        except AuthenticationError:
            raise LLMError(f"Invalid API key for {self.DISPLAY_NAME}. Check 'commet config show'.")
        except APIError as e:
            raise LLMError(f"{self.DISPLAY_NAME} API error: {e.message}")

        if not response.choices:
            raise LLMError(f"No response from {self.DISPLAY_NAME}")

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise LLMError(f"No response from {self.DISPLAY_NAME}")

        tokens = response.usage.total_tokens if response.usage else 0
        return LLMResponse(content=content, model=self.model, tokens_used=tokens)


class GroqClient(OpenAIClient):
    BASE_URL = "https://api.groq.com/openai/v1"
    DISPLAY_NAME = "Groq"


class GoogleClient(OpenAIClient):
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
    DISPLAY_NAME = "Google"
