"""LLM provider client.

Talks to any OpenAI-compatible endpoint:
- /embeddings for style vectors
- /chat/completions for generation and chat
"""

from typing import Optional

import httpx
import structlog

from .config import get_settings
from .errors import ProviderError

logger = structlog.get_logger(__name__)


class LLMClient:
    """Embedding and completion client for an OpenAI-compatible API.

    Usage:
        client = LLMClient()  # Uses config defaults
        vector = client.embed("Some text")
        reply = client.complete([{"role": "user", "content": "Hi"}])

    Failures surface as ProviderError. Retrying is left to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize LLM client.

        Args:
            base_url: API root, e.g. https://api.openai.com/v1 (default from config)
            api_key: Bearer token (default from config)
            timeout: Request timeout in seconds (default from config)
            http_client: Pre-built httpx client, mainly for tests
        """
        self.settings = get_settings()
        self.base_url = (base_url or self.settings.openai_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else self.settings.openai_api_key
        self.timeout = timeout or self.settings.request_timeout
        self._http = http_client or httpx.Client(timeout=self.timeout)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.post(url, headers=self._headers(), json=payload)
        except httpx.TimeoutException as e:
            logger.warning("provider_timeout", url=url, error=str(e))
            raise ProviderError(f"Request to {path} timed out") from e
        except httpx.RequestError as e:
            logger.warning("provider_unreachable", url=url, error=str(e))
            raise ProviderError(f"Request to {path} failed: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "provider_http_error",
                url=url,
                status_code=response.status_code,
                body=response.text[:200],
            )
            raise ProviderError(
                f"Provider returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Provider returned invalid JSON for {path}") from e

    def embed(self, text: str, model: Optional[str] = None) -> list[float]:
        """Embed a single text.

        Args:
            text: Input text (callers chunk it to the model's input limit)
            model: Embedding model (default from config)

        Returns:
            The embedding as a list of floats
        """
        model = model or self.settings.embedding_model
        result = self._post("/embeddings", {"model": model, "input": text})

        try:
            embedding = result["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Embedding response missing data[0].embedding") from e

        logger.debug("embedded_text", model=model, chars=len(text), dimensions=len(embedding))
        return [float(x) for x in embedding]

    def complete(
        self,
        messages: list[dict],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Run a chat completion.

        Args:
            messages: Ordered {"role", "content"} dicts
            model: Completion model (default: generation model from config)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            The assistant message content, or empty string if the model sent none
        """
        model = model or self.settings.generation_model
        result = self._post(
            "/chat/completions",
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
        )

        choices = result.get("choices") or []
        if not choices:
            raise ProviderError("Completion response has no choices")

        content = (choices[0].get("message") or {}).get("content") or ""
        return content.strip()

    def close(self) -> None:
        self._http.close()

    @property
    def is_configured(self) -> bool:
        """True when an API key is available."""
        return bool(self.api_key)


# Convenience function
def get_llm_client() -> LLMClient:
    """Get an LLM client instance built from settings."""
    return LLMClient()
