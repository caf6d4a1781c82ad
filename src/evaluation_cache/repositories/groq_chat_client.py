"""Groq chat-completions client.

Talks to Groq's OpenAI-compatible ``/chat/completions`` endpoint. Any
OpenAI-compatible base URL works the same way.

Key features:
- Credential passed per call, so a CredentialRotator decides which key to use
- JSON response mode for structured evaluations
- Non-2xx responses raise ``httpx.HTTPStatusError`` unchanged, so 429/401
  can drive key rotation
"""

import httpx

from evaluation_cache.config import settings


class GroqChatClient:
    """Groq implementation of the ChatClient protocol.

    This class satisfies the ChatClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = GroqChatClient.create()
        content = await client.complete(
            "You are a strict reviewer.",
            "Rate this tutorial...",
            api_key="gsk_...",
        )
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Groq chat client.

        Args:
            model_name: Model identifier. Defaults to settings.groq_model.
            base_url: API base URL. Defaults to settings.groq_base_url.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            http_client: Pre-built client (mainly for tests).
        """
        self._model_name = model_name or settings.groq_model
        self._base_url = (base_url or settings.groq_base_url).rstrip("/")
        self._timeout = timeout or settings.http_timeout
        self._client = http_client
        self.call_count = 0

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "GroqChatClient":
        """Factory method to create GroqChatClient with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: API base URL. If None, uses settings.

        Returns:
            Configured GroqChatClient
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def model_name(self) -> str:
        """Get the model identifier."""
        return self._model_name

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        api_key: str,
        temperature: float = 0.2,
        max_tokens: int = 1500,
        json_mode: bool = True,
    ) -> str:
        """Run one chat completion.

        Args:
            system_prompt: System instruction
            user_prompt: User message
            api_key: Bearer credential for this call
            temperature: Sampling temperature
            max_tokens: Token budget for the answer
            json_mode: Request a JSON object response

        Returns:
            The assistant message content ("" if the provider sent none)

        Raises:
            httpx.HTTPStatusError: For non-2xx responses
            httpx.TransportError: For network failures
        """
        body: dict = {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        response = await self.client.post(
            f"{self._base_url}/chat/completions",
            json=body,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        response.raise_for_status()
        self.call_count += 1

        data = response.json()
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
