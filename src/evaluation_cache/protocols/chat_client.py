"""Chat completion client protocol.

Defines the interface for an LLM provider speaking the chat-completions
shape. The credential is passed per call so that a rotator can choose it.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChatClient(Protocol):
    """Protocol for chat-completion providers.

    Implementations must raise ``httpx.HTTPStatusError`` (or an error with
    the same ``response.status_code`` shape) for non-2xx responses so that
    rate-limit and auth failures can be told apart from terminal ones.
    """

    @property
    def model_name(self) -> str:
        """Return the model identifier sent to the provider."""
        ...

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
        """Run one chat completion and return the message content."""
        ...
