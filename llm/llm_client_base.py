"""
Base abstract class for LLM clients.

This defines the interface that all generative-text providers must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients.

    All provider implementations (OpenAI, Ollama, etc.) must inherit from this
    class and implement the abstract methods.
    """

    def __init__(self, model: str, **kwargs):
        """
        Initialize the LLM client.

        Args:
            model: Model name/identifier
            **kwargs: Additional provider-specific configuration
        """
        self.model = model
        self.config = kwargs

    @abstractmethod
    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Perform a chat completion request.

        Args:
            prompt: The user prompt/message
            chat_history: Optional conversation history in format [{"role": "user/assistant", "content": "..."}]
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            The model's response as a string, empty when the provider
            returned no content

        Raises:
            ExternalServiceError: If the API call fails
        """
        pass

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        """
        Count the number of tokens in the given text.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        pass

    async def generate(self, prompt: str, **kwargs) -> str:
        """Single-turn generation used by the flashcard export."""
        return await self.chat_completion(prompt, **kwargs)

    async def close(self):
        """Release network resources held by the client."""
        pass

    @staticmethod
    def build_messages(
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None
    ) -> List[Dict[str, str]]:
        messages = []
        if chat_history:
            messages.extend(chat_history)
        messages.append({"role": "user", "content": prompt})
        return messages
