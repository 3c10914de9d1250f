"""
Ollama client implementation.

This wraps the Ollama API and implements the BaseLLMClient interface.
"""

import httpx
import json
from typing import Optional, Dict, List

from core.exceptions import ExternalServiceError
from .llm_client_base import BaseLLMClient

OLLAMA_OPTION_NAMES = {
    'temperature': 'temperature',
    'max_tokens': 'num_predict',
    'top_p': 'top_p',
}


class OllamaClient(BaseLLMClient):
    """
    LLM client for Ollama (local LLM server).
    """

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Ollama client.

        Args:
            model: Ollama model name (e.g., 'qwen3:30b', 'llama3:latest')
            base_url: Ollama server URL (default: http://localhost:11434)
            timeout: Request timeout in seconds (default: 300)
            transport: Optional httpx transport, used by tests
            **kwargs: Additional configuration
        """
        super().__init__(model, **kwargs)

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Call Ollama chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            **kwargs: Additional parameters (temperature, etc.)

        Returns:
            Model response text

        Raises:
            ExternalServiceError: If the server is unreachable, returns an
                error status or sends malformed JSON
        """
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, chat_history),
            "stream": False,
        }

        # Ollama names max_tokens num_predict
        options = {
            OLLAMA_OPTION_NAMES[key]: value
            for key, value in kwargs.items()
            if key in OLLAMA_OPTION_NAMES
        }
        if options:
            payload['options'] = options

        try:
            response = await self.client.post("/api/chat", json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.ConnectError as e:
            raise ExternalServiceError(
                f"Could not connect to Ollama server at {self.base_url}. "
                f"Please ensure Ollama is running (e.g., 'ollama serve') and "
                f"you have pulled the model (e.g., 'ollama pull {self.model}'). "
                f"Error: {e}"
            )
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Ollama server returned error: {e.response.status_code} - {e.response.text}"
            )
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Ollama request failed: {e}")
        except json.JSONDecodeError:
            raise ExternalServiceError(
                f"Invalid JSON response from Ollama: {response.text[:200]}"
            )

        message = result.get('message') if isinstance(result, dict) else None
        content = message.get('content') if isinstance(message, dict) else None
        return content.strip() if isinstance(content, str) else ""

    def count_tokens(self, text: str) -> int:
        """
        Estimate token count for Ollama models.

        Ollama has no tokenizer API; approximately 4 characters per token.

        Args:
            text: Text to count tokens for

        Returns:
            Estimated number of tokens
        """
        return len(text) // 4

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
