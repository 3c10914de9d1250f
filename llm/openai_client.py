"""
OpenAI client implementation.

This wraps the OpenAI API and implements the BaseLLMClient interface.
"""

import os
from typing import Optional, Dict, List
import openai
import tiktoken
from openai import AsyncOpenAI

from core.exceptions import ExternalServiceError
from .llm_client_base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """
    LLM client for OpenAI API.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize OpenAI client.

        Args:
            model: OpenAI model name (e.g., 'gpt-4o-mini')
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            **kwargs: Additional configuration
        """
        super().__init__(model, **kwargs)

        # Get API key from parameter or environment
        self.api_key = api_key or os.getenv('OPENAI_API_KEY')
        if not self.api_key:
            raise ValueError(
                "OpenAI API key not found. Please set OPENAI_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self.client = AsyncOpenAI(api_key=self.api_key, base_url=kwargs.get('base_url'))

        # Initialize tokenizer
        try:
            self.encoding = tiktoken.encoding_for_model(model)
        except KeyError:
            # Fallback to cl100k_base for unknown models
            self.encoding = tiktoken.get_encoding("cl100k_base")

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        **kwargs
    ) -> str:
        """
        Call OpenAI chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            Model response text

        Raises:
            ExternalServiceError: On connection, status or API errors
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt, chat_history),
                **kwargs
            )
        except openai.APIStatusError as e:
            raise ExternalServiceError(f"API Error: {e.status_code} {e.message}")
        except openai.APIError as e:
            raise ExternalServiceError(f"API Error: {e}")

        if not response.choices:
            return ""
        content = response.choices[0].message.content
        return content.strip() if content else ""

    def count_tokens(self, text: str) -> int:
        """
        Count tokens using tiktoken.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        return len(self.encoding.encode(text))

    async def close(self):
        await self.client.close()
