"""
Flashcard Service - Turns the note outline into study flashcards.

Sends the linearized outline, wrapped in the flashcard instruction template,
to the generative-text service. Failures never propagate: they become a
user-visible message in the result, and the note tree is never touched.
"""
from typing import List, Optional, Sequence, Tuple

from core.constants import FLASHCARD_EMPTY_MESSAGE, FLASHCARD_ERROR_PREFIX
from core.exceptions import GenerationInProgressError
from core.models import GenerationResult, Note
from llm.llm_client_base import BaseLLMClient
from notes.linearizer import build_flashcard_prompt
from utils.log_utils import get_logger

logger = get_logger('services.flashcards')


def parse_flashcards(text: str) -> List[Tuple[str, str]]:
    """
    Split generated text into (term, definition) pairs.

    One card per line, term and definition separated by the first tab.
    Lines without a tab or with an empty side are skipped; the format comes
    from the prompt and is not guaranteed by the model.

    Args:
        text: Generated flashcard text

    Returns:
        List of (term, definition) tuples
    """
    cards = []
    for line in text.splitlines():
        if '\t' not in line:
            continue
        term, definition = line.split('\t', 1)
        term, definition = term.strip(), definition.strip()
        if term and definition:
            cards.append((term, definition))
    return cards


def flashcards_to_tsv(cards: Sequence[Tuple[str, str]]) -> str:
    """Render cards in the tab-separated import format used by flashcard apps."""
    return ''.join(f"{term}\t{definition}\n" for term, definition in cards)


class FlashcardService:
    """
    Service for flashcard generation.

    Only one generation may be in flight; a second request while one is
    outstanding is rejected rather than queued or cancelling the first.
    """

    def __init__(self, client: BaseLLMClient, temperature: Optional[float] = None):
        """
        Initialize flashcard service.

        Args:
            client: Generative-text client
            temperature: Optional sampling temperature forwarded to the client
        """
        self.client = client
        self.temperature = temperature
        self.last_result: Optional[GenerationResult] = None
        self._in_flight = False

    @property
    def is_generating(self) -> bool:
        return self._in_flight

    def build_prompt(self, forest: Sequence[Note]) -> str:
        return build_flashcard_prompt(forest)

    async def generate(
        self,
        forest: Sequence[Note] = (),
        prompt: Optional[str] = None
    ) -> GenerationResult:
        """
        Generate flashcards from a forest snapshot or an edited prompt.

        Args:
            forest: Forest snapshot used to build the default prompt
            prompt: Prompt text to send instead, e.g. after user edits

        Returns:
            Result carrying either the generated text or an error message

        Raises:
            GenerationInProgressError: If a generation is already running
        """
        if self._in_flight:
            raise GenerationInProgressError("Flashcard generation already in progress")

        if prompt is None:
            prompt = self.build_prompt(forest)

        kwargs = {}
        if self.temperature is not None:
            kwargs['temperature'] = self.temperature

        self._in_flight = True
        try:
            prompt_tokens = self.client.count_tokens(prompt)
            logger.info(f"Generating flashcards with {self.client.model} ({prompt_tokens} prompt tokens)")
            text = await self.client.generate(prompt, **kwargs)
            if text:
                result = GenerationResult(
                    text=text,
                    ok=True,
                    prompt_tokens=prompt_tokens,
                    cards=parse_flashcards(text)
                )
            else:
                logger.warning("Generation returned an empty payload")
                result = GenerationResult(text=FLASHCARD_EMPTY_MESSAGE, ok=False, prompt_tokens=prompt_tokens)
        except Exception as e:
            logger.error(f"Error generating flashcards: {e}")
            result = GenerationResult(text=f"{FLASHCARD_ERROR_PREFIX}{e}", ok=False)
        finally:
            self._in_flight = False

        self.last_result = result
        return result
