"""
Pool of loaded questions supplying random draws.
"""
import logging
import random
from typing import List, Optional, Protocol, Sequence

from .models import Question


class QuestionSource(Protocol):
    """Anything able to produce the question pool."""

    def load(self) -> Sequence[Question]:
        ...


class QuestionBank:
    """Holds the question pool and draws questions uniformly with replacement."""

    def __init__(self, questions: Optional[Sequence[Question]] = None, rng: Optional[random.Random] = None):
        self.logger = logging.getLogger(__name__)
        self._questions: List[Question] = list(questions or [])
        self._rng = rng or random.Random()

    def load(self, source: QuestionSource) -> List[Question]:
        """
        Replace the pool with the questions produced by a source.

        Args:
            source: Question source to read from

        Returns:
            The loaded questions

        Raises:
            LoadError: If the source is unreadable or malformed
        """
        questions = list(source.load())
        self._questions = questions
        self.logger.info(
            f"Question bank loaded with {len(questions)} questions",
            extra={'event_type': 'question_bank_loaded', 'question_count': len(questions)}
        )
        return list(questions)

    def pick_random(self) -> Optional[Question]:
        """Draw a random question, or None when the pool is empty."""
        if not self._questions:
            return None
        return self._rng.choice(self._questions)

    def is_empty(self) -> bool:
        return not self._questions

    def __len__(self) -> int:
        return len(self._questions)
