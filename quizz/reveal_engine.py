"""
Progressive answer reveal for hints.
"""
import logging
import math
import random
from fractions import Fraction
from typing import List, Optional, Union

from .models import HintState
from .normalizer import fold_char, is_revealable

MASK_CHAR = '*'

Ratio = Union[Fraction, float, int]


def _mask_char(char: str) -> str:
    if is_revealable(char):
        return MASK_CHAR
    folded = fold_char(char)
    # Some characters lower-case to several code points
    return folded if len(folded) == 1 else char


class RevealEngine:
    """
    Builds masked answers where a growing share of letters is disclosed.

    Revealed positions are stored in the question's HintState, so successive
    reveals for the same question only ever add letters.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.logger = logging.getLogger(__name__)
        self._rng = rng or random.Random()

    @staticmethod
    def mask(answer: str) -> str:
        """
        Mask an answer.

        Every letter or digit of the normalized answer becomes ``*``; spaces
        and punctuation are kept.
        """
        return ''.join(_mask_char(char) for char in answer)

    @staticmethod
    def alphabetic_positions(answer: str) -> List[int]:
        return [index for index, char in enumerate(answer) if is_revealable(char)]

    def reveal(self, answer: str, hint: HintState, ratio: Ratio) -> str:
        """
        Reveal a share of the answer's letters.

        Args:
            answer: The original answer
            hint: Hint state of the active question, updated in place
            ratio: Share of letters that must be visible after the call

        Returns:
            The masked answer with the revealed letters in their original case
        """
        positions = self.alphabetic_positions(answer)
        share = Fraction(ratio).limit_denominator(1000)
        target = min(math.floor(share * len(positions)), len(positions))

        missing = target - len(hint.revealed_positions)
        if missing > 0:
            hidden = [index for index in positions if index not in hint.revealed_positions]
            hint.revealed_positions.update(self._rng.sample(hidden, min(missing, len(hidden))))
            self.logger.debug(
                f"Revealed {len(hint.revealed_positions)}/{len(positions)} letters",
                extra={
                    'event_type': 'hint_reveal',
                    'ratio': str(ratio),
                    'target': target,
                    'revealed': len(hint.revealed_positions),
                }
            )

        masked = list(self.mask(answer))
        for index in hint.revealed_positions:
            masked[index] = answer[index]
        return ''.join(masked)
