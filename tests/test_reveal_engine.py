"""
Unit tests for the RevealEngine class.
"""
import math
import random
import unittest
from fractions import Fraction

from quizz.models import HintState
from quizz.reveal_engine import RevealEngine


class TestMask(unittest.TestCase):
    """Test cases for answer masking."""

    def test_letters_and_digits_are_masked(self):
        self.assertEqual(RevealEngine.mask("Paris"), "*****")
        self.assertEqual(RevealEngine.mask("R2-D2"), "**-**")

    def test_spaces_and_punctuation_are_kept(self):
        self.assertEqual(RevealEngine.mask("Leonardo da Vinci"), "******** ** *****")
        self.assertEqual(RevealEngine.mask("l'Île-de-France!"), "*'***-**-******!")

    def test_accented_letters_are_masked(self):
        self.assertEqual(RevealEngine.mask("Éléphant"), "********")

    def test_mask_keeps_answer_length(self):
        answer = "İstanbul"
        self.assertEqual(len(RevealEngine.mask(answer)), len(answer))
        self.assertEqual(RevealEngine.mask(answer), "********")

    def test_full_reveal_restores_multi_code_point_lowercase(self):
        answer = "İstanbul"
        hint = HintState()
        self.assertEqual(RevealEngine(random.Random(3)).reveal(answer, hint, 1), answer)
        self.assertEqual(hint.revealed_positions, set(range(len(answer))))

    def test_alphabetic_positions(self):
        self.assertEqual(RevealEngine.alphabetic_positions("a b-c"), [0, 2, 4])
        self.assertEqual(RevealEngine.alphabetic_positions("?!"), [])


class TestReveal(unittest.TestCase):
    """Test cases for progressive reveal."""

    def setUp(self):
        self.engine = RevealEngine(random.Random(42))
        self.answer = "Leonardo da Vinci"
        self.letters = RevealEngine.alphabetic_positions(self.answer)

    def assert_consistent(self, revealed: str, hint: HintState):
        self.assertEqual(len(revealed), len(self.answer))
        for index, char in enumerate(revealed):
            if index in hint.revealed_positions:
                self.assertEqual(char, self.answer[index])
            elif index in self.letters:
                self.assertEqual(char, "*")
            else:
                self.assertEqual(char, self.answer[index])

    def test_ratio_zero_reveals_nothing(self):
        hint = HintState()
        self.assertEqual(self.engine.reveal(self.answer, hint, 0), "******** ** *****")
        self.assertEqual(hint.revealed_positions, set())

    def test_reveal_count_follows_ratio(self):
        for ratio in (Fraction(1, 3), Fraction(1, 2), Fraction(1)):
            hint = HintState()
            revealed = self.engine.reveal(self.answer, hint, ratio)
            expected = min(math.floor(ratio * len(self.letters)), len(self.letters))
            self.assertEqual(len(hint.revealed_positions), expected)
            self.assert_consistent(revealed, hint)

    def test_revealed_positions_are_letters_only(self):
        hint = HintState()
        self.engine.reveal(self.answer, hint, Fraction(1, 2))
        self.assertTrue(hint.revealed_positions <= set(self.letters))

    def test_reveal_is_monotonic(self):
        hint = HintState()
        previous = set()
        for ratio in (0, Fraction(1, 3), Fraction(1, 3), Fraction(1, 2), Fraction(1)):
            self.engine.reveal(self.answer, hint, ratio)
            self.assertTrue(previous <= hint.revealed_positions)
            previous = set(hint.revealed_positions)
        self.assertEqual(hint.revealed_positions, set(self.letters))

    def test_smaller_ratio_never_hides_letters(self):
        hint = HintState()
        self.engine.reveal(self.answer, hint, Fraction(1, 2))
        kept = set(hint.revealed_positions)
        revealed = self.engine.reveal(self.answer, hint, 0)
        self.assertEqual(hint.revealed_positions, kept)
        self.assert_consistent(revealed, hint)

    def test_float_ratio_is_treated_exactly(self):
        hint = HintState()
        self.engine.reveal("abcdef", hint, 1 / 3)
        self.assertEqual(len(hint.revealed_positions), 2)

    def test_ratio_above_one_is_bounded(self):
        hint = HintState()
        revealed = self.engine.reveal("Paris", hint, 5)
        self.assertEqual(revealed, "Paris")
        self.assertEqual(hint.revealed_positions, {0, 1, 2, 3, 4})
        # everything already revealed, the call must still terminate
        self.assertEqual(self.engine.reveal("Paris", hint, 5), "Paris")

    def test_answer_without_letters(self):
        hint = HintState()
        self.assertEqual(self.engine.reveal("?!", hint, Fraction(1, 2)), "?!")

    def test_revealed_letters_keep_original_case(self):
        hint = HintState()
        revealed = self.engine.reveal("ÉLAN", hint, 1)
        self.assertEqual(revealed, "ÉLAN")

    def test_same_seed_same_reveal(self):
        first = RevealEngine(random.Random(5)).reveal(self.answer, HintState(), Fraction(1, 2))
        second = RevealEngine(random.Random(5)).reveal(self.answer, HintState(), Fraction(1, 2))
        self.assertEqual(first, second)


if __name__ == '__main__':
    unittest.main()
