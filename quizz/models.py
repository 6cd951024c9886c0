"""
Core data models for the quiz engine.
"""
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, Set, Tuple


@dataclass(frozen=True)
class Question:
    """Represents a single quiz question."""
    title: str
    answer: str


@dataclass
class HintState:
    """Tracks the hints given for the active question."""
    given_count: int = 0
    last_hint_at: float = 0.0
    revealed_positions: Set[int] = field(default_factory=set)


@dataclass
class ActiveQuestion:
    """The question currently in progress."""
    question: Question
    started_at: float
    hint: HintState

    @classmethod
    def begin(cls, question: Question, now: float) -> "ActiveQuestion":
        return cls(question=question, started_at=now, hint=HintState(last_hint_at=now))


@dataclass
class Player:
    """A ledger entry."""
    name: str
    score: int = 0


@dataclass
class QuizSettings:
    """Timing and scoring settings for a quiz session."""
    hint_cooldown: float = 10
    next_cooldown: float = 15
    restart_delay: float = 15
    hint_ratios: Tuple[Fraction, ...] = (Fraction(0), Fraction(1, 3), Fraction(1, 2))
    ladder_size: int = 5
    cancel_restart_on_transition: bool = True

    @property
    def max_hints(self) -> int:
        return len(self.hint_ratios)

    @property
    def max_points(self) -> int:
        return len(self.hint_ratios) + 1

    def hint_ratio(self, given_count: int) -> Optional[Fraction]:
        """Ratio for the tier reached after ``given_count`` hints."""
        if not self.hint_ratios:
            return None
        index = min(max(given_count - 1, 0), len(self.hint_ratios) - 1)
        return self.hint_ratios[index]
