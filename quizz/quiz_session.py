"""
Quiz session controller.
Runs the single active question: start, stop, repeat, hints, skipping,
answer checking, scoring and the automatic restart after each question.
"""
import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Mapping, Optional, Protocol

from . import messages
from .errors import SaveError
from .models import ActiveQuestion, QuizSettings
from .normalizer import answers_match
from .player_ledger import PlayerLedger
from .question_bank import QuestionBank
from .quiz_timer import RestartTimer
from .reveal_engine import RevealEngine
from .sink import OutboundSink


class SessionState(Enum):
    """Enumeration of possible quiz session states."""
    IDLE = "idle"
    ACTIVE = "active"


class PlayerStore(Protocol):
    """Persistence for the player ledger."""

    def load(self) -> Mapping[str, int]:
        ...

    def save(self, scores: Mapping[str, int]) -> None:
        ...


class QuizSession:
    """
    Orchestrates the one active question of the quiz.

    Every public command is a coroutine serialized by a single lock, so no
    two commands ever observe or change the active question at the same
    time. User-visible output goes to the sink; nothing is returned.
    """

    def __init__(
        self,
        bank: QuestionBank,
        ledger: PlayerLedger,
        sink: OutboundSink,
        store: Optional[PlayerStore] = None,
        settings: Optional[QuizSettings] = None,
        reveal_engine: Optional[RevealEngine] = None,
        clock: Callable[[], float] = time.monotonic,
        command_prefix: str = "!",
    ):
        """
        Initialize the quiz session.

        Args:
            bank: Question pool to draw from
            ledger: Player scores, updated in place
            sink: Destination for every emitted line
            store: Optional persistence for the ledger
            settings: Timing and scoring settings
            reveal_engine: Hint reveal engine, built with a fresh RNG if None
            clock: Monotonic time source in seconds
            command_prefix: Prefix shown in the help text
        """
        self.logger = logging.getLogger(__name__)
        self.bank = bank
        self.ledger = ledger
        self.sink = sink
        self.store = store
        self.settings = settings or QuizSettings()
        self.reveal_engine = reveal_engine or RevealEngine()
        self.command_prefix = command_prefix
        self._clock = clock

        self._lock = asyncio.Lock()
        self._active: Optional[ActiveQuestion] = None
        self._pending_restart: Optional[RestartTimer] = None

    # Read-only views

    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self._active is None else SessionState.ACTIVE

    @property
    def active_question(self) -> Optional[ActiveQuestion]:
        return self._active

    @property
    def has_pending_restart(self) -> bool:
        return self._pending_restart is not None and self._pending_restart.is_pending

    @property
    def pending_restart(self) -> Optional[RestartTimer]:
        return self._pending_restart

    # Commands

    async def start(self) -> None:
        """Ask a new question if none is in progress."""
        async with self._lock:
            if self._active is not None:
                self._emit(messages.ALREADY_RUNNING)
                return
            if self.settings.cancel_restart_on_transition:
                self._cancel_pending_restart("explicit start")
            self._start_question()

    async def stop(self) -> None:
        """Drop the current question, or the restart waiting to ask the next one."""
        async with self._lock:
            if self._active is None:
                if self.settings.cancel_restart_on_transition:
                    self._cancel_pending_restart("explicit stop")
                self._emit(messages.NOT_RUNNING)
                return
            self._log_transition(SessionState.IDLE, "stopped")
            self._active = None
            if self.settings.cancel_restart_on_transition:
                self._cancel_pending_restart("explicit stop")
            self._emit(messages.STOPPED)

    async def repeat(self) -> None:
        """Repeat the current question title."""
        async with self._lock:
            if self._active is None:
                self._emit(messages.NOT_RUNNING)
                return
            self._emit(self._active.question.title)

    async def hint(self) -> None:
        """
        Reveal part of the answer.

        Each hint raises the share of revealed letters, at most once per
        cooldown. Asking again during the cooldown repeats the current hint.
        """
        async with self._lock:
            active = self._active
            if active is None:
                self._emit(messages.NOT_RUNNING)
                return

            hint = active.hint
            now = self._clock()
            if now - hint.last_hint_at < self.settings.hint_cooldown:
                self.logger.debug(
                    "Hint requested during cooldown, repeating current tier",
                    extra={'event_type': 'hint_cooldown', 'given_count': hint.given_count}
                )
                self._emit(self._reveal(active))
                return

            if hint.given_count >= self.settings.max_hints:
                self._emit(messages.NO_MORE_HINTS)
                return

            hint.given_count += 1
            hint.last_hint_at = now
            self.logger.info(
                f"Hint {hint.given_count}/{self.settings.max_hints} given",
                extra={'event_type': 'hint_given', 'given_count': hint.given_count}
            )
            self._emit(self._reveal(active))

    async def next(self) -> None:
        """Skip the current question once it has been up long enough."""
        async with self._lock:
            active = self._active
            if active is None:
                self._emit(messages.NOT_RUNNING)
                return

            if self._clock() - active.started_at < self.settings.next_cooldown:
                self._emit(messages.TOO_SOON)
                return

            self._emit(messages.ANSWER_WAS.format(answer=active.question.answer))
            self._emit(messages.next_question_in(self.settings.restart_delay))
            self._log_transition(SessionState.IDLE, "skipped")
            self._active = None
            self._schedule_restart()

    async def help(self) -> None:
        async with self._lock:
            for line in messages.help_lines(
                self.command_prefix,
                self.settings.hint_cooldown,
                self.settings.next_cooldown,
                self.settings.ladder_size,
            ):
                self._emit(line)

    async def ladder(self) -> None:
        """Emit the best players, one line each."""
        async with self._lock:
            for rank, player in enumerate(self.ledger.top(self.settings.ladder_size), start=1):
                self._emit(messages.ladder_line(rank, player.name, player.score))

    async def submit_answer(self, name: str, text: str) -> None:
        """
        Check an answer attempt.

        Non-matching attempts, and attempts when no question is active, have
        no effect.

        Args:
            name: Player name, matched exactly in the ledger
            text: Submitted answer
        """
        async with self._lock:
            active = self._active
            if active is None or not answers_match(text, active.question.answer):
                return

            points = self.settings.max_points - active.hint.given_count
            self._emit(messages.congratulations(name, active.question.answer, points))
            self._emit(messages.next_question_in(self.settings.restart_delay))
            self._log_transition(SessionState.IDLE, f"answered by {name}")
            self._active = None
            self._schedule_restart()

            player = self.ledger.upsert(name, points)
            self.logger.info(
                f"{name} scored {points} points (total {player.score})",
                extra={
                    'event_type': 'answer_scored',
                    'player': name,
                    'points': points,
                    'total': player.score,
                    'hints_given': active.hint.given_count,
                }
            )
            await self._persist_ledger()

    async def close(self) -> None:
        """Cancel any pending restart."""
        async with self._lock:
            self._cancel_pending_restart("session closed")

    # Internals, all called with the lock held

    def _emit(self, text: str) -> None:
        self.sink.send(text)

    def _start_question(self) -> None:
        question = self.bank.pick_random()
        if question is None:
            self.logger.warning(
                "Start requested but the question bank is empty",
                extra={'event_type': 'start_no_questions'}
            )
            self._emit(messages.NO_QUESTIONS)
            return

        self._active = ActiveQuestion.begin(question, self._clock())
        self._log_transition(SessionState.ACTIVE, "question asked")
        self._emit(question.title)

    def _reveal(self, active: ActiveQuestion) -> str:
        ratio = self.settings.hint_ratio(active.hint.given_count)
        return self.reveal_engine.reveal(active.question.answer, active.hint, ratio or 0)

    def _schedule_restart(self) -> None:
        self._cancel_pending_restart("superseded")
        timer = RestartTimer(self.settings.restart_delay, self._scheduled_start)
        self._pending_restart = timer
        timer.start()

    def _cancel_pending_restart(self, reason: str) -> None:
        timer = self._pending_restart
        if timer is None:
            return
        self._pending_restart = None
        if timer.cancel():
            self.logger.info(
                f"Pending restart cancelled ({reason})",
                extra={'event_type': 'restart_cancelled', 'timer_id': timer.timer_id, 'reason': reason}
            )

    async def _scheduled_start(self, timer: RestartTimer) -> None:
        async with self._lock:
            if timer is not self._pending_restart:
                self.logger.info(
                    "Scheduled restart skipped, it was superseded",
                    extra={'event_type': 'restart_skipped', 'timer_id': timer.timer_id}
                )
                return
            self._pending_restart = None
            if self._active is not None:
                self.logger.info(
                    "Scheduled restart skipped, a question is already active",
                    extra={'event_type': 'restart_skipped', 'timer_id': timer.timer_id}
                )
                return
            self._start_question()

    async def _persist_ledger(self) -> None:
        if self.store is None:
            return
        snapshot = self.ledger.snapshot()
        try:
            await asyncio.to_thread(self.store.save, snapshot)
        except SaveError as e:
            self.logger.error(
                f"Failed to save player ledger: {e}",
                extra={'event_type': 'ledger_save_failed', 'player_count': len(snapshot)}
            )

    def _log_transition(self, to_state: SessionState, reason: str) -> None:
        self.logger.info(
            f"Session {self.state.value} -> {to_state.value} ({reason})",
            extra={
                'event_type': 'session_transition',
                'from_state': self.state.value,
                'to_state': to_state.value,
                'reason': reason,
            }
        )
