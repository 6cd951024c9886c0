"""
Deferred restart timer for the quiz session.
Handles scheduling, cancellation and lifecycle logging of delayed actions.
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

# Set up logger for timer operations
logger = logging.getLogger(__name__)


class TimerLifecycleLogger:
    """Structured logging for timer lifecycle events."""

    @staticmethod
    def log_timer_scheduled(timer_id: int, delay: float) -> None:
        logger.info(
            f"Timer lifecycle: SCHEDULED - Timer {timer_id}, Delay {delay}s",
            extra={
                'event_type': 'timer_scheduled',
                'timer_id': timer_id,
                'delay': delay,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_completion(timer_id: int, completion_type: str, delay: float) -> None:
        """Log timer completion (natural expiry or cancellation)."""
        logger.info(
            f"Timer lifecycle: COMPLETED - Timer {timer_id}, Type {completion_type}, Delay {delay}s",
            extra={
                'event_type': 'timer_completed',
                'timer_id': timer_id,
                'completion_type': completion_type,
                'delay': delay,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_state_transition(timer_id: int, from_state: str, to_state: str, reason: str = None) -> None:
        """Log timer state transitions."""
        logger.debug(
            f"Timer lifecycle: STATE_TRANSITION - Timer {timer_id}, {from_state} -> {to_state}" +
            (f" ({reason})" if reason else ""),
            extra={
                'event_type': 'timer_state_transition',
                'timer_id': timer_id,
                'from_state': from_state,
                'to_state': to_state,
                'reason': reason,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_error(timer_id: int, error_type: str, error_message: str, operation: str) -> None:
        """Log timer-related errors with context."""
        logger.error(
            f"Timer lifecycle: ERROR - Timer {timer_id}, Operation {operation}, Type {error_type}: {error_message}",
            extra={
                'event_type': 'timer_error',
                'timer_id': timer_id,
                'error_type': error_type,
                'error_message': error_message,
                'operation': operation,
                'timestamp': time.time()
            }
        )


class RestartTimer:
    """
    Runs a callback once after a delay unless cancelled first.

    The timer is single-shot: ``start`` may only be called once.
    """

    _next_id = 0

    def __init__(self, delay: float, callback: Callable[["RestartTimer"], Awaitable[Any]]):
        """
        Initialize the timer.

        Args:
            delay: Seconds to wait before running the callback
            callback: Coroutine function receiving this timer when it fires
        """
        RestartTimer._next_id += 1
        self.timer_id = RestartTimer._next_id
        self.delay = delay
        self._callback = callback
        self._task: Optional[asyncio.Task] = None
        self._is_cancelled = False
        self._has_fired = False

    def start(self) -> None:
        """Schedule the callback on the running event loop."""
        if self._task is not None:
            raise RuntimeError(f"Timer {self.timer_id} already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        TimerLifecycleLogger.log_timer_scheduled(self.timer_id, self.delay)

    async def _run(self) -> None:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            TimerLifecycleLogger.log_timer_completion(self.timer_id, "cancelled", self.delay)
            raise

        self._has_fired = True
        TimerLifecycleLogger.log_timer_completion(self.timer_id, "natural_expiry", self.delay)
        try:
            await self._callback(self)
        except Exception as e:
            TimerLifecycleLogger.log_timer_error(
                self.timer_id,
                type(e).__name__,
                str(e),
                "callback"
            )

    def cancel(self) -> bool:
        """
        Cancel the timer if it has not fired yet.

        Returns:
            True if a pending callback was cancelled, False otherwise
        """
        if self._has_fired or self._is_cancelled:
            return False

        self._is_cancelled = True
        if self._task and not self._task.done():
            self._task.cancel()
            TimerLifecycleLogger.log_timer_state_transition(
                self.timer_id,
                "scheduled",
                "cancelled",
                "task cancelled"
            )
        else:
            TimerLifecycleLogger.log_timer_state_transition(
                self.timer_id,
                "idle",
                "cancelled",
                "no active task"
            )
        return True

    async def wait(self) -> None:
        """Wait until the timer has fired or been cancelled."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    @property
    def is_cancelled(self) -> bool:
        return self._is_cancelled

    @property
    def is_pending(self) -> bool:
        """True while the callback has neither run nor been cancelled."""
        return not self._has_fired and not self._is_cancelled
