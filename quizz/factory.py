"""
Builds a ready-to-run quiz session from configuration.
"""
import logging
import random
import time
from typing import Callable, Optional

from .config_manager import ConfigManager
from .data_manager import JsonPlayerStore, JsonQuestionSource
from .errors import ConfigurationError, LoadError
from .player_ledger import PlayerLedger
from .question_bank import QuestionBank
from .quiz_session import QuizSession
from .reveal_engine import RevealEngine
from .sink import OutboundSink

logger = logging.getLogger(__name__)


def build_session(
    config_manager: ConfigManager,
    sink: OutboundSink,
    rng: Optional[random.Random] = None,
    clock: Callable[[], float] = time.monotonic,
) -> QuizSession:
    """
    Load questions and players and wire up a quiz session.

    Args:
        config_manager: Source of file paths and settings
        sink: Destination for the session's messages
        rng: Random source shared by question draws and hint reveals
        clock: Monotonic time source

    Returns:
        The configured QuizSession, idle

    Raises:
        ConfigurationError: If the question or player data cannot be loaded
    """
    rng = rng or random.Random()
    question_source = JsonQuestionSource(config_manager.get_questions_file())
    player_store = JsonPlayerStore(config_manager.get_players_file())

    bank = QuestionBank(rng=rng)
    try:
        bank.load(question_source)
        ledger = PlayerLedger(player_store.load())
    except LoadError as e:
        logger.critical(f"Cannot start the quiz: {e}", extra={'event_type': 'startup_load_failed'})
        raise ConfigurationError(f"Cannot start the quiz: {e}") from e

    if bank.is_empty():
        logger.warning("Question bank is empty, start will report that no questions are available")

    return QuizSession(
        bank=bank,
        ledger=ledger,
        sink=sink,
        store=player_store,
        settings=config_manager.get_quiz_settings(),
        reveal_engine=RevealEngine(rng),
        clock=clock,
        command_prefix=config_manager.get_command_prefix(),
    )
