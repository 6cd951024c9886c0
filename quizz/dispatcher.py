"""
Maps chat lines to quiz session commands.
"""
import logging
from typing import Awaitable, Callable, Dict

from .quiz_session import QuizSession


class CommandDispatcher:
    """
    Routes a chat line to the matching session command.

    A line equal to a prefixed command name (``!start``, ``!hint``, ...) runs
    that command; every other line is an answer attempt by its author.
    """

    COMMANDS = ("start", "stop", "repeat", "hint", "next", "help", "ladder")

    def __init__(self, session: QuizSession, prefix: str = "!"):
        self.logger = logging.getLogger(__name__)
        self.session = session
        self.prefix = prefix
        self._handlers: Dict[str, Callable[[], Awaitable[None]]] = {
            f"{prefix}{name}": getattr(session, name) for name in self.COMMANDS
        }

    def is_command(self, text: str) -> bool:
        return text.strip().lower() in self._handlers

    async def dispatch(self, author: str, text: str) -> None:
        """
        Handle one chat line.

        Args:
            author: Name of the player who wrote the line
            text: Line content
        """
        handler = self._handlers.get(text.strip().lower())
        if handler is not None:
            self.logger.debug(
                f"Command {text.strip()} from {author}",
                extra={'event_type': 'command_received', 'author': author, 'command': text.strip()}
            )
            await handler()
            return
        await self.session.submit_answer(author, text)
