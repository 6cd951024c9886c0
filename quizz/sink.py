"""
Destinations for user-visible text.
"""
import logging
from abc import ABC, abstractmethod
from typing import List


class OutboundSink(ABC):
    """
    Receives every line the quiz session wants to show.

    ``send`` is called synchronously, once per line, in emission order.
    """

    @abstractmethod
    def send(self, text: str) -> None:
        ...


class MemorySink(OutboundSink):
    """Collects lines in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def send(self, text: str) -> None:
        self.lines.append(text)

    def clear(self) -> None:
        self.lines.clear()


class LoggingSink(OutboundSink):
    """Writes lines to a logger, for running without a chat transport."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def send(self, text: str) -> None:
        self.logger.info(text, extra={'event_type': 'outbound_message'})
