"""
Exceptions raised by the quiz engine and its data collaborators.
"""


class QuizzError(Exception):
    """Base exception for quiz engine errors."""
    pass


class LoadError(QuizzError):
    """Raised when a question or player source cannot be read or parsed."""
    pass


class SaveError(QuizzError):
    """Raised when the player ledger cannot be written."""
    pass


class ConfigurationError(QuizzError):
    """Raised when the engine cannot be initialized from its configuration."""
    pass
