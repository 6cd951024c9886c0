"""
Configuration manager for quiz settings and data file locations.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .models import QuizSettings


class ConfigManager:
    """Manages quiz timing settings and data file paths."""

    # Default configuration values
    DEFAULT_HINT_COOLDOWN = 10
    DEFAULT_NEXT_COOLDOWN = 15
    DEFAULT_RESTART_DELAY = 15
    DEFAULT_CANCEL_RESTART_ON_TRANSITION = True
    DEFAULT_QUESTIONS_FILE = "resources/questions.json"
    DEFAULT_PLAYERS_FILE = "resources/players.json"
    DEFAULT_COMMAND_PREFIX = "!"

    # Validation limits
    MIN_DURATION = 0
    MAX_DURATION = 3600  # 1 hour

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._apply_defaults()

    def _apply_defaults(self) -> None:
        self._durations = {
            'hint_cooldown': self.DEFAULT_HINT_COOLDOWN,
            'next_cooldown': self.DEFAULT_NEXT_COOLDOWN,
            'restart_delay': self.DEFAULT_RESTART_DELAY,
        }
        self._cancel_restart_on_transition = self.DEFAULT_CANCEL_RESTART_ON_TRANSITION
        self._questions_file = self.DEFAULT_QUESTIONS_FILE
        self._players_file = self.DEFAULT_PLAYERS_FILE
        self._command_prefix = self.DEFAULT_COMMAND_PREFIX

    def get_quiz_settings(self) -> QuizSettings:
        """
        Get current quiz settings.

        Returns:
            QuizSettings object with current configuration
        """
        return QuizSettings(
            hint_cooldown=self._durations['hint_cooldown'],
            next_cooldown=self._durations['next_cooldown'],
            restart_delay=self._durations['restart_delay'],
            cancel_restart_on_transition=self._cancel_restart_on_transition
        )

    def _set_duration(self, name: str, seconds: Any) -> Dict[str, Any]:
        label = name.replace('_', ' ')
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            error_msg = f"{label.capitalize()} must be a number, got {type(seconds).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid input: Expected a number of seconds, got {type(seconds).__name__}"
            }

        if seconds < self.MIN_DURATION or seconds > self.MAX_DURATION:
            error_msg = f"{label.capitalize()} must be between {self.MIN_DURATION} and {self.MAX_DURATION} seconds"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Out of range: {label} must be between {self.MIN_DURATION} and {self.MAX_DURATION} seconds"
            }

        self._durations[name] = seconds
        self.logger.info(f"{label.capitalize()} set to {seconds} seconds")
        return {
            'success': True,
            'message': f"{label.capitalize()} set to {seconds} seconds",
            'user_message': f"{label.capitalize()} set to {seconds} seconds"
        }

    def set_hint_cooldown(self, seconds: float) -> Dict[str, Any]:
        """Set the minimum time between two hints."""
        return self._set_duration('hint_cooldown', seconds)

    def set_next_cooldown(self, seconds: float) -> Dict[str, Any]:
        """Set how long a question must be up before it can be skipped."""
        return self._set_duration('next_cooldown', seconds)

    def set_restart_delay(self, seconds: float) -> Dict[str, Any]:
        """Set the pause before the next question is asked automatically."""
        return self._set_duration('restart_delay', seconds)

    def set_cancel_restart_on_transition(self, enabled: Any) -> Dict[str, Any]:
        """
        Set whether an explicit stop or start cancels a pending automatic restart.

        Args:
            enabled: True to cancel, False to let the pending restart fire

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(enabled, bool):
            error_msg = f"Cancel restart on transition must be a boolean, got {type(enabled).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid input: Expected true/false, got {type(enabled).__name__}"
            }

        self._cancel_restart_on_transition = enabled
        return {
            'success': True,
            'message': f"Cancel restart on transition set to {enabled}",
            'user_message': f"Pending restarts {'are' if enabled else 'are not'} cancelled by stop/start"
        }

    def _set_path(self, attribute: str, label: str, path: Any) -> Dict[str, Any]:
        if not isinstance(path, str) or not path.strip():
            error_msg = f"{label} must be a non-empty path string"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid {label.lower()}: {path!r}"
            }

        setattr(self, attribute, path)
        self.logger.info(f"{label} set to {path}")
        return {
            'success': True,
            'message': f"{label} set to {path}",
            'user_message': f"{label} set to {path}"
        }

    def set_questions_file(self, path: str) -> Dict[str, Any]:
        return self._set_path('_questions_file', "Questions file", path)

    def set_players_file(self, path: str) -> Dict[str, Any]:
        return self._set_path('_players_file', "Players file", path)

    def set_command_prefix(self, prefix: Any) -> Dict[str, Any]:
        if not isinstance(prefix, str) or not prefix or prefix.strip() != prefix:
            error_msg = f"Command prefix must be a non-empty string without spaces, got {prefix!r}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid command prefix: {prefix!r}"
            }

        self._command_prefix = prefix
        return {
            'success': True,
            'message': f"Command prefix set to {prefix}",
            'user_message': f"Command prefix set to {prefix}"
        }

    def get_questions_file(self) -> Path:
        return Path(self._questions_file)

    def get_players_file(self) -> Path:
        return Path(self._players_file)

    def get_command_prefix(self) -> str:
        return self._command_prefix

    def apply_config(self, config: Mapping[str, Any]) -> List[str]:
        """
        Apply the ``quiz`` and ``bot`` sections of a configuration mapping.

        Invalid values are logged and skipped; the defaults stay in place.

        Args:
            config: Parsed configuration file

        Returns:
            Error messages for every rejected value
        """
        quiz_config = config.get('quiz', {}) or {}
        bot_config = config.get('bot', {}) or {}

        setters = [
            (quiz_config, 'hint_cooldown', self.set_hint_cooldown),
            (quiz_config, 'next_cooldown', self.set_next_cooldown),
            (quiz_config, 'restart_delay', self.set_restart_delay),
            (quiz_config, 'cancel_restart_on_transition', self.set_cancel_restart_on_transition),
            (quiz_config, 'questions_file', self.set_questions_file),
            (quiz_config, 'players_file', self.set_players_file),
            (bot_config, 'command_prefix', self.set_command_prefix),
        ]

        errors = []
        for section, key, setter in setters:
            if key not in section:
                continue
            result = setter(section[key])
            if not result['success']:
                errors.append(result['error'])

        if errors:
            self.logger.warning(f"Configuration applied with {len(errors)} rejected values")
        else:
            self.logger.info("Configuration applied successfully")
        self.logger.info(self.get_settings_summary())
        return errors

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        return (
            f"Quiz Settings:\n"
            f"• Hint cooldown: {self._durations['hint_cooldown']} seconds\n"
            f"• Skip allowed after: {self._durations['next_cooldown']} seconds\n"
            f"• Next question after: {self._durations['restart_delay']} seconds\n"
            f"• Stop/start cancels pending restart: {self._cancel_restart_on_transition}\n"
            f"• Questions file: {self._questions_file}\n"
            f"• Players file: {self._players_file}"
        )
