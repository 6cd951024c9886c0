"""
JSON file collaborators for questions and players.
"""
import json
import logging
import os
import tempfile
import unicodedata
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .errors import LoadError, SaveError
from .models import Question

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB limit


def _read_json(file_path: Path) -> Any:
    """
    Read and parse a JSON file with size and access checks.

    Raises:
        LoadError: If the file is missing, unreadable, too large or not JSON
    """
    try:
        file_size = file_path.stat().st_size
        if file_size > MAX_FILE_SIZE:
            raise LoadError(
                f"{file_path} is too large ({file_size / 1024 / 1024:.1f}MB). "
                f"Maximum size is {MAX_FILE_SIZE / 1024 / 1024}MB"
            )
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise LoadError(f"File not found: {file_path}") from e
    except PermissionError as e:
        raise LoadError(f"Permission denied: Cannot read {file_path}") from e
    except OSError as e:
        raise LoadError(f"Failed to read {file_path}: {e}") from e


class JsonQuestionSource:
    """Loads questions from a JSON array of ``{"title", "answer"}`` objects."""

    def __init__(self, file_path):
        """
        Args:
            file_path: Path to the questions JSON file
        """
        self.file_path = Path(file_path)
        self.logger = logging.getLogger(__name__)

    def load(self) -> List[Question]:
        """
        Load and validate the question file.

        Returns:
            List of Question objects

        Raises:
            LoadError: If the file is unreadable or malformed
        """
        data = _read_json(self.file_path)
        self.validate_structure(data)
        questions = self._parse_questions(data)
        self.logger.info(f"Loaded {len(questions)} questions from {self.file_path}")
        return questions

    def validate_structure(self, data: Any) -> None:
        """
        Validate that JSON data has the question file structure.

        Expected structure:
        [
            {"title": str, "answer": str},
            ...
        ]

        Raises:
            LoadError: Describing the first problem found
        """
        if not isinstance(data, list):
            raise LoadError(f"{self.file_path}: question data must be a JSON array")

        for i, question_data in enumerate(data):
            if not isinstance(question_data, dict):
                raise LoadError(f"{self.file_path}: question {i} must be an object")

            for key in ("title", "answer"):
                if key not in question_data:
                    raise LoadError(f"{self.file_path}: question {i} missing '{key}' field")
                value = question_data[key]
                if not isinstance(value, str):
                    raise LoadError(f"{self.file_path}: question {i} '{key}' field must be a string")
                if not value.strip():
                    raise LoadError(f"{self.file_path}: question {i} '{key}' field cannot be empty")

    @staticmethod
    def _parse_questions(data: List[Dict[str, str]]) -> List[Question]:
        # Answers are composed and trimmed so reveal positions line up with the text
        return [
            Question(
                title=item["title"].strip(),
                answer=unicodedata.normalize('NFC', item["answer"]).strip()
            )
            for item in data
        ]


class JsonPlayerStore:
    """Reads and writes the player ledger as a JSON array of ``{"name", "score"}`` objects."""

    def __init__(self, file_path):
        """
        Args:
            file_path: Path to the players JSON file
        """
        self.file_path = Path(file_path)
        self.logger = logging.getLogger(__name__)

    def load(self) -> Dict[str, int]:
        """
        Load the ledger.

        A missing file is an empty ledger; it is created on the first save.

        Returns:
            Mapping of player name to score, in file order

        Raises:
            LoadError: If the file is unreadable or malformed
        """
        if not self.file_path.exists():
            self.logger.warning(f"Players file {self.file_path} not found, starting with an empty ledger")
            return {}

        data = _read_json(self.file_path)
        if not isinstance(data, list):
            raise LoadError(f"{self.file_path}: player data must be a JSON array")

        scores: Dict[str, int] = {}
        for i, player_data in enumerate(data):
            if not isinstance(player_data, dict):
                raise LoadError(f"{self.file_path}: player {i} must be an object")
            name = player_data.get("name")
            score = player_data.get("score")
            if not isinstance(name, str) or not name:
                raise LoadError(f"{self.file_path}: player {i} 'name' field must be a non-empty string")
            if isinstance(score, bool) or not isinstance(score, int) or score < 0:
                raise LoadError(f"{self.file_path}: player {i} 'score' field must be a non-negative integer")
            if name in scores:
                raise LoadError(f"{self.file_path}: duplicate player '{name}'")
            scores[name] = score

        self.logger.info(f"Loaded {len(scores)} players from {self.file_path}")
        return scores

    def save(self, scores: Mapping[str, int]) -> None:
        """
        Write the whole ledger atomically.

        Raises:
            SaveError: If the file cannot be written
        """
        data = [{"name": name, "score": score} for name, score in scores.items()]
        directory = self.file_path.parent
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.file_path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
            tmp_path = None
        except PermissionError as e:
            raise SaveError(f"Permission denied: Cannot write {self.file_path}") from e
        except OSError as e:
            raise SaveError(f"Failed to write {self.file_path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        self.logger.debug(f"Saved {len(data)} players to {self.file_path}")
