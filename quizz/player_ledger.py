"""
Player score ledger.
"""
import logging
from typing import Dict, List, Mapping, Optional

from .models import Player


class PlayerLedger:
    """
    Mapping from player name to cumulative score.

    Names are matched exactly (case-sensitive). Insertion order is kept and
    is the tie-break order of the ladder.
    """

    def __init__(self, scores: Optional[Mapping[str, int]] = None):
        self.logger = logging.getLogger(__name__)
        self._players: Dict[str, Player] = {}
        if scores:
            self.replace(scores)

    def replace(self, scores: Mapping[str, int]) -> None:
        """Replace every entry with the given name -> score mapping."""
        self._players = {name: Player(name=name, score=score) for name, score in scores.items()}

    def upsert(self, name: str, points: int) -> Player:
        """
        Add points to a player, creating the entry if needed.

        Args:
            name: Exact player name
            points: Points to add

        Returns:
            The updated player
        """
        player = self._players.get(name)
        if player is None:
            player = Player(name=name, score=points)
            self._players[name] = player
            self.logger.info(f"New player {name} with {points} points")
        else:
            player.score += points
            self.logger.info(f"Player {name} now has {player.score} points")
        return player

    def get(self, name: str) -> Optional[Player]:
        return self._players.get(name)

    def top(self, count: int = 5) -> List[Player]:
        """
        Best players by score, highest first.

        The ranking is a sorted copy; equal scores keep their ledger order.
        """
        if count < 1:
            return []
        ranked = sorted(self._players.values(), key=lambda player: player.score, reverse=True)
        return ranked[:count]

    def snapshot(self) -> Dict[str, int]:
        """Copy of the ledger as a name -> score mapping."""
        return {name: player.score for name, player in self._players.items()}

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, name: str) -> bool:
        return name in self._players
