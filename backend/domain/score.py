"""
ScoreRecord value object - the result of one finished run.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class ScoreRecord:
    """
    Immutable summary of a finished game.

    Attributes:
        score: points collected during the run
        duration: whole seconds between the first move and game over
        created_at: moment the game ended (UTC)
    """

    score: int
    duration: int
    created_at: datetime

    def to_payload(self) -> Dict[str, Any]:
        """Body for ``POST /api/scores``."""
        return {
            "score": self.score,
            "duration": self.duration,
            "date": self.created_at.date().isoformat(),
        }
