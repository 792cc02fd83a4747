"""
Score query functions backing the Flask API endpoints.

These functions delegate to the configured score repository. The store is
chosen with the SCORE_STORE environment variable:
- "postgres" (default): PostgreSQL scores table
- "memory": process-local store, lost on restart
"""

import os
import logging
from typing import List, Dict, Any, Optional

from dotenv import load_dotenv

from domain.constants import TOP_SCORES_LIMIT
from .repositories import ScoreRepository, InMemoryScoreRepository

load_dotenv()
logger = logging.getLogger(__name__)


def create_score_repository(store: Optional[str] = None):
    """
    Build the score repository named by ``store`` (or SCORE_STORE).

    Raises:
        ValueError: If the store name is unknown
    """
    store = (store or os.getenv("SCORE_STORE", "postgres")).strip().lower()
    if store == "postgres":
        return ScoreRepository()
    if store == "memory":
        logger.info("Using in-memory score store; scores will not survive a restart.")
        return InMemoryScoreRepository()
    raise ValueError(f"Unknown SCORE_STORE '{store}'. Use 'postgres' or 'memory'.")


# Repository instance
_score_repo = create_score_repository()


def record_score(
    score: int,
    duration: int,
    date: Optional[str] = None
) -> int:
    """
    Append a finished game's score to the leaderboard.

    Values are stored verbatim; duplicates are allowed.

    Args:
        score: Final score
        duration: Game duration in seconds
        date: Client display date, stored as-is

    Returns:
        Identifier of the stored record
    """
    return _score_repo.insert_score(score=score, duration=duration, date=date)


def get_top_scores(limit: int = TOP_SCORES_LIMIT) -> List[Dict[str, Any]]:
    """
    Retrieve the leaderboard, highest score first.

    Args:
        limit: Maximum number of records to return

    Returns:
        List of score dictionaries, empty when nothing has been recorded
    """
    return _score_repo.get_top_scores(limit=limit)
