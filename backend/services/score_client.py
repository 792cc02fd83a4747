"""
HTTP client for the leaderboard API.

Used by the game front end. Every call degrades gracefully: a failed read
returns an empty leaderboard and a failed write is logged and dropped,
so the game itself never sees a persistence error.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from domain.score import ScoreRecord

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
REQUEST_TIMEOUT_SECONDS = 5


def _display_date(record: Dict[str, Any]) -> Optional[str]:
    """Date shown on the leaderboard: server createdAt, else the client date."""
    created_at = record.get("createdAt")
    if created_at:
        try:
            return datetime.fromisoformat(created_at).date().isoformat()
        except (TypeError, ValueError):
            pass
    return record.get("date")


class ScoreClient:
    """
    Talks to ``/api/scores``.

    Attributes:
        base_url: API root, e.g. http://localhost:3000
        high_scores: last leaderboard fetched (list of {score, date, duration})
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        executor: Optional[ThreadPoolExecutor] = None
    ):
        self.base_url = (base_url or os.getenv("SCORE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="score-submit")
        self.high_scores: List[Dict[str, Any]] = []

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}/api/scores"

    def get_high_scores(self) -> List[Dict[str, Any]]:
        """
        Fetch the leaderboard and cache it in ``high_scores``.

        Returns an empty list when the API cannot be reached or fails.
        """
        try:
            response = self.session.get(self.scores_url, timeout=self.timeout)
            response.raise_for_status()
            records = response.json()
        except requests.RequestException as e:
            logger.error("Error getting high scores: %s", e)
            return []

        try:
            self.high_scores = [
                {
                    "score": record.get("score"),
                    "date": _display_date(record),
                    "duration": record.get("duration"),
                }
                for record in records
            ]
        except (TypeError, AttributeError) as e:
            logger.error("Unexpected leaderboard payload: %s", e)
            return []
        return self.high_scores

    def save_score(self, record: ScoreRecord) -> bool:
        """Post one finished game. Returns False (and logs) on failure."""
        try:
            response = self.session.post(
                self.scores_url,
                json=record.to_payload(),
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Error saving score: %s", e)
            return False

        logger.info("Saved score %s (%ss)", record.score, record.duration)
        return True

    def _save_and_refresh(self, record: ScoreRecord) -> List[Dict[str, Any]]:
        self.save_score(record)
        return self.get_high_scores()

    def submit(self, record: ScoreRecord) -> Future:
        """
        Save a score in the background, then refresh the leaderboard.

        Returns immediately; the returned future resolves to the refreshed
        leaderboard.
        """
        return self._executor.submit(self._save_and_refresh, record)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.session.close()
