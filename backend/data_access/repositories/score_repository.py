"""
Score repositories for leaderboard storage.

Two interchangeable stores are provided:
- ScoreRepository persists to the PostgreSQL ``scores`` table
- InMemoryScoreRepository keeps records in process memory (local play, tests)
"""

import threading
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from .base import BaseRepository


class ScoreRepository(BaseRepository):
    """
    Repository for the scores table.

    Records are append-only: there is no update or delete operation.
    """

    def insert_score(
        self,
        score: int,
        duration: int,
        date: Optional[str] = None
    ) -> int:
        """
        Append a score record.

        Args:
            score: Final score reported by the client
            duration: Game duration in seconds reported by the client
            date: Client-side display date, stored as-is

        Returns:
            The id of the new row
        """
        created_at = datetime.now(timezone.utc)
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO scores (score, duration, date, created_at)
                VALUES (%s, %s, %s, %s)
                RETURNING id
            """, (score, duration, date, created_at))
            row = cursor.fetchone()
            return row['id']

    def get_top_scores(self, limit: int = 5) -> List[Dict[str, Any]]:
        """
        Get the best scores, highest first.

        Ties keep insertion order (lowest id first).

        Args:
            limit: Maximum number of records to return

        Returns:
            List of score dictionaries (empty when no scores exist)
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute("""
                SELECT id, score, duration, date, created_at
                FROM scores
                ORDER BY score DESC, id ASC
                LIMIT %s
            """, (limit,))
            return [self._row_to_dict(row) for row in cursor.fetchall()]

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        created_at = row['created_at']
        return {
            'id': row['id'],
            'score': row['score'],
            'duration': row['duration'],
            'date': row['date'],
            'created_at': created_at.isoformat() if isinstance(created_at, datetime) else created_at,
        }


def _require_integer(field: str, value: Any) -> int:
    """Accept ints and integral floats; reject None, bools and anything else."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TypeError(f"{field} must be an integer, got {value!r}")


class InMemoryScoreRepository:
    """
    Process-local score store with the same interface as ScoreRepository.

    Values are checked like the INTEGER NOT NULL columns of the scores
    table, so a bad submission fails on insert instead of on later reads.
    """

    def __init__(self):
        self._records: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def insert_score(
        self,
        score: int,
        duration: int,
        date: Optional[str] = None
    ) -> int:
        score = _require_integer("score", score)
        duration = _require_integer("duration", duration)
        with self._lock:
            record_id = len(self._records) + 1
            self._records.append({
                'id': record_id,
                'score': score,
                'duration': duration,
                'date': date,
                'created_at': datetime.now(timezone.utc).isoformat(),
            })
            return record_id

    def get_top_scores(self, limit: int = 5) -> List[Dict[str, Any]]:
        with self._lock:
            # sorted() is stable, so equal scores stay in insertion order
            ranked = sorted(self._records, key=lambda r: r['score'], reverse=True)
            return [dict(r) for r in ranked[:limit]]
