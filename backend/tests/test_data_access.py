"""
Tests for data_access layer.

These tests mock the database connection to verify the logic
without requiring an actual database.
"""

import pytest
import sys
import os
from unittest.mock import patch, MagicMock
from datetime import datetime, timezone

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access.repositories import ScoreRepository, InMemoryScoreRepository
from data_access.api_queries import create_score_repository


def make_connection(mock_cursor):
    mock_conn = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    return mock_conn


class TestScoreRepository:
    """Tests for the PostgreSQL score repository (mocked connection)."""

    @patch('data_access.repositories.base.get_connection')
    def test_insert_score_commits_and_returns_id(self, mock_get_conn):
        mock_cursor = MagicMock()
        mock_cursor.fetchone.return_value = {'id': 42}
        mock_conn = make_connection(mock_cursor)
        mock_get_conn.return_value = mock_conn

        record_id = ScoreRepository().insert_score(score=50, duration=12, date="2026-10-19")

        assert record_id == 42
        query, params = mock_cursor.execute.call_args[0]
        assert 'INSERT INTO scores' in query
        assert params[:3] == (50, 12, "2026-10-19")
        assert isinstance(params[3], datetime)
        assert params[3].tzinfo is not None
        mock_conn.commit.assert_called_once()
        mock_conn.close.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_insert_score_rolls_back_on_error(self, mock_get_conn):
        mock_cursor = MagicMock()
        mock_cursor.execute.side_effect = RuntimeError("insert failed")
        mock_conn = make_connection(mock_cursor)
        mock_get_conn.return_value = mock_conn

        with pytest.raises(RuntimeError):
            ScoreRepository().insert_score(score=1, duration=1)

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_conn.close.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_get_top_scores_orders_and_limits(self, mock_get_conn):
        created = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = [
            {'id': 3, 'score': 50, 'duration': 30, 'date': '2026-10-19', 'created_at': created},
            {'id': 1, 'score': 30, 'duration': 20, 'date': None, 'created_at': created},
        ]
        mock_conn = make_connection(mock_cursor)
        mock_get_conn.return_value = mock_conn

        result = ScoreRepository().get_top_scores(limit=5)

        query, params = mock_cursor.execute.call_args[0]
        assert 'ORDER BY score DESC, id ASC' in query
        assert params == (5,)
        assert [r['score'] for r in result] == [50, 30]
        assert result[0]['created_at'] == created.isoformat()
        mock_conn.commit.assert_not_called()
        mock_conn.close.assert_called_once()

    @patch('data_access.repositories.base.get_connection')
    def test_get_top_scores_empty_table(self, mock_get_conn):
        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = []
        mock_get_conn.return_value = make_connection(mock_cursor)

        assert ScoreRepository().get_top_scores() == []

    def test_connection_factory_is_used(self):
        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = []
        mock_conn = make_connection(mock_cursor)
        factory = MagicMock(return_value=mock_conn)

        ScoreRepository(connection_factory=factory).get_top_scores()

        factory.assert_called_once_with()
        mock_conn.close.assert_called_once()


class TestInMemoryScoreRepository:

    def test_top_five_descending(self):
        repo = InMemoryScoreRepository()
        for score in [30, 10, 50, 20, 40, 5]:
            repo.insert_score(score=score, duration=1)

        assert [r['score'] for r in repo.get_top_scores(5)] == [50, 40, 30, 20, 10]

    def test_single_zero_score(self):
        repo = InMemoryScoreRepository()
        repo.insert_score(score=0, duration=0)

        result = repo.get_top_scores(5)

        assert len(result) == 1
        assert result[0]['score'] == 0
        assert result[0]['duration'] == 0
        assert result[0]['created_at']

    def test_empty_store(self):
        assert InMemoryScoreRepository().get_top_scores() == []

    def test_ties_keep_insertion_order(self):
        repo = InMemoryScoreRepository()
        first = repo.insert_score(score=10, duration=5)
        second = repo.insert_score(score=10, duration=7)

        assert [r['id'] for r in repo.get_top_scores()] == [first, second]

    def test_duplicates_are_kept(self):
        repo = InMemoryScoreRepository()
        repo.insert_score(score=10, duration=5, date="2026-10-19")
        repo.insert_score(score=10, duration=5, date="2026-10-19")

        assert len(repo.get_top_scores()) == 2

    @pytest.mark.parametrize("bad", [None, "abc", True, 1.5])
    def test_non_integer_values_rejected(self, bad):
        repo = InMemoryScoreRepository()

        with pytest.raises(TypeError):
            repo.insert_score(score=bad, duration=1)
        with pytest.raises(TypeError):
            repo.insert_score(score=10, duration=bad)

        assert repo.get_top_scores() == []

    def test_integral_float_stored_as_int(self):
        repo = InMemoryScoreRepository()
        repo.insert_score(score=10.0, duration=3)

        record = repo.get_top_scores()[0]
        assert record['score'] == 10
        assert isinstance(record['score'], int)

    def test_returned_records_are_copies(self):
        repo = InMemoryScoreRepository()
        repo.insert_score(score=10, duration=5)
        repo.get_top_scores()[0]['score'] = 999

        assert repo.get_top_scores()[0]['score'] == 10


class TestApiQueries:
    """Tests for api_queries.py functions."""

    def test_create_score_repository(self):
        assert isinstance(create_score_repository("postgres"), ScoreRepository)
        assert isinstance(create_score_repository("memory"), InMemoryScoreRepository)

    def test_create_score_repository_from_env(self, monkeypatch):
        monkeypatch.setenv("SCORE_STORE", "Memory")
        assert isinstance(create_score_repository(), InMemoryScoreRepository)

    def test_create_score_repository_unknown(self):
        with pytest.raises(ValueError):
            create_score_repository("redis")

    def test_record_then_read_through_module_functions(self):
        from data_access import api_queries

        with patch.object(api_queries, '_score_repo', InMemoryScoreRepository()):
            api_queries.record_score(score=0, duration=0)
            result = api_queries.get_top_scores(5)

        assert [r['score'] for r in result] == [0]

    @patch('data_access.repositories.base.get_connection')
    def test_get_top_scores_uses_default_limit(self, mock_get_conn):
        from data_access import api_queries

        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = []
        mock_get_conn.return_value = make_connection(mock_cursor)

        with patch.object(api_queries, '_score_repo', ScoreRepository()):
            api_queries.get_top_scores()

        assert mock_cursor.execute.call_args[0][1] == (5,)
