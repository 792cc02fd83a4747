"""
Data access layer for the Snake leaderboard.

This module provides functions for recording finished games and reading
back the top scores.
"""

from .api_queries import record_score, get_top_scores, create_score_repository

__all__ = [
    'record_score',
    'get_top_scores',
    'create_score_repository',
]
