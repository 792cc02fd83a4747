"""
Domain entities for the Snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, terminal).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_OFFSETS,
    IDLE, RUNNING, GAME_OVER,
    GRID_SIZE, FOOD_SCORE, TICK_INTERVAL, CLOCK_INTERVAL, TOP_SCORES_LIMIT,
)
from .snake import Snake
from .game_state import GameState
from .score import ScoreRecord

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'DIRECTION_OFFSETS',
    'IDLE', 'RUNNING', 'GAME_OVER',
    'GRID_SIZE', 'FOOD_SCORE', 'TICK_INTERVAL', 'CLOCK_INTERVAL', 'TOP_SCORES_LIMIT',
    'Snake',
    'GameState',
    'ScoreRecord',
]
