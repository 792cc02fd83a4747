"""
GameState entity - a read-only snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        snake: list of (x, y) from head to tail
        food: (x, y) of the food, or None once the board is full
        direction: direction applied on the last tick
        score: points collected so far
        phase: IDLE, RUNNING or GAME_OVER
        elapsed: whole seconds since the run started
        grid_size: side of the square board
        death_reason: 'wall', 'self' or 'board_full' once the game is over
    """

    def __init__(
        self,
        snake: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        direction: str,
        score: int,
        phase: str,
        elapsed: int,
        grid_size: int,
        death_reason: Optional[str] = None
    ):
        self.snake = snake
        self.food = food
        self.direction = direction
        self.score = score
        self.phase = phase
        self.elapsed = elapsed
        self.grid_size = grid_size
        self.death_reason = death_reason

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        * = food
        H = snake head
        o = snake body
        Row 0 is printed first (top of the screen).
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = '*'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'o'

        return "\n".join(' '.join(row) for row in board)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "snake": [list(p) for p in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction,
            "score": self.score,
            "phase": self.phase,
            "elapsed": self.elapsed,
            "grid_size": self.grid_size,
            "death_reason": self.death_reason,
        }

    def __repr__(self):
        return (
            f"<GameState phase={self.phase}, score={self.score}, "
            f"length={len(self.snake)}, food={self.food}>"
        )
