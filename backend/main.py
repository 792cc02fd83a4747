import argparse
import logging
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from domain.constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_OFFSETS,
    IDLE, RUNNING, GAME_OVER,
    GRID_SIZE, MIN_GRID_SIZE, FOOD_SCORE, INITIAL_FOOD, INITIAL_DIRECTION,
    MAX_FOOD_ATTEMPTS, TICK_INTERVAL, CLOCK_INTERVAL,
)
from domain.game_state import GameState
from domain.score import ScoreRecord
from domain.snake import Snake
from services.scheduler import ScheduleTimer

logger = logging.getLogger(__name__)

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'IDLE', 'RUNNING', 'GAME_OVER',
    'SnakeGame', 'GameSession', 'main',
]


class SnakeGame:
    """
    Manages:
      - Board (square grid)
      - The snake and its direction
      - Food
      - Score and elapsed time
      - Phase (IDLE -> RUNNING -> GAME_OVER -> IDLE via reset)

    The engine never reads the wall clock or global state directly: time
    comes from ``clock`` and randomness from ``rng`` so runs are reproducible.
    """
    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        clock: Callable[[], float] = time.monotonic,
        score_sink: Optional[Callable[[ScoreRecord], None]] = None,
        rng: Optional[random.Random] = None,
        game_id: str = None
    ):
        if grid_size < MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}")
        self.grid_size = grid_size
        self.clock = clock
        self.score_sink = score_sink
        self.rng = rng if rng is not None else random.Random()
        self.game_id = game_id if game_id is not None else str(uuid.uuid4())

        self._restore_initial_state()
        self.food: Optional[Tuple[int, int]] = INITIAL_FOOD
        if not self.in_bounds(INITIAL_FOOD) or self.snake.occupies(INITIAL_FOOD):
            self.food = self.generate_food()

    def _restore_initial_state(self):
        self.snake = Snake([self.start_cell])
        self.direction = INITIAL_DIRECTION
        self.pending_direction = INITIAL_DIRECTION
        self.score = 0
        self.phase = IDLE
        self.start_time: Optional[float] = None
        self.final_elapsed: Optional[int] = None
        self.death_reason: Optional[str] = None
        self.last_record: Optional[ScoreRecord] = None

    @property
    def start_cell(self) -> Tuple[int, int]:
        """Centre of the board; (10, 10) on the standard 20x20 grid."""
        centre = self.grid_size // 2
        return (centre, centre)

    @property
    def started(self) -> bool:
        return self.phase != IDLE

    @property
    def game_over(self) -> bool:
        return self.phase == GAME_OVER

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def start(self):
        """Enter RUNNING and start the elapsed-time clock."""
        if self.phase != IDLE:
            return
        self.phase = RUNNING
        self.start_time = self.clock()
        logger.info("Game %s started", self.game_id)

    def set_direction(self, requested: str) -> bool:
        """
        Queue a direction for the next tick.

        A direct reversal is refused while the snake is longer than one
        segment. The first accepted direction starts the game.

        Returns:
            True if the direction was accepted
        """
        if requested not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {requested!r}")

        if self.phase == GAME_OVER:
            return False

        if len(self.snake) > 1 and requested == OPPOSITES[self.direction]:
            return False

        self.pending_direction = requested
        if self.phase == IDLE:
            self.start()
        return True

    def tick(self) -> bool:
        """
        Advance the game by one step.

        Returns:
            True if the snake moved, False if the game is not running or
            the move ended the game.
        """
        if self.phase != RUNNING:
            return False

        self.direction = self.pending_direction
        dx, dy = DIRECTION_OFFSETS[self.direction]
        hx, hy = self.snake.head
        new_head = (hx + dx, hy + dy)

        if not self.in_bounds(new_head):
            self.end_game("wall")
            return False

        # The tail has not moved yet, so stepping onto it is a collision too
        if self.snake.occupies(new_head):
            self.end_game("self")
            return False

        self.snake.positions.appendleft(new_head)

        if new_head == self.food:
            self.score += FOOD_SCORE
            self.food = self.generate_food()
            if self.food is None:
                self.end_game("board_full")
                return False
        else:
            self.snake.positions.pop()

        return True

    def _free_cells(self) -> List[Tuple[int, int]]:
        return [
            (x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if not self.snake.occupies((x, y))
        ]

    def generate_food(self) -> Optional[Tuple[int, int]]:
        """
        Return a random cell not occupied by the snake, or None if the
        snake fills the board.
        """
        for _ in range(MAX_FOOD_ATTEMPTS):
            cell = (self.rng.randrange(self.grid_size), self.rng.randrange(self.grid_size))
            if not self.snake.occupies(cell):
                return cell

        free = self._free_cells()
        if not free:
            return None
        return self.rng.choice(free)

    def elapsed_time(self) -> int:
        """Whole seconds since the game started, frozen once it is over."""
        if self.final_elapsed is not None:
            return self.final_elapsed
        if self.start_time is None:
            return 0
        return max(0, int(self.clock() - self.start_time))

    def end_game(self, reason: str):
        if self.phase == GAME_OVER:
            return
        self.final_elapsed = self.elapsed_time()
        self.phase = GAME_OVER
        self.death_reason = reason
        logger.info(
            "Game %s over (%s): score=%s duration=%ss",
            self.game_id, reason, self.score, self.final_elapsed
        )

        self.last_record = ScoreRecord(
            score=self.score,
            duration=self.final_elapsed,
            created_at=datetime.now(timezone.utc)
        )
        if self.score_sink is not None:
            try:
                self.score_sink(self.last_record)
            except Exception:
                # Persistence problems never affect the finished game
                logger.exception("Failed to hand off score for game %s", self.game_id)

    def reset(self):
        """Return to the idle starting position with a new food cell."""
        self._restore_initial_state()
        self.food = self.generate_food()

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            snake=list(self.snake.positions),
            food=self.food,
            direction=self.direction,
            score=self.score,
            phase=self.phase,
            elapsed=self.elapsed_time(),
            grid_size=self.grid_size,
            death_reason=self.death_reason
        )


class GameSession:
    """
    Drives one SnakeGame from a timer.

    Two periodic jobs run while the game is RUNNING: the movement tick and
    the elapsed-time display refresh. Both are cancelled on game over,
    reset and close.
    """
    def __init__(
        self,
        game: Optional[SnakeGame] = None,
        timer=None,
        on_change: Optional[Callable[[GameState], None]] = None,
        tick_interval: float = TICK_INTERVAL,
        clock_interval: float = CLOCK_INTERVAL
    ):
        self.timer = timer if timer is not None else ScheduleTimer()
        self.game = game if game is not None else SnakeGame(clock=self.timer.now)
        self.on_change = on_change
        self.tick_interval = tick_interval
        self.clock_interval = clock_interval
        self.displayed_elapsed = 0
        self._timers_active = False

    @property
    def tick_tag(self) -> str:
        return f"{self.game.game_id}:tick"

    @property
    def clock_tag(self) -> str:
        return f"{self.game.game_id}:clock"

    @property
    def state(self) -> GameState:
        return self.game.get_current_state()

    def handle_direction(self, direction: str) -> bool:
        was_idle = not self.game.started
        accepted = self.game.set_direction(direction)
        if was_idle and self.game.phase == RUNNING:
            self._start_timers()
        return accepted

    def _start_timers(self):
        self.timer.every(self.tick_interval, self._on_tick, self.tick_tag)
        self.timer.every(self.clock_interval, self._on_clock, self.clock_tag)
        self._timers_active = True

    def _stop_timers(self):
        self.timer.cancel(self.tick_tag)
        self.timer.cancel(self.clock_tag)
        self._timers_active = False

    def _on_tick(self):
        if not self._timers_active:
            return
        self.game.tick()
        if self.game.phase == GAME_OVER:
            self.displayed_elapsed = self.game.elapsed_time()
            self._stop_timers()
        self._notify()

    def _on_clock(self):
        if not self._timers_active:
            return
        self.displayed_elapsed = self.game.elapsed_time()
        self._notify()

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.state)

    def reset(self):
        self._stop_timers()
        self.game.reset()
        self.displayed_elapsed = 0
        self._notify()

    def close(self):
        self._stop_timers()


def main():
    parser = argparse.ArgumentParser(description="Play Snake in the terminal.")
    parser.add_argument("--api-url", type=str, default=None,
                        help="Leaderboard API root (default: SCORE_API_URL or http://localhost:3000)")
    parser.add_argument("--offline", action="store_true",
                        help="Do not submit scores or load the leaderboard")
    parser.add_argument("--grid-size", type=int, default=GRID_SIZE,
                        help=f"Side of the square board (at least {MIN_GRID_SIZE})")
    args = parser.parse_args()
    if args.grid_size < MIN_GRID_SIZE:
        parser.error(f"--grid-size must be at least {MIN_GRID_SIZE}")

    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")

    import curses
    from services.score_client import ScoreClient
    from services.terminal_ui import run_terminal_game

    client = None if args.offline else ScoreClient(base_url=args.api_url)
    timer = ScheduleTimer()
    game = SnakeGame(
        grid_size=args.grid_size,
        clock=timer.now,
        score_sink=client.submit if client is not None else None
    )
    session = GameSession(game=game, timer=timer)

    try:
        curses.wrapper(run_terminal_game, session, client)
    finally:
        session.close()
        if client is not None:
            client.close()

    record = session.game.last_record
    if record is not None:
        print(f"Final score: {record.score} ({record.duration}s)")
    else:
        print("No game finished.")


if __name__ == "__main__":
    main()
