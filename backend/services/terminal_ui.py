"""
Terminal front end - renders the board with curses and maps keys to directions.

Arrow keys / WASD move the snake, R starts a new game after game over,
Q quits.
"""

import curses
import time
from typing import Any, Dict, List, Optional, Union

from domain.constants import UP, DOWN, LEFT, RIGHT, IDLE, GAME_OVER
from domain.game_state import GameState

POLL_INTERVAL_SECONDS = 0.01

KEY_BINDINGS = {
    curses.KEY_UP: UP, ord('w'): UP, ord('W'): UP,
    curses.KEY_DOWN: DOWN, ord('s'): DOWN, ord('S'): DOWN,
    curses.KEY_LEFT: LEFT, ord('a'): LEFT, ord('A'): LEFT,
    curses.KEY_RIGHT: RIGHT, ord('d'): RIGHT, ord('D'): RIGHT,
}

# Browser KeyboardEvent.key names, for front ends that forward DOM key events
KEY_NAMES = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
}

QUIT_KEYS = {ord('q'), ord('Q')}
RESET_KEYS = {ord('r'), ord('R')}


def direction_for_key(key: Union[int, str]) -> Optional[str]:
    """Map a curses key code or a key name to a direction (None if unbound)."""
    if isinstance(key, str):
        if key in KEY_NAMES:
            return KEY_NAMES[key]
        if len(key) == 1:
            return KEY_BINDINGS.get(ord(key))
        return None
    return KEY_BINDINGS.get(key)


def render_lines(
    state: GameState,
    elapsed: int,
    high_scores: List[Dict[str, Any]]
) -> List[str]:
    """Build the text frame: header, board, status line and leaderboard."""
    lines = [f"Score: {state.score}   Time: {elapsed}s", ""]
    lines.extend(state.print_board().split("\n"))
    lines.append("")

    if state.phase == IDLE:
        lines.append("Press an arrow key to start")
    elif state.phase == GAME_OVER:
        lines.append("Game over! Press R to play again, Q to quit")
    else:
        lines.append("Use the arrow keys to steer the snake")

    lines.append("")
    lines.append("High scores")
    if not high_scores:
        lines.append("  No scores yet")
    for rank, record in enumerate(high_scores, start=1):
        lines.append(
            f"  #{rank} {str(record.get('score', 0)):>5}  {record.get('date') or '':<10}  {record.get('duration', 0)}s"
        )
    return lines


def draw(stdscr, lines: List[str]):
    stdscr.erase()
    max_y, max_x = stdscr.getmaxyx()
    for row, text in enumerate(lines[:max_y]):
        try:
            stdscr.addstr(row, 0, text[:max_x - 1])
        except curses.error:
            # Writing the bottom-right cell raises even though it succeeds
            pass
    stdscr.refresh()


def run_terminal_game(stdscr, session, client=None):
    """
    Main loop for curses.wrapper.

    Input handling only queues directions; movement happens in the
    session's timer jobs, pumped here with run_pending().
    """
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.nodelay(True)
    stdscr.keypad(True)

    high_scores = client.get_high_scores() if client is not None else []

    while True:
        ch = stdscr.getch()
        if ch in QUIT_KEYS:
            break
        if ch in RESET_KEYS and session.game.phase == GAME_OVER:
            session.reset()
        else:
            direction = direction_for_key(ch)
            if direction is not None:
                session.handle_direction(direction)

        session.timer.run_pending()

        if client is not None:
            high_scores = client.high_scores

        draw(stdscr, render_lines(session.state, session.displayed_elapsed, high_scores))
        time.sleep(POLL_INTERVAL_SECONDS)
