"""
Game constants for the Snake engine.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Row 0 is the top of the board, so UP decreases y.
DIRECTION_OFFSETS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Game phases
IDLE = "IDLE"
RUNNING = "RUNNING"
GAME_OVER = "GAME_OVER"

# Game settings
GRID_SIZE = 20
FOOD_SCORE = 10
MIN_GRID_SIZE = 2
INITIAL_FOOD = (5, 5)
INITIAL_DIRECTION = RIGHT
MAX_FOOD_ATTEMPTS = 1000

# Timer periods, in seconds
TICK_INTERVAL = 0.1
CLOCK_INTERVAL = 1.0

# Leaderboard
TOP_SCORES_LIMIT = 5
