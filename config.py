import math

# Board configuration
BOARD_SIZE = 8

# Space states (using integers for internal representation)
EMPTY = 0
BLACK = 1   # Black moves first
WHITE = -1  # White is opponent

# Character representation for display
CHAR_MAP = {
    EMPTY: '.',
    BLACK: 'B',
    WHITE: 'W'
}

COLOR_NAMES = {
    EMPTY: 'Empty',
    BLACK: 'Black',
    WHITE: 'White'
}

# Starting position: (x, y) -> color
STARTING_SPACES = {
    (3, 3): WHITE,
    (3, 4): BLACK,
    (4, 3): BLACK,
    (4, 4): WHITE
}

# AI Configuration
DEFAULT_MINIMAX_DEPTH = 4
DEFAULT_CUSTOM_DEPTH = 3
DEFAULT_MCTS_ITERATIONS = 1000

# UCT exploration constant
EXPLORATION_PARAM = math.sqrt(2)

# Agent kinds accepted at startup
AGENT_KINDS = ("human", "minimax", "mcts", "custom")

# Positional weights, indexed [x][y]
BOARD_WEIGHTS = [
    [200, -70, 30, 25, 25, 30, -70, 200],
    [-70, -100, -10, -10, -10, -10, -100, -70],
    [30, -10, 2, 2, 2, 2, -10, 30],
    [25, -10, 2, 2, 2, 2, -10, 25],
    [25, -10, 2, 2, 2, 2, -10, 25],
    [30, -10, 2, 2, 2, 2, -10, 30],
    [-70, -100, -10, -10, -10, -10, -100, -70],
    [200, -70, 30, 25, 25, 30, -70, 200]
]

# Directions for move generation (8 directions)
DIRECTIONS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1)
]

LOG_FORMAT = '[%(asctime)s] %(name)s %(levelname)s: %(message)s'


class ConfigurationError(ValueError):
    """Raised for unknown agent kinds and non-positive search settings."""


def validate_positive(name, value):
    # bool is an int subclass; True is not a depth
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be greater than 0, got {value}")
    return value
