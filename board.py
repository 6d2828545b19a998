import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from config import BOARD_SIZE, EMPTY, CHAR_MAP, STARTING_SPACES

logger = logging.getLogger(__name__)


class InconsistentMoveError(RuntimeError):
    """Raised when a move map does not match the board it is applied to."""


@dataclass(frozen=True)
class BoardSpace:
    """
    A single cell of the board: coordinates plus the disc occupying it.

    Instances never change. Claiming a space swaps the board reference to
    the canonical instance for the new state (see get_board_space).
    """
    x: int
    y: int
    state: int = EMPTY

    @property
    def coords(self) -> Tuple[int, int]:
        return self.x, self.y

    def __repr__(self):
        return f"BoardSpace({self.x}, {self.y}, {CHAR_MAP[self.state]})"


# Shared instances keyed by (x, y, state)
_space_cache: Dict[Tuple[int, int, int], BoardSpace] = {}


def get_board_space(x, y, state=EMPTY) -> BoardSpace:
    #Return the shared BoardSpace for (x, y, state), creating it on first use.
    if not is_valid_position(x, y):
        raise ValueError(f"({x}, {y}) is outside the {BOARD_SIZE}x{BOARD_SIZE} board")
    key = (x, y, state)
    space = _space_cache.get(key)
    if space is None:
        space = BoardSpace(x, y, state)
        _space_cache[key] = space
    return space


def clear_space_cache():
    #Drop every shared BoardSpace instance (used to isolate tests).
    _space_cache.clear()


def space_cache_size() -> int:
    return len(_space_cache)


Board = List[List[BoardSpace]]


def is_valid_position(x, y) -> bool:
    #Check if position is within board bounds.
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def new_board(with_starting_spaces=False) -> Board:
    board = [[get_board_space(x, y, EMPTY) for y in range(BOARD_SIZE)]
             for x in range(BOARD_SIZE)]
    if with_starting_spaces:
        for (x, y), color in STARTING_SPACES.items():
            board[x][y] = get_board_space(x, y, color)
    return board


def copy_board(board: Board) -> Board:
    """
    Copy a board by value. Spaces are immutable and shared, so copying the
    grid of references is enough to isolate the copy from later changes.
    """
    return [list(column) for column in board]


def count_discs(board: Board) -> Dict[int, int]:
    #Count discs per state, read directly off the board.
    counts: Dict[int, int] = {}
    for column in board:
        for space in column:
            counts[space.state] = counts.get(space.state, 0) + 1
    return counts


def spaces_of(board: Board, color) -> List[BoardSpace]:
    return [space for column in board for space in column if space.state == color]


def board_to_str(board: Board) -> str:
    lines = ["  " + " ".join(str(y) for y in range(BOARD_SIZE))]
    for x in range(BOARD_SIZE):
        lines.append(str(x) + " " + " ".join(CHAR_MAP[board[x][y].state] for y in range(BOARD_SIZE)))
    return "\n".join(lines)


# ----------------------------------------------------------------------
# Board mutation
# ----------------------------------------------------------------------
def _direction(origin: BoardSpace, destination: BoardSpace) -> Tuple[int, int]:
    dx = destination.x - origin.x
    dy = destination.y - origin.y
    if (dx, dy) == (0, 0) or (dx != 0 and dy != 0 and abs(dx) != abs(dy)):
        raise InconsistentMoveError(
            f"{origin!r} and {destination!r} are not on a straight line")
    return (dx > 0) - (dx < 0), (dy > 0) - (dy < 0)


def take_space(board: Board, acting_player, opponent, x, y) -> bool:
    """
    Claim the space at (x, y) for acting_player.

    Returns False without touching anything if acting_player already owns
    the space, otherwise moves the space out of the opponent's set (if it
    was theirs) and into acting_player's.
    """
    space = board[x][y]
    if space.state == acting_player.color:
        logger.debug("Space (%d,%d) already belongs to %s, skipping", x, y, acting_player)
        return False

    if space.state == opponent.color:
        opponent.remove_owned_space(space)

    claimed = get_board_space(x, y, acting_player.color)
    board[x][y] = claimed
    acting_player.add_owned_space(claimed)
    return True


def _check_line(board: Board, origin: BoardSpace, destination: BoardSpace,
                acting_player, opponent) -> Tuple[int, int]:
    #Raise unless every cell strictly between origin and destination holds a disc.
    dx, dy = _direction(origin, destination)
    x, y = origin.x + dx, origin.y + dy
    while (x, y) != (destination.x, destination.y):
        current = board[x][y]
        if current.state not in (opponent.color, acting_player.color):
            raise InconsistentMoveError(
                f"Expected an opponent disc at ({x},{y}) between {origin!r} and {destination!r}, "
                f"found {current!r}")
        x += dx
        y += dy
    return dx, dy


def flip_pieces_between(board: Board, origin: BoardSpace, destination: BoardSpace,
                        acting_player, opponent) -> int:
    """
    Flip every disc strictly between origin and destination to
    acting_player's color. Cells already flipped by an overlapping line
    are left alone. Returns the number of discs flipped.

    The whole line is checked before anything changes, so a bad line
    raises InconsistentMoveError with the board untouched.
    """
    dx, dy = _check_line(board, origin, destination, acting_player, opponent)
    x, y = origin.x + dx, origin.y + dy
    flipped = 0

    while (x, y) != (destination.x, destination.y):
        if board[x][y].state == opponent.color:
            take_space(board, acting_player, opponent, x, y)
            flipped += 1
        x += dx
        y += dy

    return flipped


def execute_move(board: Board, destination: BoardSpace, origins: List[BoardSpace],
                 acting_player, opponent) -> int:
    #Place a disc at destination and flip every line leading back to an origin.
    #Every line is checked first; an InconsistentMoveError leaves the board as it was.
    for origin in origins:
        _check_line(board, origin, destination, acting_player, opponent)

    take_space(board, acting_player, opponent, destination.x, destination.y)
    flipped = 0
    for origin in origins:
        flipped += flip_pieces_between(board, origin, destination, acting_player, opponent)
    return flipped


def cells_to_flip(board: Board, destination: BoardSpace, origins: List[BoardSpace]) -> List[BoardSpace]:
    #Return the spaces a move would convert, without changing the board.
    cells = []
    seen = set()
    for origin in origins:
        dx, dy = _direction(origin, destination)
        x, y = origin.x + dx, origin.y + dy
        while (x, y) != (destination.x, destination.y):
            if (x, y) not in seen:
                seen.add((x, y))
                cells.append(board[x][y])
            x += dx
            y += dy
    return cells
