import logging
from typing import Dict, List, Optional, Tuple

from config import EMPTY, COLOR_NAMES, DIRECTIONS, AGENT_KINDS, ConfigurationError
from board import Board, BoardSpace, is_valid_position
from ai import Minimax, Custom
from mcts import MCTS

logger = logging.getLogger(__name__)

MoveMap = Dict[BoardSpace, List[BoardSpace]]


class Player:
    """
    A side in the game: a color plus the set of spaces it currently owns.

    Owned spaces are unique by coordinate and kept in insertion order, so
    move generation (and everything built on it) enumerates moves in a
    stable order.
    """

    def __init__(self, color: Optional[int] = None):
        self.color = color
        self._owned: Dict[Tuple[int, int], BoardSpace] = {}

    def __repr__(self):
        return f"{type(self).__name__}({COLOR_NAMES.get(self.color, self.color)})"

    @property
    def owned_spaces(self) -> List[BoardSpace]:
        return list(self._owned.values())

    def owns(self, x, y) -> bool:
        return (x, y) in self._owned

    def add_owned_space(self, space: BoardSpace):
        # a coordinate that is already owned keeps its existing entry
        if space.coords not in self._owned:
            self._owned[space.coords] = space

    def remove_owned_space(self, space: BoardSpace):
        self._owned.pop(space.coords, None)

    def clear_owned_spaces(self):
        self._owned.clear()

    def copy(self) -> 'Player':
        #Independent copy with the same color and owned spaces, used for search.
        clone = Player(self.color)
        clone._owned = dict(self._owned)
        return clone

    def get_available_moves(self, board: Board) -> MoveMap:
        """
        Find every empty space this player can move to.

        For each owned space, walk the 8 directions over a run of opponent
        discs. The first empty space after at least one opponent disc is a
        destination, and the owned space is recorded as one of its origins.

        Returns a dict mapping destination -> list of origins. An empty dict
        means the player has to pass.
        """
        moves: MoveMap = {}

        for origin in self._owned.values():
            for dx, dy in DIRECTIONS:
                x, y = origin.x + dx, origin.y + dy
                captured = 0

                while is_valid_position(x, y):
                    current = board[x][y]
                    if current.state == EMPTY:
                        if captured:
                            moves.setdefault(current, []).append(origin)
                        break
                    if current.state == self.color:
                        break
                    captured += 1
                    x += dx
                    y += dy

        return moves


class HumanPlayer(Player):
    """A player whose moves are picked outside the engine (console or GUI)."""


class ComputerPlayer(Player):
    """
    A player that decides its own moves with one of the search strategies.

    The strategy is chosen by name from a closed set: "minimax", "mcts" or
    "custom" (negamax). Tuning setters are reachable through `strategy`.
    """

    def __init__(self, strategy_name: str, color: Optional[int] = None, **strategy_options):
        super().__init__(color)
        self.strategy_name = strategy_name.lower()
        self.strategy = create_strategy(self.strategy_name, **strategy_options)

    def __repr__(self):
        return f"ComputerPlayer({COLOR_NAMES.get(self.color, self.color)}, {self.strategy_name})"

    def make_move(self, board: Board, opponent: Player) -> Optional[BoardSpace]:
        return self.strategy.next_move(board, self, opponent)


STRATEGIES = {
    "minimax": Minimax,
    "mcts": MCTS,
    "custom": Custom,
}


def create_strategy(strategy_name: str, **options):
    try:
        strategy_cls = STRATEGIES[strategy_name.lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown strategy: {strategy_name}") from None
    return strategy_cls(**options)


def create_player(kind: str, color: int, **strategy_options) -> Player:
    #Build a player from a startup agent kind ("human", "minimax", "mcts", "custom").
    normalized = kind.lower()
    if normalized not in AGENT_KINDS:
        raise ConfigurationError(
            f"Unknown agent kind {kind!r}, expected one of: {', '.join(AGENT_KINDS)}")
    if normalized == "human":
        player = HumanPlayer(color)
    else:
        player = ComputerPlayer(normalized, color, **strategy_options)
    logger.debug("Created %r", player)
    return player
