import logging
import math
import random
from typing import List, Optional

from config import (
    BOARD_SIZE, EXPLORATION_PARAM, DEFAULT_MCTS_ITERATIONS, validate_positive
)
from board import Board, BoardSpace, copy_board, execute_move
from ai import AI, play_hypothetical

logger = logging.getLogger(__name__)


class MCTSNode:
    """
    One hypothetical position in the search tree.

    current_player is the side to move at this node, opponent the other
    side, and move the destination that produced the position (None at the
    root). Nodes own private copies of the board and both players.
    """

    def __init__(self, board: Board, current_player, opponent,
                 move: Optional[BoardSpace] = None, parent: Optional['MCTSNode'] = None,
                 rng: Optional[random.Random] = None):
        self.board = board
        self.current_player = current_player
        self.opponent = opponent
        self.move = move
        self.parent = parent
        self.children: List['MCTSNode'] = []
        self.visits = 0
        self.wins = 0
        self.rng = rng if rng is not None else (parent.rng if parent is not None else random.Random())

    def __repr__(self):
        return f"MCTSNode(move={self.move!r}, wins={self.wins}, visits={self.visits})"

    def win_rate(self) -> float:
        return self.wins / self.visits

    def expand(self):
        #Add one child per legal move of the side to move; the child's sides are swapped.
        moves = self.current_player.get_available_moves(self.board)
        for destination, origins in moves.items():
            new_board, current, other = play_hypothetical(
                self.board, self.current_player, self.opponent, destination, origins)
            self.children.append(MCTSNode(new_board, other, current, destination, self))

    def uct_value(self, child: 'MCTSNode', exploration_param: float) -> float:
        if child.visits == 0:
            return math.inf
        exploitation = child.wins / child.visits
        exploration = math.sqrt(math.log(self.visits) / child.visits)
        return exploitation + exploration_param * exploration

    def select_child(self, exploration_param: float = EXPLORATION_PARAM) -> Optional['MCTSNode']:
        """
        Pick the child with the highest UCT score. Unvisited children score
        +inf; ties are broken uniformly at random. Returns None without
        children.
        """
        best_value = -math.inf
        best_children: List['MCTSNode'] = []

        for child in self.children:
            value = self.uct_value(child, exploration_param)
            if value > best_value:
                best_value = value
                best_children = [child]
            elif value == best_value:
                best_children.append(child)

        if not best_children:
            return None
        return self.rng.choice(best_children)

    def simulate(self) -> bool:
        """
        Random playout from this node to the end of the game.

        Sides alternate playing uniformly random legal moves; a side
        without a move passes, and the playout ends once neither side can
        move. Returns True iff this node's current player ends with
        strictly more discs than its opponent.
        """
        sim_board = copy_board(self.board)
        mover = self.current_player.copy()
        other = self.opponent.copy()

        while True:
            moves = mover.get_available_moves(sim_board)
            if not moves:
                if not other.get_available_moves(sim_board):
                    break
            else:
                destination = self.rng.choice(list(moves))
                execute_move(sim_board, destination, moves[destination], mover, other)
            mover, other = other, mover

        current_count = 0
        opponent_count = 0
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                state = sim_board[x][y].state
                if state == self.current_player.color:
                    current_count += 1
                elif state == self.opponent.color:
                    opponent_count += 1

        return current_count > opponent_count

    def back_propagate(self, won: bool):
        #Record one playout on this node and every ancestor.
        node = self
        while node is not None:
            node.visits += 1
            if won:
                node.wins += 1
            node = node.parent

    def get_best_move(self) -> Optional[BoardSpace]:
        """
        Move of the child with the highest win rate. Unvisited children are
        skipped unless no child has been visited at all, in which case the
        first child is returned. None without children.
        """
        best_child = None
        best_win_rate = -1.0

        for child in self.children:
            if child.visits == 0:
                continue
            rate = child.win_rate()
            if rate > best_win_rate:
                best_win_rate = rate
                best_child = child

        if best_child is None and self.children:
            best_child = self.children[0]
        return best_child.move if best_child is not None else None


class MCTS(AI):
    """
    Monte Carlo Tree Search using UCT for selection.

    The tree lives only for one next_move call.
    """

    def __init__(self, iterations=DEFAULT_MCTS_ITERATIONS, exploration_param=EXPLORATION_PARAM, seed=None):
        self.iterations = validate_positive("iterations", iterations)
        self.exploration_param = exploration_param
        self.rng = random.Random(seed)

    def set_iterations(self, iterations):
        self.iterations = validate_positive("iterations", iterations)

    def get_iterations(self):
        return self.iterations

    def next_move(self, board: Board, player, opponent) -> Optional[BoardSpace]:
        if not player.get_available_moves(board):
            return None

        root = MCTSNode(copy_board(board), player.copy(), opponent.copy(), rng=self.rng)
        root.expand()

        for _ in range(self.iterations):
            # 1. Selection
            node = root
            while node.children and node.visits > 0:
                node = node.select_child(self.exploration_param)

            # 2. Expansion
            if node.visits > 0 and not node.children:
                node.expand()
                if node.children:
                    node = node.select_child(self.exploration_param)

            # 3. Simulation
            won = node.simulate()

            # 4. Backpropagation
            node.back_propagate(won)

        best_move = root.get_best_move()
        logger.debug("MCTS %d iterations picked %r from %d candidates",
                     self.iterations, best_move, len(root.children))
        return best_move
