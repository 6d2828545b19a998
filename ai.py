import logging
import math
from typing import Optional

from config import (
    BOARD_SIZE, EMPTY, BOARD_WEIGHTS,
    DEFAULT_MINIMAX_DEPTH, DEFAULT_CUSTOM_DEPTH, validate_positive
)
from board import Board, BoardSpace, copy_board, execute_move

logger = logging.getLogger(__name__)


def weighted_total(board: Board, color) -> int:
    #Sum of BOARD_WEIGHTS over every space occupied by color.
    total = 0
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            if board[x][y].state == color:
                total += BOARD_WEIGHTS[x][y]
    return total


def evaluate_board(board: Board, color) -> int:
    """
    Static positional evaluation from color's perspective: the weights of
    color's discs minus the weights of the opponent's discs.
    """
    return weighted_total(board, color) - weighted_total(board, -color)


def evaluate_for_mover(board: Board, color) -> int:
    """
    Symmetric evaluation used by the negamax search: add the weight of
    every space the mover holds, subtract the weight of every other
    occupied space.
    """
    score = 0
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            state = board[x][y].state
            if state == color:
                score += BOARD_WEIGHTS[x][y]
            elif state != EMPTY:
                score -= BOARD_WEIGHTS[x][y]
    return score


def play_hypothetical(board: Board, player, opponent, destination, origins):
    """
    Apply a move to private copies of the board and both players.

    Returns (board, player, opponent) copies; the arguments are untouched.
    """
    new_board = copy_board(board)
    current = player.copy()
    other = opponent.copy()
    execute_move(new_board, destination, origins, current, other)
    return new_board, current, other


class AI:
    """
    Contract shared by the search strategies.

    next_move returns the chosen destination, or None when the player has
    no legal move (the caller passes the turn).
    """

    def next_move(self, board: Board, player, opponent) -> Optional[BoardSpace]:
        raise NotImplementedError("This method should be overridden by subclasses.")


class Minimax(AI):
    """
    Fixed-depth Minimax with Alpha-Beta pruning and a positional evaluator.

    A side with no legal move passes without consuming depth; the search
    stops at depth 0 or when neither side can move.
    """

    def __init__(self, max_depth=DEFAULT_MINIMAX_DEPTH):
        self.max_depth = validate_positive("max_depth", max_depth)
        self.nodes_evaluated = 0

    def set_max_depth(self, max_depth):
        self.max_depth = validate_positive("max_depth", max_depth)

    def get_max_depth(self):
        return self.max_depth

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------
    def next_move(self, board: Board, player, opponent) -> Optional[BoardSpace]:
        """
        Root-level search: every candidate is explored on its own copy of
        the board with the alpha reached so far. The first candidate with
        the strictly highest value wins.
        """
        self.nodes_evaluated = 0
        moves = player.get_available_moves(board)
        if not moves:
            return None

        best_move = None
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for destination, origins in moves.items():
            new_board, current, other = play_hypothetical(board, player, opponent, destination, origins)
            eval_val = self.minimax(
                new_board,
                other,
                current,
                self.max_depth - 1,
                alpha,
                beta,
                maximizing_player=False
            )

            if eval_val > best_score or best_move is None:
                best_score = eval_val
                best_move = destination

            # Update alpha for future children (root-level alpha-beta)
            alpha = max(alpha, eval_val)

        logger.debug("Minimax depth %d picked %r (score %s, %d nodes)",
                     self.max_depth, best_move, best_score, self.nodes_evaluated)
        return best_move

    # ------------------------------------------------------------------
    # Alpha-Beta search
    # ------------------------------------------------------------------
    def minimax(self, board, mover, other, depth, alpha, beta, maximizing_player):
        """
        Value of the position with `mover` to play, always scored for the
        maximizing side (mover when maximizing_player, else other).
        """
        self.nodes_evaluated += 1
        root_color = mover.color if maximizing_player else other.color

        if depth == 0:
            return evaluate_board(board, root_color)

        legal_moves = mover.get_available_moves(board)
        if not legal_moves:
            if not other.get_available_moves(board):
                return evaluate_board(board, root_color)
            # Forced pass: same depth, other side to move
            return self.minimax(board, other, mover, depth, alpha, beta, not maximizing_player)

        if maximizing_player:
            max_eval = -math.inf
            for destination, origins in legal_moves.items():
                new_board, current, opp = play_hypothetical(board, mover, other, destination, origins)
                eval_val = self.minimax(new_board, opp, current, depth - 1, alpha, beta, False)
                max_eval = max(max_eval, eval_val)
                alpha = max(alpha, eval_val)
                if beta <= alpha:
                    break
            return max_eval
        else:
            min_eval = math.inf
            for destination, origins in legal_moves.items():
                new_board, current, opp = play_hypothetical(board, mover, other, destination, origins)
                eval_val = self.minimax(new_board, opp, current, depth - 1, alpha, beta, True)
                min_eval = min(min_eval, eval_val)
                beta = min(beta, eval_val)
                if beta <= alpha:
                    break
            return min_eval


class Custom(AI):
    """
    Negamax with Alpha-Beta pruning.

    Every level scores the position for the side to move; child values are
    negated on the way up and the (alpha, beta) window is negated and
    swapped on the way down.
    """

    def __init__(self, depth=DEFAULT_CUSTOM_DEPTH):
        self.depth = validate_positive("depth", depth)
        self.nodes_evaluated = 0

    def set_depth(self, depth):
        self.depth = validate_positive("depth", depth)

    def get_depth(self):
        return self.depth

    def next_move(self, board: Board, player, opponent) -> Optional[BoardSpace]:
        self.nodes_evaluated = 0
        moves = player.get_available_moves(board)
        if not moves:
            return None

        best_move = None
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for destination, origins in moves.items():
            new_board, current, other = play_hypothetical(board, player, opponent, destination, origins)
            score = -self.negamax(new_board, other, current, self.depth - 1, -beta, -alpha)
            if score > best_score or best_move is None:
                best_score = score
                best_move = destination
            alpha = max(alpha, score)

        logger.debug("Negamax depth %d picked %r (score %s, %d nodes)",
                     self.depth, best_move, best_score, self.nodes_evaluated)
        return best_move

    def negamax(self, board, mover, other, depth, alpha, beta):
        self.nodes_evaluated += 1
        if depth == 0:
            return evaluate_for_mover(board, mover.color)

        moves = mover.get_available_moves(board)
        if not moves:
            if not other.get_available_moves(board):
                return evaluate_for_mover(board, mover.color)
            return -self.negamax(board, other, mover, depth, -beta, -alpha)

        max_score = -math.inf
        for destination, origins in moves.items():
            new_board, current, opp = play_hypothetical(board, mover, other, destination, origins)
            score = -self.negamax(new_board, opp, current, depth - 1, -beta, -alpha)
            max_score = max(max_score, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        return max_score
