"""Tests for the Monte Carlo Tree Search strategy and its tree nodes."""

import math
import random

import pytest

from config import BOARD_SIZE, BLACK, WHITE, EXPLORATION_PARAM, DEFAULT_MCTS_ITERATIONS, ConfigurationError
from board import get_board_space, copy_board
from mcts import MCTS, MCTSNode


@pytest.fixture
def root(initial_position):
    board, black, white = initial_position
    return MCTSNode(copy_board(board), black.copy(), white.copy(), rng=random.Random(0))


class TestMCTSNode:
    """Tests for node expansion, selection, playouts and statistics."""

    def test_new_node(self, root):
        assert root.move is None
        assert root.parent is None
        assert root.children == []
        assert root.visits == 0
        assert root.wins == 0

    def test_expand(self, root, initial_position):
        board, black, white = initial_position
        moves = black.get_available_moves(board)

        root.expand()

        assert len(root.children) == len(moves) == 4
        for child in root.children:
            assert child.parent is root
            assert child.move in moves
            assert child.current_player.color == WHITE
            assert child.opponent.color == BLACK
            assert child.board[child.move.x][child.move.y].state == BLACK
            assert child.rng is root.rng
        assert root.board == board

    def test_two_levels_track_the_board(self, root, ownership_matches):
        root.expand()
        for child in root.children:
            child.expand()
            assert child.children

        nodes = [root] + root.children + [g for child in root.children for g in child.children]
        for node in nodes:
            assert ownership_matches(node.board, node.current_player)
            assert ownership_matches(node.board, node.opponent)
        for grandchild in root.children[0].children:
            assert grandchild.board[grandchild.move.x][grandchild.move.y].state == WHITE
            assert grandchild.current_player.color == BLACK

    def test_ties_broken_at_random(self, root):
        root.expand()

        picked = {root.select_child() for _ in range(40)}

        assert len(picked) > 1
        assert picked <= set(root.children)

    def test_select_prefers_unvisited(self, root):
        root.expand()
        root.visits = 3
        for child in root.children[:3]:
            child.visits = 1
            child.wins = 1

        assert root.select_child() is root.children[3]

    def test_select_uses_uct(self, root):
        root.expand()
        root.visits = 20
        for child in root.children:
            child.visits = 5
        root.children[2].wins = 4

        assert root.select_child(EXPLORATION_PARAM) is root.children[2]

    def test_uct_value(self, root):
        root.expand()
        root.visits = 10
        child = root.children[0]
        child.visits = 4
        child.wins = 1

        expected = 0.25 + EXPLORATION_PARAM * math.sqrt(math.log(10) / 4)
        assert root.uct_value(child, EXPLORATION_PARAM) == pytest.approx(expected)
        assert root.uct_value(root.children[1], EXPLORATION_PARAM) == math.inf

    def test_select_without_children(self, root):
        assert root.select_child() is None

    def test_back_propagate(self, root):
        root.expand()
        child = root.children[0]

        child.back_propagate(True)
        child.back_propagate(False)

        assert (child.visits, child.wins) == (2, 1)
        assert (root.visits, root.wins) == (2, 1)
        assert root.children[1].visits == 0

    def test_best_move_skips_unvisited(self, root):
        root.expand()
        first, second, third, fourth = root.children
        second.visits, second.wins = 2, 1
        third.visits, third.wins = 4, 3
        fourth.visits, fourth.wins = 4, 2

        assert root.get_best_move() == third.move

    def test_best_move_falls_back_to_first_child(self, root):
        root.expand()

        assert root.get_best_move() == root.children[0].move

    def test_best_move_without_children(self, root):
        assert root.get_best_move() is None

    def test_simulate_leaves_node_alone(self, root, initial_position):
        board, black, white = initial_position

        result = root.simulate()

        assert isinstance(result, bool)
        assert root.board == board
        assert {s.coords for s in root.current_player.owned_spaces} == {(3, 4), (4, 3)}

    def test_simulate_finished_game(self, empty_board, black, white, place):
        place(empty_board, black, 0, 0)
        place(empty_board, black, 7, 7)

        assert MCTSNode(empty_board, black, white).simulate() is True
        assert MCTSNode(empty_board, white, black).simulate() is False

    def test_simulate_plays_to_the_end(self, corner_only_position):
        board, white, black = corner_only_position

        # White takes the corner and row/column 0; Black has nothing left.
        assert MCTSNode(board, white, black).simulate() is True


class TestMCTS:
    """Tests for the MCTS strategy."""

    def test_default_iterations(self):
        assert MCTS().get_iterations() == DEFAULT_MCTS_ITERATIONS

    def test_iterations_setting(self):
        mcts = MCTS()

        mcts.set_iterations(50)
        assert mcts.get_iterations() == 50

        with pytest.raises(ConfigurationError):
            mcts.set_iterations(0)
        with pytest.raises(ConfigurationError):
            mcts.set_iterations(-1)
        with pytest.raises(ConfigurationError):
            MCTS(iterations=0)

    def test_no_moves_returns_none(self, black, white):
        board = [[get_board_space(x, y, WHITE) for y in range(BOARD_SIZE)] for x in range(BOARD_SIZE)]

        assert MCTS(iterations=10, seed=1).next_move(board, black, white) is None

    def test_only_corner_move(self, corner_only_position):
        board, white, black = corner_only_position

        move = MCTS(iterations=20, seed=1).next_move(board, white, black)

        assert move.coords == (0, 0)

    @pytest.mark.parametrize("iterations", [1, 2, 30])
    def test_returns_legal_move(self, initial_position, iterations):
        board, black, white = initial_position

        move = MCTS(iterations=iterations, seed=5).next_move(board, black, white)

        assert move in black.get_available_moves(board)

    def test_seeded_runs_agree(self, initial_position):
        board, black, white = initial_position

        first = MCTS(iterations=25, seed=11).next_move(board, black, white)
        second = MCTS(iterations=25, seed=11).next_move(board, black, white)

        assert first == second

    def test_inputs_untouched(self, initial_position):
        board, black, white = initial_position
        board_before = copy_board(board)
        black_before = list(black.owned_spaces)
        white_before = list(white.owned_spaces)

        MCTS(iterations=25, seed=2).next_move(board, black, white)

        assert board == board_before
        assert black.owned_spaces == black_before
        assert white.owned_spaces == white_before
