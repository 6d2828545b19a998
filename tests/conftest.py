"""Shared fixtures for the Othello engine tests."""

import pytest

from config import BLACK, WHITE, STARTING_SPACES
from board import new_board, get_board_space, clear_space_cache, spaces_of
from player import Player


@pytest.fixture(autouse=True)
def fresh_space_cache():
    """Every test starts with an empty BoardSpace cache."""
    clear_space_cache()
    yield
    clear_space_cache()


@pytest.fixture
def black():
    return Player(BLACK)


@pytest.fixture
def white():
    return Player(WHITE)


@pytest.fixture
def empty_board():
    return new_board()


@pytest.fixture
def place():
    """Put a disc for `player` on `board` and record the ownership."""

    def _place(board, player, x, y):
        space = get_board_space(x, y, player.color)
        board[x][y] = space
        player.add_owned_space(space)
        return space

    return _place


@pytest.fixture
def initial_position(empty_board, black, white, place):
    """Starting position: (board, black, white)."""
    for (x, y), color in STARTING_SPACES.items():
        place(empty_board, black if color == BLACK else white, x, y)
    return empty_board, black, white


@pytest.fixture
def ownership_matches():
    """True when a player's tracked spaces are exactly the board's spaces of its color."""

    def _matches(board, player):
        tracked = {space.coords for space in player.owned_spaces}
        actual = {space.coords for space in spaces_of(board, player.color)}
        return tracked == actual

    return _matches


@pytest.fixture
def corner_only_position(empty_board, black, white, place):
    """White's only legal move is the corner (0,0), reachable along row 0 and column 0."""
    place(empty_board, white, 0, 2)
    place(empty_board, black, 0, 1)
    place(empty_board, white, 2, 0)
    place(empty_board, black, 1, 0)
    return empty_board, white, black


@pytest.fixture
def corner_or_centre_position(empty_board, black, white, place):
    """
    White can take the corner (0,0), flipping only (1,0), or play (2,2),
    flipping (3,3) and (4,4). The corner is worth more.
    """
    place(empty_board, white, 2, 0)
    place(empty_board, black, 1, 0)
    place(empty_board, white, 5, 5)
    place(empty_board, black, 4, 4)
    place(empty_board, black, 3, 3)
    return empty_board, white, black
