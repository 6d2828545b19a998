import logging
from typing import Optional

from config import EMPTY, BLACK, WHITE, STARTING_SPACES
from board import (
    Board, BoardSpace, InconsistentMoveError, new_board, board_to_str,
    count_discs, get_board_space, take_space, execute_move
)
from player import Player, ComputerPlayer, MoveMap

logger = logging.getLogger(__name__)


class OthelloGame:
    """
    Holds the live board and both players.

    Move generation, move application and computer decisions are delegated
    to the players, the mutation helpers in board.py and the players'
    search strategies. Player one plays Black and moves first.
    """

    def __init__(self, player_one: Player, player_two: Player):
        self.player_one = player_one
        self.player_two = player_two
        if player_one.color is None:
            player_one.color = BLACK
        if player_two.color is None:
            player_two.color = WHITE
        if player_one.color == player_two.color:
            raise ValueError("Both players cannot use the same color")

        self.board: Board = []
        self.current_player = player_one
        self.init_board()

    def __str__(self):
        return board_to_str(self.board)

    def init_board(self):
        #Reset to the starting position and seed both players' owned spaces.
        self.board = new_board()
        self.player_one.clear_owned_spaces()
        self.player_two.clear_owned_spaces()

        for (x, y), color in STARTING_SPACES.items():
            space = get_board_space(x, y, color)
            self.board[x][y] = space
            owner = self.player_one if color == self.player_one.color else self.player_two
            owner.add_owned_space(space)

        self.current_player = self.player_one if self.player_one.color == BLACK else self.player_two

    def get_board(self) -> Board:
        return self.board

    def other_player(self, player: Player) -> Player:
        return self.player_two if player is self.player_one else self.player_one

    def end_turn(self) -> Player:
        self.current_player = self.other_player(self.current_player)
        return self.current_player

    def pass_turn(self) -> Player:
        #The side to move has no legal move; hand the turn to the other player.
        logger.info("%s has no legal move and passes", self.current_player)
        return self.end_turn()

    def get_available_moves(self, player: Player) -> MoveMap:
        return player.get_available_moves(self.board)

    def take_space(self, acting_player: Player, opponent: Player, x, y) -> bool:
        return take_space(self.board, acting_player, opponent, x, y)

    def take_spaces(self, acting_player: Player, opponent: Player,
                    available_moves: MoveMap, selected_destination: Optional[BoardSpace]) -> int:
        """
        Play selected_destination for acting_player: claim it and flip every
        line leading back to its origins in available_moves.

        A None destination is a pass and leaves the board alone. Returns the
        number of discs flipped.
        """
        if selected_destination is None:
            logger.warning("No destination given for %s, board left unchanged", acting_player)
            return 0

        origins = available_moves.get(selected_destination)
        if not origins:
            raise InconsistentMoveError(
                f"{selected_destination!r} is not a legal destination for {acting_player!r}")

        flipped = execute_move(self.board, selected_destination, origins, acting_player, opponent)
        logger.info("%s played (%d,%d), flipping %d",
                    acting_player, selected_destination.x, selected_destination.y, flipped)
        return flipped

    def computer_decision(self, computer: ComputerPlayer) -> Optional[BoardSpace]:
        #Ask the computer's strategy for a move against the other live player.
        return computer.make_move(self.board, self.other_player(computer))

    def count_discs(self):
        #Count discs for each color, read off the board. Returns (black_count, white_count).
        counts = count_discs(self.board)
        return counts.get(BLACK, 0), counts.get(WHITE, 0)

    def is_board_full(self) -> bool:
        return count_discs(self.board).get(EMPTY, 0) == 0

    def is_game_over(self) -> bool:
        #Board full, or no legal moves for either player.
        if self.is_board_full():
            return True
        return not self.get_available_moves(self.player_one) and not self.get_available_moves(self.player_two)

    def get_winner(self):
        #Get game winner. Returns BLACK, WHITE, or EMPTY (tie).
        #Should only be called when game is over.
        black, white = self.count_discs()
        if black > white:
            return BLACK
        elif white > black:
            return WHITE
        else:
            return EMPTY
