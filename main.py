import argparse
import logging
import sys

import config
from config import COLOR_NAMES, BLACK, WHITE, ConfigurationError
from board import InconsistentMoveError
from game import OthelloGame
from player import ComputerPlayer, create_player
from utils import now_seconds, format_seconds, format_space, parse_coordinates

logger = logging.getLogger("othello")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="othello",
        description="Play Othello in the terminal. Each side is 'human' or a computer strategy."
    )
    parser.add_argument("player_one", help="Black: " + ", ".join(config.AGENT_KINDS))
    parser.add_argument("player_two", help="White: " + ", ".join(config.AGENT_KINDS))
    parser.add_argument("--depth", type=int, default=None,
                        help="search depth for minimax/custom players")
    parser.add_argument("--iterations", type=int, default=None,
                        help="iterations per move for mcts players")
    parser.add_argument("--seed", type=int, default=None, help="random seed for mcts players")
    parser.add_argument("--verbose", action="store_true", help="log search details")
    return parser


def strategy_options(kind, args):
    #Keyword arguments for the strategy behind an agent kind.
    kind = kind.lower()
    if kind == "minimax" and args.depth is not None:
        return {"max_depth": args.depth}
    if kind == "custom" and args.depth is not None:
        return {"depth": args.depth}
    if kind == "mcts":
        options = {"seed": args.seed}
        if args.iterations is not None:
            options["iterations"] = args.iterations
        return options
    return {}


def ask_human_move(player, moves):
    #Prompt until the human enters one of the legal destinations.
    legal = {space.coords: space for space in moves}
    choices = " ".join(format_space(space) for space in moves)
    while True:
        try:
            text = input(f"{COLOR_NAMES[player.color]} to move {choices}: ")
        except EOFError:
            raise SystemExit(1)
        coords = parse_coordinates(text)
        if coords in legal:
            return legal[coords]
        print("Invalid move. Please enter one of the listed coordinates as 'x y'.")


def play(game):
    while not game.is_game_over():
        player = game.current_player
        opponent = game.other_player(player)
        moves = game.get_available_moves(player)

        if not moves:
            print(f"{COLOR_NAMES[player.color]} has no legal move and passes.")
            game.pass_turn()
            continue

        if isinstance(player, ComputerPlayer):
            start = now_seconds()
            destination = game.computer_decision(player)
            print(f"{COLOR_NAMES[player.color]} ({player.strategy_name}) plays {format_space(destination)} "
                  f"[{format_seconds(now_seconds() - start)}]")
        else:
            destination = ask_human_move(player, moves)

        game.take_spaces(player, opponent, moves, destination)
        print(game)
        game.end_turn()

    black, white = game.count_discs()
    winner = game.get_winner()
    print(f"\nGAME OVER  Black: {black}  |  White: {white}")
    if winner == config.EMPTY:
        print("Game tied.")
    else:
        print(f"{COLOR_NAMES[winner]} wins.")
    return winner


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=config.LOG_FORMAT, datefmt='%H:%M:%S')

    try:
        player_one = create_player(args.player_one, BLACK, **strategy_options(args.player_one, args))
        player_two = create_player(args.player_two, WHITE, **strategy_options(args.player_two, args))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    game = OthelloGame(player_one, player_two)
    print(game)

    try:
        play(game)
    except InconsistentMoveError:
        logger.exception("Board and move map disagree, aborting game")
        return 1
    except KeyboardInterrupt:
        print("\nGame interrupted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
