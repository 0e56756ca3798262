"""
Eriantys CLI - Command-line interface for the engine.

Usage:
    eriantys demo [--players N] [--seed S] [--rounds R]   Play scripted rounds
    eriantys serve [--host H] [--port P]                  Run the REST API
"""

import argparse
import logging
import os
import sys

DEFAULT_NICKNAMES = ["Dario", "Lorenzo", "Luca"]


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Eriantys - Rules engine",
        prog="eriantys",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("ERIANTYS_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    demo_parser = subparsers.add_parser("demo", help="Play a few scripted rounds")
    demo_parser.add_argument("--players", type=int, default=3, choices=[2, 3])
    demo_parser.add_argument("--seed", type=int, default=None)
    demo_parser.add_argument("--rounds", type=int, default=1)

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default=os.getenv("ERIANTYS_HOST", "127.0.0.1"))
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("ERIANTYS_PORT", "8000")))

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_demo(args):
    """Play scripted rounds and print the table."""
    from .engine_core import Game

    nicknames = DEFAULT_NICKNAMES[:args.players]
    game = Game(nicknames[0], args.players, seed=args.seed)
    for nickname in nicknames[1:]:
        game.add_player(nickname)
    game.start_game()

    for round_number in range(1, args.rounds + 1):
        if game.is_game_over:
            break
        print(f"=== Round {round_number} ===")
        game.bag_to_clouds()
        for cloud_index in range(game.num_players):
            play_scripted_turn(game, cloud_index)
            if game.is_game_over:
                break

    print_game(game)


def play_scripted_turn(game, cloud_index):
    """
    Move a cloud's worth of students, step mother nature once, take a cloud.

    The first student goes to the dining room, the rest to the island
    just ahead of mother nature.
    """
    player = game.current_player
    board = player.board
    for i in range(game.constants.cloud_capacity):
        color = next(iter(board.entrance))
        if i == 0:
            game.move_student_to_dining_room(color)
        else:
            target = game.archipelago.step(game.mother_nature, 1)
            game.move_student_to_island(color, target)
    game.move_mother_nature(1)
    if game.is_game_over:
        return
    game.cloud_to_board(cloud_index)
    print(f"{player.nickname} took cloud {cloud_index}")
    game.end_turn()


def print_game(game):
    """Print a plain-text summary of the table."""
    print(f"Phase: {game.phase.value}")
    print(f"Mother nature: island {game.mother_nature}")
    for idx, island in enumerate(game.archipelago):
        tower = island.tower.value if island.tower else "-"
        students = ", ".join(
            f"{color.value}:{count}" for color, count in island.island_students.items()
        )
        print(f"  [{idx:2d}] size={island.size} tower={tower} {students}")
    for player in game.players:
        board = player.board
        professors = ", ".join(sorted(c.value for c in board.professors)) or "-"
        print(
            f"{player.nickname} ({player.tower_color.value}): "
            f"entrance={board.entrance_size()} towers={board.towers} "
            f"professors={professors}"
        )
    if game.is_game_over:
        winner = game.winner
        print(f"Game over: {game.game_over_reason}")
        print(f"Winner: {winner.nickname if winner else 'draw'}")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
