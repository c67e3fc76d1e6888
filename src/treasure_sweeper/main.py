"""
Treasure Sweeper - Main entry point.

Usage:
    treasure-sweeper play [--seed N] [--wallet]
    treasure-sweeper demo [--games N] [--delay S]
    treasure-sweeper leaderboard [--size N]
"""
import argparse
import itertools
import logging
import random
import sys
import time
from typing import Callable, List, Optional, Tuple

from .agents import RandomAgent
from .game import (
    Cue,
    CueDispatcher,
    GameConfig,
    GameSession,
    GameStatus,
    SweeperError,
    TreasureSweeperEnv,
    load_config,
    start_new_game,
)
from .logging_config import setup_logging
from .rewards import claim_points, connect_wallet, mock_leaderboard, rank_player


logger = logging.getLogger(__name__)

CUE_TEXT = {
    Cue.EXPLOSION: "BOOM! You hit a mine.",
    Cue.TREASURE: "Treasure!",
    Cue.GAME_OVER: "Game Over!",
    Cue.VICTORY: "You Win!",
}


def build_config(args: argparse.Namespace) -> GameConfig:
    """Load the config file, then apply command line overrides."""
    config = load_config(args.config) if args.config else GameConfig()
    overrides = {
        key: value
        for key, value in (
            ("width", args.width),
            ("height", args.height),
            ("num_mines", args.mines),
            ("starting_lives", args.lives),
        )
        if value is not None
    }
    if overrides:
        config = GameConfig.from_dict({**config.to_dict(), **overrides})
    return config


def parse_move(line: str) -> Optional[Tuple[int, int]]:
    """Parse a ``row col`` move, or None if the line is not one."""
    parts = line.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def print_status(session: GameSession) -> None:
    snapshot = session.snapshot()
    print(snapshot.render())
    print(f"Score: {snapshot.score}  Lives: {snapshot.lives}")


def announce(cue: Cue) -> None:
    """Print a cue; the background track has no text."""
    text = CUE_TEXT.get(cue)
    if text:
        print(text)


def ask(input_fn: Callable[[str], str], prompt: str) -> str:
    """Read one answer, treating end of input as an empty answer."""
    try:
        return input_fn(prompt).strip().lower()
    except EOFError:
        return ""


def play_session(
    session: GameSession,
    input_fn: Callable[[str], str] = input,
) -> bool:
    """
    Read moves until the session ends.

    Returns:
        False if the player quit before the game finished.
    """
    while not session.is_over:
        print_status(session)
        try:
            line = input_fn("> ").strip()
        except EOFError:
            return False
        if line.lower() in ("q", "quit"):
            return False
        move = parse_move(line)
        if move is None:
            print("Expected two numbers: row col")
            continue
        try:
            result = session.reveal_cell(*move)
        except SweeperError as exc:
            print(exc)
            continue
        if not result.events:
            print("Already revealed.")
    return True


def play(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
) -> None:
    """Play interactive games in the terminal until the player stops."""
    config = build_config(args)
    rng = random.Random(args.seed)
    player = connect_wallet() if args.wallet else None

    print(f"Board: {config.height}x{config.width} with {config.num_mines} mines")
    print("Enter 'row col' to reveal a cell, 'q' to quit.\n")

    for game in itertools.count(1):
        print(f"=== Game {game} ===")
        session = start_new_game(config, rng=rng)
        CueDispatcher(announce).attach(session)
        finished = play_session(session, input_fn)
        print_status(session)
        if not finished:
            return
        if player is not None:
            answer = ask(input_fn, f"Claim {session.score} points to your XP? [y/N] ")
            if answer.startswith("y"):
                claim_points(player, session)
            print(f"Wallet {player.wallet_address} XP: {player.xp}")
        if not ask(input_fn, "Play again? [y/N] ").startswith("y"):
            return


def demo(args: argparse.Namespace) -> None:
    """Watch the random agent play."""
    config = build_config(args)
    env = TreasureSweeperEnv(config=config, render_mode="ansi")
    agent = RandomAgent(config.height, config.width, seed=args.seed)

    wins = 0
    scores: List[int] = []

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        agent.reset()
        done = False

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            if args.delay > 0:
                print(env.render() + "\n")
                time.sleep(args.delay)

        scores.append(info["score"])
        if info["game_state"] == GameStatus.WON.name:
            wins += 1
        print(
            f"Game {game + 1}/{args.games}: {info['game_state']} | "
            f"Score: {info['score']} | Revealed: {info['revealed']}"
        )

    mean_score = sum(scores) / len(scores) if scores else 0.0
    print(f"\n=== Final: {wins}/{args.games} wins | Mean score: {mean_score:.1f} ===")


def leaderboard(args: argparse.Namespace) -> None:
    """Print a mock leaderboard."""
    players = mock_leaderboard(size=args.size)
    if args.xp is not None:
        you = connect_wallet()
        you.xp = args.xp
        rank = rank_player(players, you)
        print(f"Your rank: #{rank}\n")

    print(f"{'Rank':<6} {'Wallet':<44} {'XP':>6}")
    print("-" * 58)
    for index, player in enumerate(players, start=1):
        print(f"#{index:<5} {player.wallet_address:<44} {player.xp:>6}")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="JSON game configuration file")
    parser.add_argument("--width", type=int, help="Board width")
    parser.add_argument("--height", type=int, help="Board height")
    parser.add_argument("--mines", type=int, help="Number of mines")
    parser.add_argument("--lives", type=int, help="Starting lives")
    parser.add_argument("--seed", type=int, help="Random seed")


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Treasure Sweeper - Minesweeper with treasures and lives"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)
    play_parser.add_argument(
        "--wallet", action="store_true", help="Connect a mock wallet to claim XP"
    )

    demo_parser = subparsers.add_parser("demo", help="Watch the random agent play")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )

    board_parser = subparsers.add_parser("leaderboard", help="Show the leaderboard")
    board_parser.add_argument(
        "--size", type=int, default=10, help="Number of players"
    )
    board_parser.add_argument("--xp", type=int, help="Show your rank with this XP")

    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        elif args.command == "leaderboard":
            leaderboard(args)
        else:
            parser.print_help()
    except SweeperError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
