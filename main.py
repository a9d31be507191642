"""
Command line helper for moderating a Werewolf game.
"""

import argparse
import random
from typing import List, Optional

from werewolf_engine.config.config_loader import load_config
from werewolf_engine.config.game_config import GameConfig, default_config
from werewolf_engine.core import (
    GameEngine,
    expand_role_setup,
    get_suggested_role_setups,
)
from werewolf_engine.recording import EventEmitter, RunRecorder


def create_game(
    config: GameConfig,
    seed: Optional[int] = None,
    run_name: Optional[str] = None,
) -> GameEngine:
    """
    Seat the configured players, deal the configured roles and start the
    first night. The game is recorded under config.runs_dir.
    """
    if not config.player_names:
        raise ValueError("No player_names configured")

    role_setup = config.role_setup
    if role_setup is None:
        setups = get_suggested_role_setups(len(config.player_names))
        if not setups:
            raise ValueError(f"No suggested setup for {len(config.player_names)} players")
        role_setup = next(iter(setups.values()))

    recorder = RunRecorder(config.runs_dir)
    run_name = recorder.create_run(run_name)
    print(f"Recording game to: {recorder.get_run_path()}/")

    players = [{"id": f"p{i + 1}", "name": name} for i, name in enumerate(config.player_names)]
    engine = GameEngine(players, config=config, event_emitter=EventEmitter(recorder))

    roles = expand_role_setup(role_setup)
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    random.Random(seed).shuffle(roles)

    for player, role_name in zip(players, roles):
        engine.assign_role_to_players([player["id"]], role_name)

    recorder.save_metadata({
        "run_name": run_name,
        "seed": seed,
        "players": players,
        "role_setup": role_setup,
    })
    engine.start_first_night()
    recorder.save_state(engine.get_serializable_state())
    return engine


def print_suggestions(player_count: int) -> None:
    setups = get_suggested_role_setups(player_count)
    if not setups:
        print(f"No suggested setup for {player_count} players (6-16 supported).")
        return
    for name, setup in setups.items():
        roles = ", ".join(f"{count} {role}" for role, count in setup.items())
        print(f"{name}: {roles}")


def print_turn_order(config: GameConfig) -> None:
    engine = GameEngine([], config=config)
    print("First night:", " -> ".join(role.name for role in engine.get_first_night_turn_order()))
    print("Other nights:", " -> ".join(role.name for role in engine.get_night_turn_order()))


def print_runs(config: GameConfig) -> None:
    runs = RunRecorder(config.runs_dir).list_runs()
    if not runs:
        print("No recorded games.")
        return
    for run in runs:
        winner = run.get("winner") or "in progress"
        print(f"{run['name']}: {run['event_count']} events, {winner}")


def print_run(config: GameConfig, run_name: str) -> None:
    recorder = RunRecorder(config.runs_dir)
    state = recorder.load_state(run_name)
    snapshot = state["game_state"]
    print(f"Phase: {snapshot['phase']}  Day: {snapshot['day_number']}  Winner: {snapshot['winner'] or '-'}")
    print("=" * 60)
    for player in snapshot["players"]:
        role = player["role"]["name"] if player["role"] else "unassigned"
        status = "alive" if player["is_alive"] else "dead"
        lover = f"  lover: {player['lover']['name']}" if player["lover"] else ""
        print(f"{player['name']:<16} {role:<10} {status}{lover}")


def main(argv: Optional[List[str]] = None):
    """Entry point for the moderator helper."""
    parser = argparse.ArgumentParser(
        description="Werewolf moderator helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py suggest 8                             # Role setups for 8 players
  python main.py turn-order                            # Night wake-up order
  python main.py new --config config.example.yaml      # Deal roles and start a game
  python main.py runs                                  # List recorded games
  python main.py show game_20240101_120000             # Show a recorded game
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest = subparsers.add_parser("suggest", help="Show suggested role setups")
    suggest.add_argument("players", type=int, help="Number of players")

    subparsers.add_parser("turn-order", help="Show the night turn order")

    new = subparsers.add_parser("new", help="Deal roles and start the first night")
    new.add_argument("--seed", "-s", type=int, default=None, help="Random seed for dealing roles")
    new.add_argument("--run-name", "-r", type=str, default=None, help="Custom name for this run")

    subparsers.add_parser("runs", help="List recorded games")

    show = subparsers.add_parser("show", help="Show a recorded game")
    show.add_argument("run_name", type=str, help="Run directory name")

    args = parser.parse_args(argv)
    config = load_config(args.config) if args.config else default_config

    if args.command == "suggest":
        print_suggestions(args.players)
    elif args.command == "turn-order":
        print_turn_order(config)
    elif args.command == "new":
        engine = create_game(config, seed=args.seed, run_name=args.run_name)
        print(f"Phase: {engine.game_state.phase.value}, day {engine.game_state.day_number}")
    elif args.command == "runs":
        print_runs(config)
    elif args.command == "show":
        print_run(config, args.run_name)


if __name__ == "__main__":
    main()
