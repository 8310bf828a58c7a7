"""
Command-line interface for ringpuzzle.

Provides an interactive play loop, one-shot scrambles and configuration
management for the ring puzzle.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ringpuzzle.core.config import Config, load_config, validate_config
from ringpuzzle.core.registry import ENVIRONMENT_REGISTRY, RULES_REGISTRY
from ringpuzzle.game.game_core import MoveResult
from ringpuzzle.session import MoveEvent, PuzzleSession
from ringpuzzle.utils.display import LiveLogger, StatusDisplay, render_board_text
from ringpuzzle.utils.logger import SessionLogger

TRUE_WORDS = {"1", "t", "true", "cw", "+"}
FALSE_WORDS = {"0", "f", "false", "ccw", "-"}


def get_available_components() -> Dict[str, List[str]]:
    """Get dynamically registered components."""
    # Import modules to trigger registration
    import ringpuzzle.rules  # noqa: F401
    import ringpuzzle.environment  # noqa: F401

    return {
        "rules": list(RULES_REGISTRY.keys()),
        "environments": list(ENVIRONMENT_REGISTRY.keys()),
    }


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    components = get_available_components()

    parser = argparse.ArgumentParser(
        description="ringpuzzle: concentric ring sliding puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Play interactively
  ringpuzzle play --seed 7

  # Build a puzzle and print its solution
  ringpuzzle scramble --moves 5 --seed 42

  # Create and check a configuration
  ringpuzzle create-config --output config.yaml
  ringpuzzle validate-config config.yaml

Available Components:
  Rules: {', '.join(components['rules']) if components['rules'] else 'None registered'}
  Environments: {', '.join(components['environments']) if components['environments'] else 'None registered'}
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a puzzle interactively")
    play_parser.add_argument("--config", "-c", help="Path to configuration file")
    play_parser.add_argument("--seed", type=int, help="Random seed for the scramble")
    play_parser.add_argument("--save-history", action="store_true", help="Write a session log on exit")
    play_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    # Scramble command
    scramble_parser = subparsers.add_parser("scramble", help="Build one puzzle and print it")
    scramble_parser.add_argument("--config", "-c", help="Path to configuration file")
    scramble_parser.add_argument("--seed", type=int, help="Random seed for the scramble")
    scramble_parser.add_argument("--rings", type=int, help="Override ring count")
    scramble_parser.add_argument("--sets", type=int, help="Override number of piece groups")
    scramble_parser.add_argument("--moves", type=int, help="Override number of scramble moves")
    scramble_parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")

    # Create config command
    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--rules-type", choices=components['rules'] or ["origami"],
                               default="origami", help="Default rule set")
    config_parser.add_argument("--rings", type=int, default=4, help="Number of rings")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    # Validate config command
    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    # List components command
    list_parser = subparsers.add_parser("list-components", help="List available components")
    list_parser.add_argument("--type", choices=["rules", "environments", "all"], default="all",
                             help="Component type to list")
    list_parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")

    return parser


def _load_and_validate_config(config_path: Optional[str], logger: LiveLogger) -> Optional[Config]:
    """Load and validate configuration; defaults when no path is given."""
    if not config_path:
        return Config()
    try:
        logger.log_action("Loading configuration")
        config = load_config(config_path)
        logger.log_result("Configuration loaded")

        issues = validate_config(config)
        errors = [issue for issue in issues if issue.startswith("ERROR")]
        warnings = [issue for issue in issues if not issue.startswith("ERROR")]

        if errors:
            StatusDisplay.print_section("Configuration Errors")
            for error in errors:
                print(f"  {error.replace('ERROR: ', '')}")
            return None
        for warning in warnings:
            logger.log_warning(warning)
        return config

    except FileNotFoundError:
        print(f"Configuration file not found: {config_path}")
        print("Use 'ringpuzzle create-config' to create a default configuration")
        return None
    except (ValueError, yaml.YAMLError) as e:
        print(f"Configuration error: {e}")
        return None


def parse_direction(word: str) -> bool:
    """Parse a direction token such as ``cw``, ``ccw``, ``1`` or ``false``."""
    token = word.strip().lower()
    if token in TRUE_WORDS:
        return True
    if token in FALSE_WORDS:
        return False
    raise ValueError(f"Unknown direction '{word}' (use cw/ccw, true/false, 1/0)")


class PlayLoop:
    """Interactive command loop over a PuzzleSession."""

    def __init__(self, session: PuzzleSession, verbose: bool = False):
        self.session = session
        self.verbose = verbose
        if verbose:
            session.add_move_listener(self._print_move)

    def _print_move(self, event: MoveEvent) -> None:
        print(f"  {event.source.value}: {event.move} ({len(event.steps)} steps)")

    def _report(self, result: MoveResult) -> None:
        if result.success:
            print(f"✓ {result.message}")
            self.show_board()
        else:
            print(f"✗ {result.error.value}: {result.message}")

    def show_board(self) -> None:
        print(render_board_text(self.session.registry, show_status=self.session.solved is not None))
        remaining = self.session.remaining_moves
        if remaining is not None:
            print(f"Moves remaining: {remaining}")

    def show_state(self) -> None:
        print("\n=== Current State ===")
        print(f"Rings: {self.session.registry.ring_count}")
        print(f"Pieces: {len(self.session.registry)}")
        print(f"Logged moves: {len(self.session.move_log)}")
        for move in self.session.move_log:
            print(f"  {move}")
        self.show_board()

    def handle(self, line: str) -> bool:
        """Run one command line; returns False when the loop should stop."""
        parts = line.strip().lower().split()
        if not parts:
            return True
        command = parts[0]

        if command == "help":
            self.show_help()

        elif command in ("spin", "shift"):
            if len(parts) < 3:
                print(f"Usage: {command} <{'ring' if command == 'spin' else 'column'}> <direction>")
            else:
                axis = int(parts[1])
                direction = parse_direction(parts[2])
                if command == "spin":
                    self._report(self.session.request_spin(axis, direction))
                else:
                    self._report(self.session.request_shift(axis, direction))

        elif command == "undo":
            self._report(self.session.undo())

        elif command == "undo-all":
            count = self.session.undo_all()
            print(f"✓ Undid {count} moves")
            self.show_board()

        elif command == "check":
            if self.session.check_solve():
                print("\n🎉 PUZZLE SOLVED! 🎉")
            else:
                print("Not solved yet")
            self.show_board()

        elif command == "solve":
            played = self.session.solve()
            if played:
                print(f"✓ Played {played} solution moves")
            else:
                print("✗ No solution available")
            self.show_board()

        elif command in ("reset", "new"):
            seed = int(parts[1]) if len(parts) > 1 else None
            moves = self.session.new_puzzle(seed=seed)
            print(f"\n=== New puzzle: {moves} moves to solve ===")
            self.show_board()

        elif command in ("state", "view"):
            self.show_state()

        elif command in ("quit", "exit"):
            print("Goodbye!")
            return False

        else:
            print(f"Unknown command: {command}")
            print("Type 'help' for commands")
        return True

    def run(self) -> None:
        print("=== Ring Puzzle ===")
        print("Type 'help' for commands")
        self.show_board()

        while True:
            try:
                line = input("\n> ")
            except EOFError:
                break
            try:
                if not self.handle(line):
                    break
            except KeyboardInterrupt:
                print("\nUse 'quit' to exit")
            except ValueError as e:
                print(f"Error: {e}")

    def show_help(self) -> None:
        print("""
Available commands:
  help                    - Show this help
  spin <ring> <dir>       - Spin a ring (dir: cw/ccw)
  shift <column> <dir>    - Shift a column 0-5 (dir: true/false; true moves
                            positions 0-5 outward and 6-11 inward)
  undo                    - Undo the last move
  undo-all                - Undo every move
  check                   - Check whether the puzzle is solved
  solve                   - Undo everything and play back the solution
  reset [seed]            - Build a new puzzle
  state                   - Show pieces and the move log
  quit/exit               - Exit the game
        """)


def play_command(args) -> int:
    """Execute play command."""
    logger = LiveLogger(verbose=getattr(args, 'verbose', False))

    config = _load_and_validate_config(args.config, logger)
    if config is None:
        return 1
    if args.save_history:
        config.logging.save_history = True

    session = PuzzleSession(config)
    session.new_puzzle(seed=args.seed if args.seed is not None else getattr(config.rules, "seed", None))

    session_logger = None
    if config.logging.save_history:
        session_logger = SessionLogger(config.logging.log_dir, config.logging.experiment_name)
        session_logger.attach(session, verbose=config.logging.verbose)

    try:
        PlayLoop(session, verbose=args.verbose).run()
    finally:
        if session_logger is not None:
            log_file = session_logger.save_logs()
            logger.log_info(f"Session log saved to: {log_file}")
    return 0


def scramble_command(args) -> int:
    """Execute scramble command."""
    logger = LiveLogger(verbose=args.format == "table")

    config = _load_and_validate_config(args.config, logger)
    if config is None:
        return 1

    try:
        if args.rings is not None:
            config.board.ring_count = args.rings
        if args.sets is not None:
            config.rules.max_sets = args.sets
        if args.moves is not None:
            config.rules.max_moves = args.moves

        session = PuzzleSession(config)
        logger.log_action("Building puzzle", f"seed={args.seed}")
        moves = session.new_puzzle(seed=args.seed)
    except (ValueError, RuntimeError) as e:
        logger.log_error(f"Failed to build puzzle: {e}")
        if args.format == "json":
            print(json.dumps({"error": str(e)}))
        return 1

    solution = list(getattr(session.rules, "solve_log", []))
    if args.format == "json":
        print(json.dumps({
            "moves_to_solve": moves,
            "pieces": [p.to_dict() for p in session.registry],
            "scramble": [m.to_dict() for m in solution],
            "solution": [m.inverted().to_dict() for m in reversed(solution)],
        }, indent=2))
        return 0

    StatusDisplay.print_header("Scrambled Puzzle")
    print(render_board_text(session.registry))
    StatusDisplay.print_section("Solution")
    for i, move in enumerate(reversed(solution), 1):
        print(f"  {i}. {move.inverted()}")
    StatusDisplay.print_results({
        "Rings": session.registry.ring_count,
        "Pieces": len(session.registry),
        "Moves To Solve": moves,
    }, "Summary")
    return 0


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)

    try:
        StatusDisplay.print_header("Creating Configuration File")

        if Path(args.output).exists() and not args.force:
            logger.log_warning(f"Configuration file already exists: {args.output}")
            if not StatusDisplay.ask_confirmation("Overwrite existing file?"):
                logger.log_info("Configuration creation cancelled")
                return 0

        logger.log_action("Creating configuration")
        config = Config.from_dict({
            "board": {"ring_count": args.rings},
            "rules": {"type": args.rules_type},
        })

        with open(args.output, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

        logger.log_result(f"Configuration created: {args.output}")
        StatusDisplay.print_results({
            "Output File": args.output,
            "Rules Type": args.rules_type,
            "Rings": args.rings,
        }, "Configuration Summary")
        logger.log_info("Validate it with: ringpuzzle validate-config " + args.output)
        return 0

    except (OSError, ValueError) as e:
        logger.log_error(f"Failed to create config: {e}")
        return 1


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)

    try:
        StatusDisplay.print_header("Configuration Validation")

        logger.log_action(f"Loading configuration from: {args.config}")
        config = load_config(args.config)
        logger.log_result("Configuration loaded successfully")

        StatusDisplay.print_config({
            "Rules": config.rules.type,
            "Rings": config.board.ring_count,
            "Environment": config.environment.type,
            "Log Dir": config.logging.log_dir,
        }, "Configuration Overview")

        issues = validate_config(config)
        errors = [issue for issue in issues if issue.startswith("ERROR")]
        warnings = [issue for issue in issues if not issue.startswith("ERROR")]

        if args.strict and warnings:
            errors.extend(warnings)
            warnings = []

        if errors:
            StatusDisplay.print_section("❌ Configuration Errors")
            for i, error in enumerate(errors, 1):
                logger.log_error(f"{i}. {error.replace('ERROR: ', '')}")
            StatusDisplay.print_results({
                "Status": "❌ FAILED",
                "Errors Found": len(errors),
                "Warnings Found": len(warnings),
            }, "Validation Summary")
            return 1

        if warnings:
            StatusDisplay.print_section("⚠️  Configuration Warnings")
            for i, warning in enumerate(warnings, 1):
                logger.log_warning(f"{i}. {warning}")
        StatusDisplay.print_results({
            "Status": "✓ VALID" + (" (with warnings)" if warnings else ""),
            "Warnings Found": len(warnings),
        }, "Validation Summary")
        return 0

    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        return 1
    except (ValueError, yaml.YAMLError) as e:
        logger.log_error(f"Failed to validate config: {e}")
        return 1


def list_components_command(args) -> int:
    """Execute list-components command."""
    components = get_available_components()
    if args.type != "all":
        components = {args.type: components.get(args.type, [])}

    if args.format == "json":
        print(json.dumps(components, indent=2))
        return 0

    StatusDisplay.print_header("Available Components")
    for comp_type, comp_list in components.items():
        StatusDisplay.print_section(comp_type.title())
        for comp in comp_list:
            print(f"  • {comp}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    # Route to appropriate command handler
    command_handlers = {
        "play": play_command,
        "scramble": scramble_command,
        "create-config": create_config_command,
        "validate-config": validate_config_command,
        "list-components": list_components_command,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
