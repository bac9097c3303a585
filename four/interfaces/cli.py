"""
cli.py - Command-line interface for playing Four

This module provides the console driver: it reads one column per turn,
alternates the two players, prints the state after every move and stops on
the first error, win or full board. It also offers a replay command and a
small benchmark of the game core.
"""

import argparse
import io
import random
import sys
from typing import Iterable, Iterator, List, Optional

from four.debug import debug, COMPONENTS, DebugLevel
from four.game.state import GameState
from four.game.rules import is_full, is_terminal, make_turn, valid_columns
from four.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, PLAYERS, Player


def format_state(state: GameState, plain: bool = False) -> str:
    """
    Build the debug view of a game state.

    Args:
        state: The state to describe
        plain: Render the grid with ASCII glyphs instead of emoji

    Returns:
        Size, turn count, terminal status and the grid, followed by a blank line
    """
    winner = is_terminal(state)
    if winner is not None:
        terminal = f"YES (player {winner} is a winner)"
    else:
        terminal = "NO"

    lines = [
        f"size:     {state.grid_width} x {state.grid_height}",
        f"turn:     {len(state.history)}",
        f"terminal: {terminal}",
        "",
        state.render(plain=plain),
        "",
    ]
    return "\n".join(lines)


def open_input(stream):
    """
    Re-open a console stream so undecodable bytes become U+FFFD.

    Such tokens then fail column parsing like any other garbage instead of
    aborting the read. Streams without a byte buffer are returned unchanged.
    """
    buffer = getattr(stream, 'buffer', None)
    if buffer is None:
        return stream
    encoding = getattr(stream, 'encoding', None) or 'utf-8'
    return io.TextIOWrapper(buffer, encoding=encoding, errors='replace')


def read_tokens(stream) -> Iterator[str]:
    """Yield whitespace separated tokens from a text stream, line by line."""
    for line in stream:
        yield from line.split()


def parse_moves(moves: str) -> List[str]:
    """Split a comma separated move list, ignoring blanks."""
    return [move.strip() for move in moves.split(',') if move.strip()]


def parse_components(value: str) -> List[str]:
    """argparse type for --components: a comma separated subset of COMPONENTS."""
    names = parse_moves(value)
    unknown = [name for name in names if name not in COMPONENTS]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown component(s) {', '.join(unknown)}; choose from {', '.join(COMPONENTS)}")
    return names


class SimpleCLI:
    """Simple command-line interface for Four."""

    def __init__(self):
        """Initialize the CLI."""
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all subcommands."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        common.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Set debug level: none (silent) ... trace (most verbose)')
        common.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')
        common.add_argument('--components', type=parse_components, default=[],
                            help=f'Only log these components ({",".join(COMPONENTS)}); default all')

        board = argparse.ArgumentParser(add_help=False)
        board.add_argument('--width', type=int, default=DEFAULT_WIDTH,
                           help=f'Number of columns (default: {DEFAULT_WIDTH})')
        board.add_argument('--height', type=int, default=DEFAULT_HEIGHT,
                           help=f'Number of rows (default: {DEFAULT_HEIGHT})')
        board.add_argument('--ascii', action='store_true',
                           help='Render the grid with ASCII glyphs instead of emoji')

        parser = argparse.ArgumentParser(description='Four CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', parents=[common, board],
                              help='Play a game, reading one column per turn from stdin')

        show_parser = subparsers.add_parser('show', parents=[common, board],
                                            help='Replay a list of moves and show the result')
        show_parser.add_argument('--moves', type=str, required=True,
                                 help='Comma separated column indices, e.g. "3,3,4"')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common, board],
                                                 help='Benchmark the game core')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for reproducible games')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        parser = self.build_parser()
        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            level = DebugLevel.DEBUG
        else:
            level = DebugLevel[getattr(self.args, 'debug_level', 'warning').upper()]
        debug.configure(level=level,
                        log_file=getattr(self.args, 'log_file', None),
                        components=getattr(self.args, 'components', []))

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the CLI based on the parsed arguments.

        Returns:
            Process exit code
        """
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game(read_tokens(open_input(sys.stdin)))
        elif self.args.command == 'show':
            return self.show_moves()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def new_state(self) -> Optional[GameState]:
        """Create the initial state for the configured grid size."""
        state = GameState.init_state(self.args.width, self.args.height)
        if state is None:
            debug.error(f"Invalid grid size {self.args.width} x {self.args.height}", "cli")
            print("failed to initialize game state")
        return state

    def play_game(self, tokens: Iterable[str], verbose: bool = True) -> int:
        """
        Drive a game from a sequence of column tokens.

        Player ids alternate starting with the first player. The game stops on
        the first rejected move, the first win, a full board, or when the
        tokens run out.

        Args:
            tokens: Column indices as strings
            verbose: Print the state after every accepted move

        Returns:
            Process exit code
        """
        state = self.new_state()
        if state is None:
            return 1

        debug.info(f"Starting game on a {state.grid_width} x {state.grid_height} grid", "cli")
        plain = getattr(self.args, 'ascii', False)
        player = Player.ONE

        for token in tokens:
            player_id = player.value
            player = player.other()
            debug.trace(f"Read token {token!r} for player {player_id}", "cli")

            try:
                col = int(token)
            except ValueError:
                debug.warning(f"Unparseable column {token!r} from player {player_id}", "cli")
                print(f"error: invalid column index '{token}'")
                return 0

            err = make_turn(state, col, player_id)
            if err is not None:
                debug.warning(f"Rejected move by player {player_id} in column {col}: {err}", "cli")
                print(f"error: {err}")
                return 0

            row, _, _ = state.last_move
            debug.debug(f"Player {player_id} dropped into column {col} at row {row}", "cli")
            if verbose:
                print(format_state(state, plain=plain))

            winner = is_terminal(state)
            if winner is not None:
                debug.info(f"Player {winner} wins after {len(state.history)} turns", "cli")
                if not verbose:
                    print(format_state(state, plain=plain))
                print("gg")
                return 0

            if is_full(state):
                debug.info("Grid is full, game ends in a draw", "cli")
                if not verbose:
                    print(format_state(state, plain=plain))
                print("draw")
                return 0

        if not verbose:
            print(format_state(state, plain=plain))
        debug.info("Input exhausted before the game ended", "cli")
        return 0

    def show_moves(self) -> int:
        """Replay the --moves list and print only the final state."""
        return self.play_game(parse_moves(self.args.moves), verbose=False)

    def benchmark(self) -> int:
        """Benchmark the performance of the game core."""
        iterations = self.args.iterations
        if iterations <= 0:
            print("Iterations must be positive.")
            return 1

        rng = random.Random(self.args.seed)
        width, height = self.args.width, self.args.height
        if GameState.init_state(width, height) is None:
            print("failed to initialize game state")
            return 1

        print(f"Running benchmark with {iterations} iterations on a {width} x {height} grid...")

        # Benchmark state initialization
        debug.start_timer("state_init")
        for _ in range(iterations):
            GameState.init_state(width, height)
        init_time = debug.end_timer("state_init", "benchmark")
        print(f"State initialization: {init_time:.6f} seconds total, "
              f"{init_time / iterations * 1000:.6f} ms per state")

        # Benchmark full random games
        games_played = 0
        total_moves = 0
        wins = 0
        debug.start_timer("game_simulation")
        for _ in range(max(iterations // 10, 1)):
            state = GameState.init_state(width, height)
            while True:
                columns = valid_columns(state)
                if not columns:
                    break
                make_turn(state, rng.choice(columns), PLAYERS[len(state.history) % len(PLAYERS)])
                total_moves += 1
                if is_terminal(state) is not None:
                    wins += 1
                    break
            games_played += 1
            debug.trace(f"Game {games_played} ended after {len(state.history)} moves", "benchmark")
        simulation_time = debug.end_timer("game_simulation", "benchmark")
        print(f"Played {games_played} games ({wins} won) with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game, "
              f"{simulation_time / max(total_moves, 1) * 1000:.6f} ms per move")

        # Benchmark terminal checks on a mid-game state
        state = GameState.init_state(width, height)
        for _ in range(min(width * height // 2, 20)):
            columns = valid_columns(state)
            if not columns:
                break
            make_turn(state, rng.choice(columns), PLAYERS[len(state.history) % len(PLAYERS)])
        debug.start_timer("win_check")
        for _ in range(iterations):
            is_terminal(state)
        check_time = debug.end_timer("win_check", "benchmark")
        print(f"Performing {iterations} terminal checks: {check_time:.6f} seconds total, "
              f"{check_time / iterations * 1000:.6f} ms per check")

        # Benchmark rendering
        debug.start_timer("rendering")
        for _ in range(iterations):
            format_state(state, plain=self.args.ascii)
        rendering_time = debug.end_timer("rendering", "benchmark")
        print(f"Rendering state {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time / iterations * 1000:.6f} ms per render")

        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
