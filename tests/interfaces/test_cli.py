"""
Tests for four.interfaces.cli

Drives the console commands with scripted input.
"""

import io

import pytest

from four.debug import debug, DebugLevel
from four.game.rules import make_turn
from four.game.state import GameState
from four.interfaces.cli import SimpleCLI, format_state, main, parse_moves, read_tokens


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the shared debug manager at its default level between tests."""
    yield
    debug.configure(level=DebugLevel.WARNING, log_file="", components=[])


def run_play(monkeypatch, text: str, *args: str) -> int:
    monkeypatch.setattr('sys.stdin', io.StringIO(text))
    return main(['play', *args])


class TestFormatState:
    """Debug view tests."""

    def test_empty_state(self):
        game = GameState.init_state(3, 2)
        assert format_state(game, plain=True) == "\n".join([
            "size:     3 x 2",
            "turn:     0",
            "terminal: NO",
            "",
            game.render(plain=True),
            "",
        ])

    def test_winner_reported(self):
        game = GameState.init_state(5, 5)
        for col in range(4):
            make_turn(game, col, 2)
        text = format_state(game)
        assert "turn:     4" in text
        assert "terminal: YES (player 2 is a winner)" in text


class TestInputParsing:
    """Token reading tests."""

    def test_read_tokens_across_lines(self):
        assert list(read_tokens(io.StringIO("1 2\n\n 3\t4\n"))) == ["1", "2", "3", "4"]

    def test_parse_moves(self):
        assert parse_moves("3, 3,,4 ") == ["3", "3", "4"]


class TestPlay:
    """Interactive play tests."""

    def test_horizontal_win_ends_game(self, monkeypatch, capsys):
        code = run_play(monkeypatch, "0 9 1 9 2 9 3 5 5\n")
        out = capsys.readouterr().out

        assert code == 0
        assert out.rstrip().endswith("gg")
        assert "terminal: YES (player 1 is a winner)" in out
        assert "turn:     7" in out
        assert "turn:     8" not in out

    def test_players_alternate(self, monkeypatch, capsys):
        run_play(monkeypatch, "0 0\n", '--width', '3', '--height', '2', '--ascii')
        out = capsys.readouterr().out

        assert "|X . .|" in out
        assert "|O . .|" in out

    def test_out_of_range_column(self, monkeypatch, capsys):
        code = run_play(monkeypatch, "3 10 4\n")
        out = capsys.readouterr().out

        assert code == 0
        assert out.rstrip().endswith("error: column index is outside of the grid range")
        assert "turn:     2" not in out

    def test_negative_column(self, monkeypatch, capsys):
        run_play(monkeypatch, "-1\n")
        assert "error: column index is outside of the grid range" in capsys.readouterr().out

    def test_full_column(self, monkeypatch, capsys):
        run_play(monkeypatch, "0 0 0\n", '--width', '4', '--height', '2')
        out = capsys.readouterr().out
        assert out.rstrip().endswith(
            "error: token cannot be placed in a given column as it's full or does not exist")

    def test_non_integer_input(self, monkeypatch, capsys):
        run_play(monkeypatch, "2 x 3\n")
        out = capsys.readouterr().out
        assert out.rstrip().endswith("error: invalid column index 'x'")
        assert "turn:     1" in out

    def test_undecodable_input(self, monkeypatch, capsys):
        stdin = io.TextIOWrapper(io.BytesIO(b"1 \xff 2\n"), encoding="utf-8")
        monkeypatch.setattr('sys.stdin', stdin)
        code = main(['play'])
        out = capsys.readouterr().out

        assert code == 0
        assert out.rstrip().endswith("error: invalid column index '\ufffd'")
        assert "turn:     1" in out
        assert "turn:     2" not in out

    def test_draw(self, monkeypatch, capsys):
        code = run_play(monkeypatch, "0 1 0 1\n", '--width', '2', '--height', '2')
        out = capsys.readouterr().out
        assert code == 0
        assert out.rstrip().endswith("draw")

    def test_input_exhausted(self, monkeypatch, capsys):
        code = run_play(monkeypatch, "1 2\n")
        out = capsys.readouterr().out
        assert code == 0
        assert "gg" not in out
        assert "turn:     2" in out

    @pytest.mark.parametrize("args", [
        ['--width', '0'],
        ['--height', '0'],
        ['--width', '-2'],
    ])
    def test_invalid_grid_size(self, monkeypatch, capsys, args):
        code = run_play(monkeypatch, "0\n", *args)
        assert code == 1
        assert capsys.readouterr().out.strip() == "failed to initialize game state"


class TestShow:
    """Replay command tests."""

    def test_prints_final_state_only(self, capsys):
        code = main(['show', '--moves', '3,3,4', '--width', '7', '--height', '6', '--ascii'])
        out = capsys.readouterr().out

        assert code == 0
        assert out.count("size:") == 1
        assert "size:     7 x 6" in out
        assert "turn:     3" in out
        assert "|. . . X X . .|" in out
        assert "|. . . O . . .|" in out

    def test_stops_at_winner(self, capsys):
        main(['show', '--moves', '0,1,0,1,0,1,0,1,0'])
        out = capsys.readouterr().out
        assert "terminal: YES (player 1 is a winner)" in out
        assert "turn:     7" in out
        assert out.rstrip().endswith("gg")

    def test_reports_error(self, capsys):
        main(['show', '--moves', '0,42'])
        assert "error: column index is outside of the grid range" in capsys.readouterr().out


class TestBenchmark:
    """Benchmark command tests."""

    def test_runs(self, capsys):
        code = main(['benchmark', '--iterations', '20', '--seed', '7', '--width', '7', '--height', '6'])
        out = capsys.readouterr().out

        assert code == 0
        assert "Running benchmark with 20 iterations on a 7 x 6 grid" in out
        assert "terminal checks" in out

    def test_rejects_bad_iterations(self, capsys):
        assert main(['benchmark', '--iterations', '0']) == 1


class TestArguments:
    """Argument handling tests."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "Please specify a command" in capsys.readouterr().out

    def test_debug_flag_sets_level(self):
        cli = SimpleCLI()
        cli.parse_args(['show', '--moves', '1', '--debug'])
        assert debug.level == DebugLevel.DEBUG

    def test_debug_level_option(self):
        cli = SimpleCLI()
        cli.parse_args(['show', '--moves', '1', '--debug_level', 'info'])
        assert debug.level == DebugLevel.INFO

    def test_components_option(self):
        cli = SimpleCLI()
        cli.parse_args(['show', '--moves', '1', '--components', 'benchmark'])
        assert debug.components == {"benchmark"}
        assert not debug.enabled_for(DebugLevel.ERROR, "cli")

    def test_unknown_component(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['show', '--moves', '1', '--components', 'cli,ai'])
        assert exc.value.code == 2
        assert "unknown component(s) ai" in capsys.readouterr().err

    def test_trace_log_limited_to_components(self, monkeypatch, tmp_path):
        log_path = tmp_path / "play.log"
        run_play(monkeypatch, "4 x\n", '--debug_level', 'trace',
                 '--log_file', str(log_path), '--components', 'cli')
        text = log_path.read_text()

        assert "TRACE: [cli] Read token '4' for player 1" in text
        assert "[cli] Player 1 dropped into column 4 at row 9" in text
        assert "Unparseable column 'x'" in text

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc:
            main(['fly'])
        assert exc.value.code == 2
