"""
Tests for main.py - one full tick from stdin to stdout.

These run the real CLI entry point with patched standard streams and check
exactly what reaches the primary output channel.
"""

import io
import os
import re
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import main  # noqa: E402
from agent_config import ENV_VARS, AgentConfig  # noqa: E402
from domain import Action  # noqa: E402

AGENT_ID = "2023000000"

WALL_ON_LEFT = """\
100
1
5 4 -4
1
2023000000 3 0 2 0 0
5 5
5 6
5 7
"""

BOXED_IN_WITH_SHIELD = """\
100
4
5 4 -4
4 5 -4
5 6 -4
6 5 -4
1
2023000000 1 25 2 0 0
5 5
"""

EXTENDED_TICK = """\
90
1
5 9 3 40
1
2023000000 1 0 2 0 0 0
5 5
0
0
0 0 39 29
-1 0 0 39 29
-1 0 0 39 29
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda: None)
    for var in list(ENV_VARS.values()) + ["SNAKE_CONFIG"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SNAKE_AGENT_ID", AGENT_ID)


def run_main(monkeypatch, capsys, snapshot, argv=()):
    monkeypatch.setattr(sys, "stdin", io.StringIO(snapshot))
    exit_code = main.main(list(argv))
    return exit_code, capsys.readouterr().out


class TestTickScenarios:
    """End-to-end behaviour on the primary output channel."""

    def test_empty_world_emits_one_direction(self, monkeypatch, capsys):
        for seed in range(20):
            exit_code, out = run_main(monkeypatch, capsys, "10 0 0", ["--seed", str(seed)])
            assert exit_code == 0
            assert re.fullmatch(r"[0-3]\n", out)

    def test_wall_on_left_is_never_chosen(self, monkeypatch, capsys):
        for seed in range(50):
            _, out = run_main(monkeypatch, capsys, WALL_ON_LEFT, ["--seed", str(seed)])
            assert re.fullmatch(r"[0-4]\n", out)
            assert out != "0\n"

    def test_boxed_in_with_shield_always_shields(self, monkeypatch, capsys):
        for seed in range(20):
            _, out = run_main(monkeypatch, capsys, BOXED_IN_WITH_SHIELD, ["--seed", str(seed)])
            assert out == "4\n"

    def test_malformed_input_emits_default(self, monkeypatch, capsys):
        exit_code, out = run_main(monkeypatch, capsys, "10 zero 0")
        assert exit_code == 0
        assert out == "2\n"

    def test_truncated_input_emits_configured_default(self, monkeypatch, capsys):
        monkeypatch.setenv("SNAKE_DEFAULT_ACTION", "up")
        _, out = run_main(monkeypatch, capsys, "10 2 5 5 1")
        assert out == "1\n"

    def test_extended_protocol_with_heuristic(self, monkeypatch, capsys):
        _, out = run_main(
            monkeypatch, capsys, EXTENDED_TICK,
            ["--protocol", "extended", "--policy", "heuristic", "--seed", "1"],
        )
        # Food lies to the RIGHT of the head
        assert out == "2\n"

    def test_input_file(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "tick.txt"
        path.write_text(BOXED_IN_WITH_SHIELD, encoding="utf-8")
        _, out = run_main(monkeypatch, capsys, "", ["--input", str(path)])
        assert out == "4\n"

    def test_missing_input_file_emits_default(self, monkeypatch, capsys, tmp_path):
        exit_code, out = run_main(monkeypatch, capsys, "", ["--input", str(tmp_path / "nope.txt")])
        assert exit_code == 0
        assert out == "2\n"


class TestFailureBoundary:
    """Configuration and command-line problems never stop an action from being emitted."""

    def test_invalid_value_keeps_other_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("SNAKE_DEFAULT_ACTION", "up")
        monkeypatch.setenv("SNAKE_SHIELD_PROBABILITY", "often")
        exit_code, out = run_main(monkeypatch, capsys, "oops")
        assert exit_code == 0
        assert out == "1\n"

    def test_invalid_seed_keeps_agent_id(self, monkeypatch, capsys):
        monkeypatch.setenv("SNAKE_SEED", "abc")
        for _ in range(20):
            _, out = run_main(monkeypatch, capsys, WALL_ON_LEFT)
            # Still recognised as our snake, so the wall is avoided
            assert re.fullmatch(r"[1-4]\n", out)

    def test_undecodable_config_file_still_emits(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "agent.yaml"
        path.write_bytes(b"agent_id: \xff\xfe\n")
        monkeypatch.setenv("SNAKE_DEFAULT_ACTION", "down")
        exit_code, out = run_main(monkeypatch, capsys, "oops", ["--config", str(path)])
        assert exit_code == 0
        assert out == "3\n"

    def test_unexpected_config_error_still_emits(self, monkeypatch, capsys):
        def broken_load_config(**kwargs):
            raise RuntimeError("config backend exploded")

        monkeypatch.setattr(main, "load_config", broken_load_config)
        exit_code, out = run_main(monkeypatch, capsys, "oops")
        assert exit_code == 0
        assert out == "2\n"

    def test_help_goes_to_stderr(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))
        assert main.main(["--help"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "usage" in captured.err

    def test_unknown_cli_flag_still_emits(self, monkeypatch, capsys):
        exit_code, out = run_main(monkeypatch, capsys, "oops", ["--bogus"])
        assert exit_code == 0
        assert out == "2\n"

    def test_cli_overrides_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("SNAKE_DEFAULT_ACTION", "up")
        _, out = run_main(monkeypatch, capsys, "oops", ["--default-action", "down"])
        assert out == "3\n"

    def test_diagnostics_stay_off_stdout(self, monkeypatch, capsys):
        _, out = run_main(monkeypatch, capsys, "oops", ["--log-level", "DEBUG"])
        assert out == "2\n"


class TestRunTick:
    def test_uses_injected_random_source(self):
        class FirstChoice:
            def randint(self, a, b):
                return b

            def choice(self, options):
                return options[0]

        out = io.StringIO()
        config = AgentConfig(agent_id=int(AGENT_ID))
        action = main.run_tick(config, io.StringIO(WALL_ON_LEFT), out, rng=FirstChoice())

        # LEFT is a wall and RIGHT is our own body, so UP is the first safe option
        assert action == Action.UP
        assert out.getvalue() == "1\n"
