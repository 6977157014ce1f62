"""
Per-tick entry point: read one snapshot, decide, emit one action.

The engine starts this process once per tick, feeds the snapshot on stdin
and reads a single integer from stdout. Diagnostics go to stderr only, and
the exit status is 0 on every path.

Usage:

    SNAKE_AGENT_ID=2023000000 python main.py < snapshot.txt
    python main.py --agent-id 2023000000 --protocol extended --policy heuristic
"""

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from dotenv import load_dotenv

from action_emitter import ActionEmitter
from agent_config import AgentConfig, load_config
from domain.constants import Action
from players.random_source import SystemRandomSource
from players.variant_registry import get_player_class
from protocol.reader import ProtocolReader

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class AgentArgumentParser(argparse.ArgumentParser):
    """Writes help to stderr; stdout carries only the action."""

    def print_help(self, file=None):
        super().print_help(file or sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = AgentArgumentParser(
        description="Decide one snake action for the tick snapshot read from stdin."
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config file (defaults to $SNAKE_CONFIG)")
    parser.add_argument("--input", type=str, default=None,
                        help="Read the snapshot from this file instead of stdin")
    parser.add_argument("--agent-id", dest="agent_id", default=None,
                        help="Snake id that identifies our own snake")
    parser.add_argument("--width", dest="board_width", default=None,
                        help="Board width (bound of the first coordinate)")
    parser.add_argument("--height", dest="board_height", default=None,
                        help="Board height (bound of the second coordinate)")
    parser.add_argument("--protocol", default=None,
                        help="Protocol variant: basic or extended")
    parser.add_argument("--policy", default=None,
                        help="Decision policy: baseline or heuristic")
    parser.add_argument("--shield-threshold", dest="shield_score_threshold", default=None,
                        help="Minimum score needed to use the shield")
    parser.add_argument("--shield-probability", dest="shield_probability", default=None,
                        help="Chance of a pre-emptive shield when it is available")
    parser.add_argument("--default-action", dest="default_action", default=None,
                        help="Action emitted when anything fails (name or code)")
    parser.add_argument("--seed", default=None,
                        help="Seed for the random source")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        help="Logging level for stderr diagnostics")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Optional[argparse.Namespace]:
    """Parse CLI arguments; on a usage error fall back to no overrides."""
    parser = build_parser()
    try:
        return parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code == 0:
            return None
        logger.error("Invalid command line %s; continuing with defaults", list(argv or sys.argv[1:]))
        return parser.parse_args([])


def read_snapshot(input_path: Optional[str], stdin: TextIO) -> str:
    if input_path:
        with open(input_path, "r", encoding="utf-8") as f:
            return f.read()
    return stdin.read()


def run_tick(
    config: AgentConfig,
    stdin: TextIO,
    stdout: TextIO,
    input_path: Optional[str] = None,
    rng=None,
) -> Action:
    """
    Run the whole pipeline for one tick and emit exactly one action.

    Args:
        config: Agent configuration
        stdin: Stream holding the snapshot (ignored when input_path is set)
        stdout: Primary output channel
        input_path: Optional file holding the snapshot
        rng: RandomSource override, mainly for tests

    Returns:
        The action written to stdout.
    """
    emitter = ActionEmitter(stdout, config.default_action)

    def decide() -> Action:
        reader = ProtocolReader(
            config.protocol_variant, config.agent_id, config.board_width, config.board_height
        )
        player_class = get_player_class(config.policy)
        player = player_class(
            rng=rng or SystemRandomSource(config.seed),
            shield_threshold=config.shield_score_threshold,
            shield_probability=config.shield_probability,
        )

        world = reader.read(read_snapshot(input_path, stdin))
        logger.debug("Parsed %r", world)

        decision = player.get_move(world)
        logger.info(
            "Tick %d: %s via %s (safe: %s)",
            world.remaining_ticks,
            decision.action.name,
            decision.state.value,
            [d.name for d in decision.safe_directions],
        )
        return decision.action

    return emitter.run(decide)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)

    args = parse_args(argv)
    if args is None:
        return 0

    load_dotenv()

    overrides = {
        key: value for key, value in vars(args).items() if key not in ("config", "input")
    }
    try:
        config = load_config(config_path=args.config, overrides=overrides, strict=False)
    except Exception:  # noqa: BLE001
        logger.error("Could not load configuration; using built-in defaults", exc_info=True)
        config = AgentConfig()

    logging.getLogger().setLevel(config.log_level)
    logger.debug("Config: %s", config.to_dict())

    run_tick(config, sys.stdin, sys.stdout, input_path=args.input)
    return 0


if __name__ == "__main__":
    sys.exit(main())
