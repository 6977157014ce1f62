"""
Action emitter - writes the tick's action and guards the whole pipeline.

Whatever happens while reading, parsing or deciding, exactly one action code
followed by a newline reaches the output stream.
"""

import logging
from typing import Callable, TextIO

from domain.constants import DEFAULT_ACTION, VALID_ACTIONS, Action

logger = logging.getLogger(__name__)


def is_valid_action(action) -> bool:
    return isinstance(action, int) and not isinstance(action, bool) and action in VALID_ACTIONS


class ActionEmitter:
    def __init__(self, stream: TextIO, default_action: Action = DEFAULT_ACTION):
        self.stream = stream
        self.default_action = default_action

    def emit(self, action: Action) -> None:
        """Write one action code and flush before returning."""
        self.stream.write(f"{int(action)}\n")
        self.stream.flush()

    def run(self, decide: Callable[[], Action]) -> Action:
        """
        Call ``decide`` and emit its action, or the default action if it fails.

        Returns:
            The action that was written.
        """
        try:
            action = decide()
        except Exception as exc:  # noqa: BLE001 - every failure must still yield an action
            logger.error(
                "Decision pipeline failed (%s: %s); emitting default action %s",
                type(exc).__name__, exc, self.default_action.name,
                exc_info=True,
            )
            action = self.default_action
        else:
            if not is_valid_action(action):
                logger.error(
                    "Decision pipeline returned invalid action %r; emitting default action %s",
                    action, self.default_action.name,
                )
                action = self.default_action

        action = Action(action)
        self.emit(action)
        return action
