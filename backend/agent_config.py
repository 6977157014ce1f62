"""
Agent configuration.

Values are layered, later sources winning:

    built-in defaults < YAML file < environment (SNAKE_*) < CLI flags

The environment is expected to be populated by ``load_dotenv()`` before
``load_config`` runs, so a ``.env`` file next to the agent works too.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from domain.constants import (
    DEFAULT_ACTION,
    DEFAULT_BOARD_HEIGHT,
    DEFAULT_BOARD_WIDTH,
    SHIELD_PROBABILITY,
    SHIELD_SCORE_THRESHOLD,
    Action,
    parse_action,
)
from players.variant_registry import AVAILABLE_VARIANTS
from protocol.variants import AVAILABLE_PROTOCOLS, ProtocolVariant, get_protocol_variant

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "SNAKE_CONFIG"

ENV_VARS = {
    "agent_id": "SNAKE_AGENT_ID",
    "board_width": "SNAKE_BOARD_WIDTH",
    "board_height": "SNAKE_BOARD_HEIGHT",
    "shield_score_threshold": "SNAKE_SHIELD_THRESHOLD",
    "shield_probability": "SNAKE_SHIELD_PROBABILITY",
    "default_action": "SNAKE_DEFAULT_ACTION",
    "protocol": "SNAKE_PROTOCOL",
    "snake_has_key": "SNAKE_HAS_KEY_FIELD",
    "policy": "SNAKE_POLICY",
    "seed": "SNAKE_SEED",
    "log_level": "SNAKE_LOG_LEVEL",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(ValueError):
    """A configuration value is missing, malformed or out of range."""


@dataclass(frozen=True)
class AgentConfig:
    agent_id: Optional[int] = None
    board_width: int = DEFAULT_BOARD_WIDTH
    board_height: int = DEFAULT_BOARD_HEIGHT
    shield_score_threshold: int = SHIELD_SCORE_THRESHOLD
    shield_probability: float = SHIELD_PROBABILITY
    default_action: Action = DEFAULT_ACTION
    protocol: str = "basic"
    snake_has_key: Optional[bool] = None
    policy: str = "baseline"
    seed: Optional[int] = None
    log_level: str = "WARNING"

    @property
    def protocol_variant(self) -> ProtocolVariant:
        return get_protocol_variant(self.protocol, self.snake_has_key)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["default_action"] = self.default_action.name
        return data


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _optional(converter):
    def convert(name: str, value: Any):
        if value is None or (isinstance(value, str) and value.strip() in ("", "none", "null")):
            return None
        return converter(name, value)
    return convert


def _to_probability(name: str, value: Any) -> float:
    try:
        probability = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if not 0.0 <= probability <= 1.0:
        raise ConfigError(f"{name} must be between 0 and 1, got {probability}")
    return probability


def _to_positive_int(name: str, value: Any) -> int:
    number = _to_int(name, value)
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def _to_action(name: str, value: Any) -> Action:
    try:
        return parse_action(value)
    except ValueError as exc:
        raise ConfigError(f"{name}: {exc}") from None


def _to_choice(choices):
    def convert(name: str, value: Any) -> str:
        text = str(value).strip().lower()
        if text not in choices:
            raise ConfigError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
        return text
    return convert


def _to_log_level(name: str, value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"{name} must be one of {', '.join(sorted(LOG_LEVELS))}, got {value!r}")
    return level


CONVERTERS = {
    "agent_id": _optional(_to_int),
    "board_width": _to_positive_int,
    "board_height": _to_positive_int,
    "shield_score_threshold": _to_int,
    "shield_probability": _to_probability,
    "default_action": _to_action,
    "protocol": _to_choice(AVAILABLE_PROTOCOLS),
    "snake_has_key": _optional(_to_bool),
    "policy": _to_choice(AVAILABLE_VARIANTS),
    "seed": _optional(_to_int),
    "log_level": _to_log_level,
}


def apply_values(
    config: AgentConfig, values: Mapping[str, Any], source: str, strict: bool = True
) -> AgentConfig:
    """
    Return ``config`` updated with the recognised keys of ``values``.

    With ``strict`` off an invalid value is logged and skipped, so the other
    keys from the same source still apply.
    """
    known = {f.name for f in fields(AgentConfig)}
    updates = {}
    for key, value in values.items():
        if key not in known:
            logger.warning("Ignoring unknown config key '%s' from %s", key, source)
            continue
        try:
            updates[key] = CONVERTERS[key](key, value)
        except ConfigError as exc:
            if strict:
                raise
            logger.error("Ignoring invalid value from %s: %s", source, exc)
    return replace(config, **updates)


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping of config values."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def env_values(env: Mapping[str, str]) -> Dict[str, str]:
    return {key: env[var] for key, var in ENV_VARS.items() if var in env}


def load_config(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    strict: bool = True,
) -> AgentConfig:
    """
    Build the agent configuration from every source.

    Args:
        config_path: YAML file; falls back to $SNAKE_CONFIG when omitted
        env: Environment mapping, defaults to ``os.environ``
        overrides: Values from the command line; None entries are skipped
        strict: Raise on the first bad file or value. When False, a bad file
            or value is logged and skipped and the remaining sources apply.

    Raises:
        ConfigError: If ``strict`` and any source holds an invalid value.
    """
    env = os.environ if env is None else env
    config = AgentConfig()

    path = config_path or env.get(CONFIG_PATH_ENV)
    if path:
        try:
            file_values = load_yaml_config(Path(path))
        except ConfigError as exc:
            if strict:
                raise
            logger.error("Skipping config file: %s", exc)
            file_values = {}
        config = apply_values(config, file_values, str(path), strict)

    config = apply_values(config, env_values(env), "environment", strict)

    if overrides:
        cli_values = {key: value for key, value in overrides.items() if value is not None}
        config = apply_values(config, cli_values, "command line", strict)

    if config.agent_id is None:
        logger.warning("No agent id configured (%s); no snake will be treated as ours", ENV_VARS["agent_id"])
    return config
