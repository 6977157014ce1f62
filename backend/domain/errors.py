"""
Exceptions raised while turning a tick snapshot into an action.

Missing self is not an error: a world without an owned snake is a normal
state and shows up as ``WorldState.my_snake is None``.
"""


class AgentError(Exception):
    """Base class for agent failures."""


class MalformedInput(AgentError, ValueError):
    """The tick snapshot does not follow the configured schema."""


class EmptyBodyAccess(AgentError, LookupError):
    """A head was requested from a snake that has no body segments."""
