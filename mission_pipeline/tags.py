"""Typed mission enums and the exhaustive tables that resolve wire tags.

Tags are matched ignoring case. The persisted spelling of each member is its value;
a few short spellings are accepted as aliases. Anything else is rejected,
never mapped to a default.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import TypeVar


E = TypeVar("E", bound=StrEnum)


class FinishedAction(StrEnum):
    """What the aircraft does after the last waypoint."""

    NO_ACTION = "noAction"
    GO_HOME = "goHome"
    AUTO_LAND = "autoLand"
    GO_FIRST_WAYPOINT = "goFirstWaypoint"


class HeadingMode(StrEnum):
    """How the aircraft heading is controlled between waypoints."""

    AUTO = "auto"
    USING_INITIAL_DIRECTION = "usingInitialDirection"
    CONTROL_BY_REMOTE_CONTROLLER = "controlByRemoteController"
    USING_WAYPOINT_HEADING = "usingWaypointHeading"


class GotoFirstWaypointMode(StrEnum):
    """How the aircraft flies to the first waypoint."""

    SAFELY = "safely"
    POINT_TO_POINT = "pointToPoint"


class TurnMode(StrEnum):
    """Direction of the heading change at a waypoint."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counterClockwise"


class UnknownTagError(ValueError):
    """A string tag has no entry in its resolution table."""

    def __init__(self, field: str, value: str, allowed: list[str]) -> None:
        super().__init__(f"unknown {field} '{value}' (expected one of {', '.join(allowed)})")
        self.field = field
        self.value = value
        self.allowed = allowed


def _table(members: type[E], **aliases: E) -> Mapping[str, E]:
    table: dict[str, E] = {member.value: member for member in members}
    table.update(aliases)
    return MappingProxyType(table)


FINISHED_ACTION_TAGS: Mapping[str, FinishedAction] = _table(
    FinishedAction,
    none=FinishedAction.NO_ACTION,
    goToFirstWaypoint=FinishedAction.GO_FIRST_WAYPOINT,
)

HEADING_MODE_TAGS: Mapping[str, HeadingMode] = _table(
    HeadingMode,
    initialDirection=HeadingMode.USING_INITIAL_DIRECTION,
    rcControlled=HeadingMode.CONTROL_BY_REMOTE_CONTROLLER,
    waypointHeading=HeadingMode.USING_WAYPOINT_HEADING,
)

GOTO_FIRST_WAYPOINT_MODE_TAGS: Mapping[str, GotoFirstWaypointMode] = _table(GotoFirstWaypointMode)

TURN_MODE_TAGS: Mapping[str, TurnMode] = _table(TurnMode)


def resolve_tag(table: Mapping[str, E], value: str, field: str) -> E:
    """Resolve ``value`` through ``table``.

    Args:
        table: One of the ``*_TAGS`` tables.
        value: Tag read from the document.
        field: Wire name of the field, used in the error.

    Returns:
        The typed enum member.

    Raises:
        UnknownTagError: If the tag is not in the table under any casing.
    """
    folded = value.casefold()
    for tag, member in table.items():
        if tag.casefold() == folded:
            return member
    raise UnknownTagError(field, value, sorted(table))
