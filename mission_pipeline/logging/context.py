"""Context variables for mission-scoped logging data.

Each import or translation runs inside a mission scope so that log lines from
every stage carry the same run id and mission name. Context variables keep
concurrent translations of independent missions apart.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

run_id: ContextVar[str] = ContextVar("run_id", default="")

_mission_context: ContextVar[dict[str, Any] | None] = ContextVar("mission_context", default=None)


def get_run_id() -> str:
    """Return the run id of the current context, or an empty string."""
    return run_id.get()


def set_run_id(value: str) -> None:
    """Set the run id for the current context."""
    run_id.set(value)


def generate_run_id() -> str:
    """Generate and set a new run id.

    Returns:
        The generated run id.
    """
    new_id = uuid4().hex[:12]
    run_id.set(new_id)
    return new_id


def get_mission_context() -> dict[str, Any]:
    """Return a copy of the fields attached to every log line."""
    context = _mission_context.get()
    if context is None:
        return {}
    return context.copy()


def set_mission_context(**kwargs: Any) -> None:
    """Attach fields (mission name, stage, template kind) to every log line."""
    current = _mission_context.get()
    current = {} if current is None else current.copy()
    current.update(kwargs)
    _mission_context.set(current)


def clear_context() -> None:
    """Clear the run id and all mission fields."""
    run_id.set("")
    _mission_context.set(None)


@contextmanager
def mission_scope(**fields: Any) -> Iterator[str]:
    """Run a block with a fresh run id and the given mission fields.

    The previous context is restored on exit, so scopes nest.

    Args:
        **fields: Fields to attach, e.g. ``mission="Grid Survey Mission"``.

    Yields:
        The run id of the scope.
    """
    run_token = run_id.set(uuid4().hex[:12])
    merged = get_mission_context()
    merged.update(fields)
    context_token = _mission_context.set(merged)
    try:
        yield run_id.get()
    finally:
        _mission_context.reset(context_token)
        run_id.reset(run_token)
