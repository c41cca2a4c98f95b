"""Root of the mission pipeline exception hierarchy.

Subclasses declare an ``error_code`` and build their ``context`` in
``__init__``; this class renders messages and keeps the code registry.
"""

from typing import Any, ClassVar


class MissionPipelineError(Exception):
    """Base exception for every import, export and translation failure.

    Failures are recoverable: nothing is partially applied when one is raised,
    so callers may fix the input and retry.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, unique per subclass.
        context: Structured fields such as stage, field name and indices.
    """

    error_code: ClassVar[str] = "PIPELINE_ERROR"

    _registry: ClassVar[dict[str, type["MissionPipelineError"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry[cls.error_code] = cls

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        # Subclasses replace this with the bare rule text.
        self.reason = message

    @property
    def location(self) -> str | None:
        """One-based position of the offending item, e.g. ``"Waypoint 3, Action 1"``."""
        parts = []
        waypoint_index = self.context.get("waypoint_index")
        if isinstance(waypoint_index, int):
            parts.append(f"Waypoint {waypoint_index + 1}")
        action_index = self.context.get("action_index")
        if isinstance(action_index, int):
            parts.append(f"Action {action_index + 1}")
        return ", ".join(parts) or None

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form for reports and files."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }

    def to_log_dict(self) -> dict[str, Any]:
        """Fields attached to the log record of a rejected call."""
        log_dict = self.to_dict()
        log_dict["exception_type"] = type(self).__name__
        if self.location is not None:
            log_dict["location"] = self.location
        return log_dict

    @classmethod
    def for_error_code(cls, error_code: str) -> type["MissionPipelineError"] | None:
        """Return the subclass registered under ``error_code``, if any."""
        return cls._registry.get(error_code)

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.message} ({self.location})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
