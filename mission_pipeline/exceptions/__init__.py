"""Mission pipeline exception hierarchy.

Architecture:
    MissionPipelineError (base)
    ├── MissionImportError
    │   ├── MalformedInputError
    │   └── ValidationFailedError (stage, reason, waypoint/action index)
    ├── MissionExportError
    │   └── ExportInvalidFlightPlanError
    └── TranslationError
        ├── InvalidFlightPlanError
        ├── InvalidWaypointError
        ├── InvalidActionError
        └── InvalidVendorMissionError

Usage:
    from mission_pipeline.exceptions import ValidationFailedError, describe_error

    try:
        plan = service.import_document(data)
    except ValidationFailedError as error:
        show_alert(describe_error(error))
"""

from mission_pipeline.exceptions.base import MissionPipelineError
from mission_pipeline.exceptions.export_errors import (
    ExportInvalidFlightPlanError,
    MissionExportError,
)
from mission_pipeline.exceptions.handlers import (
    create_error_report,
    describe_error,
    log_pipeline_errors,
)
from mission_pipeline.exceptions.import_errors import (
    MalformedInputError,
    MissionImportError,
    ValidationFailedError,
    ValidationStage,
)
from mission_pipeline.exceptions.translation_errors import (
    InvalidActionError,
    InvalidFlightPlanError,
    InvalidVendorMissionError,
    InvalidWaypointError,
    TranslationError,
)

__all__ = [
    "ExportInvalidFlightPlanError",
    "InvalidActionError",
    "InvalidFlightPlanError",
    "InvalidVendorMissionError",
    "InvalidWaypointError",
    "MalformedInputError",
    "MissionExportError",
    "MissionImportError",
    "MissionPipelineError",
    "TranslationError",
    "ValidationFailedError",
    "ValidationStage",
    "create_error_report",
    "describe_error",
    "log_pipeline_errors",
]
