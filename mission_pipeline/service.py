"""Mission service: the external entry points of the pipeline.

The service holds configuration only. Every call is an independent,
synchronous transformation, so one instance can serve many missions.

Usage:
    service = MissionService()
    plan = service.import_document(path.read_bytes())
    vendor_mission = service.translate(plan)
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from mission_pipeline.config import Settings, get_settings
from mission_pipeline.document.models import MissionDocument
from mission_pipeline.document.validator import validate_document
from mission_pipeline.envelopes import DEFAULT_ENVELOPES, StageEnvelopes
from mission_pipeline.exceptions.export_errors import ExportInvalidFlightPlanError
from mission_pipeline.exceptions.handlers import log_pipeline_errors
from mission_pipeline.exceptions.import_errors import MalformedInputError, ValidationFailedError
from mission_pipeline.hardware import DEFAULT_HARDWARE_PROFILE, HardwareProfile, SetupReport
from mission_pipeline.hardware import check_personal_setup as check_setup
from mission_pipeline.logging.context import mission_scope, set_mission_context
from mission_pipeline.plan.canonicalizer import canonicalize, to_document
from mission_pipeline.plan.models import FlightPlan
from mission_pipeline.plan.validator import validate_flight_plan
from mission_pipeline.safety import battery_warnings, gps_warnings
from mission_pipeline.templates.builders import TemplateKind, TemplateParams, build_template
from mission_pipeline.vendor.models import VendorMission
from mission_pipeline.vendor.translator import lower_basic, lower_enhanced

logger = logging.getLogger(__name__)

STATISTICS_TAGS = ("enhanced", "calculated")


def _parse(data: bytes | str) -> MissionDocument:
    try:
        return MissionDocument.model_validate_json(data)
    except ValidationError as error:
        raise MalformedInputError(
            f"Mission document could not be parsed ({error.error_count()} errors)",
            context={
                "errors": error.errors(
                    include_url=False, include_context=False, include_input=False
                )
            },
        ) from error


class MissionService:
    """Import, export, translate and build missions.

    Args:
        envelopes: Numeric bounds of each validation stage.
        hardware_profile: Aircraft and regulation limits for setup checks.
        settings: Pipeline settings; defaults to the cached environment settings.
    """

    def __init__(
        self,
        envelopes: StageEnvelopes = DEFAULT_ENVELOPES,
        hardware_profile: HardwareProfile = DEFAULT_HARDWARE_PROFILE,
        settings: Settings | None = None,
    ) -> None:
        self._envelopes = envelopes
        self._hardware_profile = hardware_profile
        self._settings = settings or get_settings()

    @property
    def envelopes(self) -> StageEnvelopes:
        return self._envelopes

    @property
    def settings(self) -> Settings:
        return self._settings

    @log_pipeline_errors(logger)
    def parse_document(self, data: bytes | str) -> MissionDocument:
        """Parse JSON into a mission document without validating ranges.

        Raises:
            MalformedInputError: If the input is not JSON or does not have the
                document structure.
        """
        return _parse(data)

    @log_pipeline_errors(logger)
    def import_document(self, data: bytes | str) -> FlightPlan:
        """Parse, validate and canonicalize a mission document.

        Args:
            data: UTF-8 JSON mission document.

        Returns:
            The validated flight plan.

        Raises:
            MalformedInputError: If the input cannot be parsed.
            ValidationFailedError: The first validation failure, from either
                the document or the flight plan stage.
        """
        with mission_scope(operation="import"):
            document = _parse(data)
            set_mission_context(mission=document.metadata.name)
            validate_document(document, self._envelopes)
            plan = canonicalize(document)
            validate_flight_plan(plan, self._envelopes.flight_plan)
            logger.info(
                "Imported mission with %d waypoints",
                len(plan.waypoints),
                extra={"total_distance_meters": round(plan.total_distance, 1)},
            )
            return plan

    @log_pipeline_errors(logger)
    def export_document(
        self,
        plan: FlightPlan,
        name: str,
        description: str | None = None,
        tags: Sequence[str] = (),
        include_statistics: bool | None = None,
    ) -> MissionDocument:
        """Rebuild a mission document from a flight plan.

        Args:
            plan: Plan to export. It is validated first.
            name: Mission name.
            description: Optional free text.
            tags: Metadata tags.
            include_statistics: Append a statistics block to the description and
                the ``enhanced``/``calculated`` tags. Defaults to the
                ``include_export_statistics`` setting.

        Raises:
            ExportInvalidFlightPlanError: If the plan fails validation.
        """
        with mission_scope(operation="export", mission=name):
            try:
                validate_flight_plan(plan, self._envelopes.flight_plan)
            except ValidationFailedError as error:
                raise ExportInvalidFlightPlanError(
                    error.reason, context=dict(error.context)
                ) from error

            if include_statistics is None:
                include_statistics = self._settings.include_export_statistics
            tags = tuple(tags)
            if include_statistics:
                description = self._statistics_description(plan, description)
                tags += tuple(tag for tag in STATISTICS_TAGS if tag not in tags)

            document = to_document(
                plan,
                name,
                description=description,
                tags=tags,
                author=self._settings.default_author,
                schema_version=self._settings.schema_version,
            )
            logger.info("Exported mission with %d waypoints", len(plan.waypoints))
            return document

    def serialize_document(self, document: MissionDocument) -> str:
        """Render a document as stable, pretty-printed JSON with sorted keys."""
        return json.dumps(document.to_json_dict(), indent=2, sort_keys=True)

    @log_pipeline_errors(logger)
    def translate(self, plan: FlightPlan, name: str = "") -> VendorMission:
        """Lower a flight plan to a vendor mission with a photo at every waypoint.

        Raises:
            InvalidFlightPlanError: If the plan fails validation.
            TranslationError: If the lowered mission leaves the vendor envelope.
        """
        with mission_scope(operation="translate", mission=name):
            return lower_basic(plan, self._envelopes, name=name)

    @log_pipeline_errors(logger)
    def translate_enhanced(self, document: MissionDocument) -> VendorMission:
        """Lower a mission document action by action.

        Raises:
            TranslationError: If a tag, action or value cannot be lowered.
        """
        with mission_scope(operation="translate_enhanced", mission=document.metadata.name):
            return lower_enhanced(document, self._envelopes)

    @log_pipeline_errors(logger)
    def build_template(
        self,
        kind: TemplateKind | str,
        params: TemplateParams | Mapping[str, Any] | None = None,
        *,
        as_flight_plan: bool = False,
    ) -> MissionDocument | FlightPlan:
        """Build one of the named mission templates.

        Test locations and development defaults come from the hardware profile.
        """
        with mission_scope(operation="build_template", template=str(kind)):
            return build_template(
                kind,
                params,
                as_flight_plan=as_flight_plan,
                envelopes=self._envelopes,
                hardware_profile=self._hardware_profile,
            )

    def check_personal_setup(self, plan: FlightPlan) -> SetupReport:
        """Check a plan against the configured hardware profile."""
        return check_setup(
            plan, self._hardware_profile, self._settings.action_overhead_seconds
        )

    def battery_warnings(self, level: int) -> list[str]:
        """Battery warnings using the profile's warning level."""
        return battery_warnings(level, self._hardware_profile.defaults.battery_warning_level)

    def gps_warnings(self, level: int) -> list[str]:
        """GPS warnings using the profile's minimum signal level."""
        return gps_warnings(level, self._hardware_profile.defaults.gps_minimum_level)

    def _statistics_description(self, plan: FlightPlan, description: str | None) -> str:
        minutes = plan.flight_time_with_overhead(self._settings.action_overhead_seconds) / 60
        lines = [
            "Mission Statistics:",
            f"- Total waypoints: {len(plan.waypoints)}",
            f"- Estimated distance: {plan.total_distance:.0f}m",
            f"- Estimated flight time: {minutes:.1f} minutes",
            f"- Generated by {self._settings.default_author} v{self._settings.schema_version}",
        ]
        statistics = "\n".join(lines)
        if description:
            return f"{description}\n\n{statistics}"
        return statistics
