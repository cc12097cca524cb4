"""Curriculum engine errors.

Reconciliation failures are surfaced to the caller. Aggregate, progress
and gate failures are logged by the services that catch them and never
reach the client as errors.
"""

from typing import Any
from uuid import UUID

from fastapi import status

from app.core.exceptions import AppError


def _node_details(node_type: str | None, node_id: UUID | str | None) -> dict[str, Any]:
    details: dict[str, Any] = {}
    if node_type:
        details["node_type"] = node_type
    if node_id is not None:
        details["node_id"] = str(node_id)
    return details


class ReconcileError(AppError):
    """Base class for failures of an outline reconciliation."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "RECONCILE_ERROR",
        node_type: str | None = None,
        node_id: UUID | str | None = None,
    ):
        self.node_type = node_type
        self.node_id = node_id
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=_node_details(node_type, node_id),
        )


class OutlineValidationError(ReconcileError):
    """Malformed desired tree, rejected before any write (400)."""

    def __init__(
        self,
        message: str,
        node_type: str | None = None,
        node_id: UUID | str | None = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            node_type=node_type,
            node_id=node_id,
        )


class StoreWriteError(ReconcileError):
    """An upsert or delete failed; retrying with the same tree is safe (503)."""

    def __init__(
        self,
        message: str = "Failed to write the course outline",
        node_type: str | None = None,
        node_id: UUID | str | None = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="STORE_WRITE_ERROR",
            node_type=node_type,
            node_id=node_id,
        )


class StaleOutlineError(ReconcileError):
    """A newer outline submission has already been applied (409)."""

    def __init__(self, course_id: UUID):
        super().__init__(
            message="A newer outline for this course has already been saved",
            status_code=status.HTTP_409_CONFLICT,
            error_code="STALE_OUTLINE",
            node_type="course",
            node_id=course_id,
        )


class AggregateUpdateError(AppError):
    """The denormalised lecture count could not be refreshed."""

    def __init__(self, course_id: UUID):
        super().__init__(
            message="Failed to update course lecture count",
            error_code="AGGREGATE_UPDATE_ERROR",
            details={"course_id": str(course_id)},
        )


class ProgressWriteError(AppError):
    """A watch sample could not be persisted."""

    def __init__(self, lecture_id: UUID):
        super().__init__(
            message="Failed to persist watch progress",
            error_code="PROGRESS_WRITE_ERROR",
            details={"lecture_id": str(lecture_id)},
        )


class GateResolutionError(AppError):
    """The section or predecessor lecture could not be loaded."""

    def __init__(self, section_id: UUID):
        super().__init__(
            message="Failed to resolve lecture prerequisites",
            error_code="GATE_RESOLUTION_ERROR",
            details={"section_id": str(section_id)},
        )
