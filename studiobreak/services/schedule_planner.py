"""
Application services turning shooting requests into booking rows.

The planner applies the user's break-time choice to a request using the
domain-level ``BreakTimeCalculator``; the group service hands the resulting
rows to a store. Persistence sits behind a small protocol so the in-memory
store can stand in for the real database in tests.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence

import pendulum
from pendulum import DateTime
from pydantic import BaseModel, field_validator, model_validator

from ..domain.break_calculator import BreakTimeCalculator
from ..domain.exceptions import ScheduleStoreError, ScheduleValidationError
from ..domain.models import BreakWindow, ConflictResult, SplitResult
from ..domain.time_utils import is_valid_time, time_to_minutes

logger = logging.getLogger(__name__)


FIRST_SHOOT_TAG = "[1차 촬영]"
SECOND_SHOOT_TAG = "[2차 촬영]"
CONTINUOUS_SHOOT_TAG = "[연속 촬영]"

BREAK_OPTION_REQUIRED = "break time handling must be chosen"

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class BreakOption(str, Enum):
    """How the user wants a booking that collides with a break to be handled."""
    NONE = "none"
    SKIP = "skip"
    SPLIT = "split"


class ShootingRequest(BaseModel):
    """A shooting booking as submitted from the request form."""
    professor_name: str
    shoot_date: str
    start_time: str
    end_time: str
    shooting_type: str
    preferred_studio_id: Optional[int] = None
    course_name: str = ""
    course_code: str = ""
    notes: str = ""

    @field_validator("professor_name", "shooting_type")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("shoot_date")
    @classmethod
    def validate_shoot_date(cls, v: str) -> str:
        if not _DATE_PATTERN.fullmatch(v):
            raise ValueError(f"shoot_date must be YYYY-MM-DD, got {v!r}")
        try:
            return pendulum.from_format(v, "YYYY-MM-DD").to_date_string()
        except ValueError as exc:
            raise ValueError(f"shoot_date must be YYYY-MM-DD, got {v!r}") from exc

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(f"Time must be zero-padded HH:MM, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_time_order(self) -> "ShootingRequest":
        if time_to_minutes(self.end_time) <= time_to_minutes(self.start_time):
            raise ValueError("end_time must be later than start_time")
        return self


class ScheduleRow(BaseModel):
    """A booking row ready to be persisted."""
    id: Optional[int] = None
    professor_name: str
    shoot_date: str
    start_time: str
    end_time: str
    shooting_type: str
    course_name: str = ""
    course_code: str = ""
    schedule_group_id: str
    sequence_order: int = 1
    is_split_schedule: bool = False
    break_time_enabled: bool = False
    break_start_time: Optional[str] = None
    break_end_time: Optional[str] = None
    break_duration_minutes: int = 0
    schedule_type: str = "studio"
    approval_status: str = "pending"
    team_id: int = 1
    sub_location_id: Optional[int] = None
    is_active: bool = True
    notes: str = ""


class SubmissionResult(BaseModel):
    """What the caller gets back after a request was stored."""
    success: bool
    message: str
    schedule_count: int
    rows: List[ScheduleRow]


class ScheduleStoreProtocol(Protocol):
    """Protocol describing the persistence behaviour needed by the service."""

    async def insert_many(self, rows: Sequence[ScheduleRow]) -> List[ScheduleRow]:
        """Persist the rows and return them as stored."""


def _join_notes(notes: str, tag: str) -> str:
    return f"{notes} {tag}".strip()


class SchedulePlanner:
    """
    Builds booking rows from a request and a break-time choice.

    - NONE: only valid when the booking does not touch a break
    - SKIP: one continuous booking, the break is recorded but worked through
    - SPLIT: one booking before and one after the break, same group
    """

    def __init__(
        self,
        calculator: BreakTimeCalculator,
        team_id: int = 1,
        clock: Callable[[], DateTime] = pendulum.now,
    ) -> None:
        self._calculator = calculator
        self._team_id = team_id
        self._clock = clock

    def detect_conflict(self, request: ShootingRequest) -> ConflictResult:
        return self._calculator.check_conflict(request.start_time, request.end_time)

    def preview_split(self, request: ShootingRequest, break_window: BreakWindow) -> SplitResult:
        return self._calculator.calculate_split(request.start_time, request.end_time, break_window)

    def effective_minutes(
        self,
        request: ShootingRequest,
        break_window: Optional[BreakWindow] = None
    ) -> int:
        return self._calculator.effective_work_minutes(
            request.start_time, request.end_time, break_window
        )

    def validate(
        self,
        request: ShootingRequest,
        option: BreakOption,
        conflict: Optional[ConflictResult] = None,
    ) -> List[str]:
        """Return user-facing problems that block planning, empty if none."""
        errors: List[str] = []
        conflict = conflict if conflict is not None else self.detect_conflict(request)

        if conflict.has_conflict and option is BreakOption.NONE:
            errors.append(BREAK_OPTION_REQUIRED)

        return errors

    def plan(
        self,
        request: ShootingRequest,
        option: BreakOption,
        break_window: Optional[BreakWindow] = None,
    ) -> List[ScheduleRow]:
        """
        Turn a request into one or two booking rows.

        Args:
            request: The validated shooting request
            option: The user's break-time choice
            break_window: Break to apply; defaults to the suggested conflict window

        Returns:
            Rows sharing one schedule group id

        Raises:
            ScheduleValidationError: If the request cannot be planned as chosen
        """
        conflict = self.detect_conflict(request)
        errors = self.validate(request, option, conflict)
        if errors:
            raise ScheduleValidationError(errors)

        if option is not BreakOption.NONE and break_window is None:
            break_window = conflict.suggested_break

        group_id = self._make_group_id(request)

        if option is BreakOption.SPLIT and break_window is not None:
            split = self.preview_split(request, break_window)
            if split.needs_split:
                rows = self._split_rows(request, split, group_id)
                logger.info("Planned %d split rows for group %s", len(rows), group_id)
                return rows

        row = self._single_row(request, option, break_window, group_id)
        logger.info("Planned single row for group %s", group_id)
        return [row]

    def _split_rows(
        self,
        request: ShootingRequest,
        split: SplitResult,
        group_id: str
    ) -> List[ScheduleRow]:
        schedules = split.schedules()
        if not schedules:
            raise ScheduleValidationError(
                [f"booking {request.start_time}-{request.end_time} lies entirely within the break"]
            )

        break_window = split.break_window
        if len(schedules) == 1:
            logger.info(
                "Booking %s-%s keeps only %s around break %s",
                request.start_time,
                request.end_time,
                schedules[0],
                break_window,
            )

        # Tags follow the side of the break, not the row position.
        parts = [
            (interval, tag)
            for interval, tag in (
                (split.first_schedule, FIRST_SHOOT_TAG),
                (split.second_schedule, SECOND_SHOOT_TAG),
            )
            if interval is not None
        ]
        rows: List[ScheduleRow] = []

        for sequence_order, (interval, tag) in enumerate(parts, 1):
            rows.append(
                self._base_row(request, group_id).model_copy(
                    update={
                        "start_time": interval.start,
                        "end_time": interval.end,
                        "sequence_order": sequence_order,
                        "is_split_schedule": True,
                        "break_time_enabled": True,
                        "break_start_time": break_window.start_time,
                        "break_end_time": break_window.end_time,
                        "break_duration_minutes": break_window.duration_minutes,
                        "notes": _join_notes(request.notes, tag),
                    }
                )
            )

        return rows

    def _single_row(
        self,
        request: ShootingRequest,
        option: BreakOption,
        break_window: Optional[BreakWindow],
        group_id: str,
    ) -> ScheduleRow:
        row = self._base_row(request, group_id)
        if option is BreakOption.SKIP and break_window is not None:
            return row.model_copy(
                update={
                    "break_time_enabled": True,
                    "break_start_time": break_window.start_time,
                    "break_end_time": break_window.end_time,
                    "break_duration_minutes": break_window.duration_minutes,
                    "notes": _join_notes(request.notes, CONTINUOUS_SHOOT_TAG),
                }
            )
        return row

    def _base_row(self, request: ShootingRequest, group_id: str) -> ScheduleRow:
        return ScheduleRow(
            professor_name=request.professor_name,
            shoot_date=request.shoot_date,
            start_time=request.start_time,
            end_time=request.end_time,
            shooting_type=request.shooting_type,
            course_name=request.course_name,
            course_code=request.course_code,
            schedule_group_id=group_id,
            team_id=self._team_id,
            sub_location_id=request.preferred_studio_id,
            notes=request.notes.strip(),
        )

    def _make_group_id(self, request: ShootingRequest) -> str:
        millis = int(self._clock().float_timestamp * 1000)
        return f"{request.professor_name}_{request.shoot_date}_{millis}"


class ScheduleGroupService:
    """
    Orchestrates planning and persistence of a booking group.
    """

    def __init__(self, planner: SchedulePlanner, store: ScheduleStoreProtocol) -> None:
        self._planner = planner
        self._store = store

    async def submit(
        self,
        request: ShootingRequest,
        option: BreakOption,
        break_window: Optional[BreakWindow] = None,
    ) -> SubmissionResult:
        """Plan the rows for a request and insert them in one batch."""
        rows = self._planner.plan(request, option, break_window)

        try:
            stored = await self._store.insert_many(rows)
        except ScheduleStoreError:
            logger.warning("Storing %d rows for %s failed", len(rows), request.professor_name)
            raise
        except OSError as exc:
            logger.warning("Storing %d rows for %s failed: %s", len(rows), request.professor_name, exc)
            raise ScheduleStoreError(f"Could not store schedule rows: {exc}") from exc

        if len(stored) > 1:
            message = f"schedule split into {len(stored)} bookings"
        elif stored and stored[0].is_split_schedule:
            kept = stored[0]
            message = (
                f"schedule trimmed to {kept.start_time}-{kept.end_time} "
                f"around the {kept.break_start_time}-{kept.break_end_time} break"
            )
        else:
            message = "schedule registered"

        return SubmissionResult(
            success=True,
            message=message,
            schedule_count=len(stored),
            rows=stored,
        )
