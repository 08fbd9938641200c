"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .schedule_planner import (
    BreakOption,
    ScheduleGroupService,
    SchedulePlanner,
    ScheduleRow,
    ScheduleStoreProtocol,
    ShootingRequest,
    SubmissionResult,
)

__all__ = [
    "BreakOption",
    "ScheduleGroupService",
    "SchedulePlanner",
    "ScheduleRow",
    "ScheduleStoreProtocol",
    "ShootingRequest",
    "SubmissionResult",
]
