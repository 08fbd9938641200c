"""
In-memory schedule store for tests and dry runs.
"""

from typing import List, Sequence

from ..services.schedule_planner import ScheduleRow


class InMemoryScheduleStore:
    """
    Keeps inserted rows in a list and assigns incremental ids.

    Mirrors the behaviour of a real table insert: rows come back with ids,
    the inputs are left untouched.
    """

    def __init__(self):
        self.rows: List[ScheduleRow] = []
        self._next_id = 1

    async def insert_many(self, rows: Sequence[ScheduleRow]) -> List[ScheduleRow]:
        stored: List[ScheduleRow] = []
        for row in rows:
            stored.append(row.model_copy(update={"id": self._next_id}))
            self._next_id += 1
        self.rows.extend(stored)
        return stored

    def find_group(self, schedule_group_id: str) -> List[ScheduleRow]:
        """Return all rows of a group ordered by sequence."""
        return sorted(
            (row for row in self.rows if row.schedule_group_id == schedule_group_id),
            key=lambda row: row.sequence_order,
        )
