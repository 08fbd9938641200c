"""
Schedule store persisting booking rows to a local JSON file.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from ..domain.exceptions import ScheduleStoreError
from ..services.schedule_planner import ScheduleRow

logger = logging.getLogger(__name__)


class JsonFileScheduleStore:
    """
    Appends booking rows to a JSON array on disk.

    The file is created on first insert. Ids continue from the highest id
    already present in the file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[ScheduleRow]:
        """Read all stored rows; an absent file means no rows yet."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ScheduleStoreError(f"Could not read schedule file {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise ScheduleStoreError(f"Schedule file {self.path} must contain a JSON array.")

        try:
            return [ScheduleRow(**item) for item in data]
        except (TypeError, ValidationError) as exc:
            raise ScheduleStoreError(f"Invalid schedule row in {self.path}: {exc}") from exc

    async def insert_many(self, rows: Sequence[ScheduleRow]) -> List[ScheduleRow]:
        existing = self.load()
        next_id = max((row.id or 0 for row in existing), default=0) + 1

        stored: List[ScheduleRow] = []
        for offset, row in enumerate(rows):
            stored.append(row.model_copy(update={"id": next_id + offset}))

        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    [row.model_dump() for row in existing + stored],
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
        except OSError as exc:
            raise ScheduleStoreError(f"Could not write schedule file {self.path}: {exc}") from exc

        logger.debug("Wrote %d rows to %s", len(stored), self.path)
        return stored
