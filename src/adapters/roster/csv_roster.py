"""
CSV roster adapter - Implements RosterLookup protocol.

Reads the append-only roster export (header row: roll_number, batch,
branch, position, club_dept) and returns the profile for a roll number.
The file is read on every lookup so appended rows are visible without a
restart. A missing or unreadable file yields no profile.
"""

import csv
import logging
from pathlib import Path

from src.domain.ports import RosterProfile

logger = logging.getLogger(__name__)


class CsvRosterLookup:
    """Implements RosterLookup protocol over a CSV file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def lookup(self, roll_number: int) -> RosterProfile | None:
        wanted = str(roll_number)
        try:
            with self._path.open(newline="", encoding="utf-8") as f:
                for row in csv.DictReader(f):
                    if (row.get("roll_number") or "").strip() == wanted:
                        return RosterProfile(
                            batch=_field(row, "batch"),
                            branch=_field(row, "branch"),
                            position=_field(row, "position"),
                            club_dept=_field(row, "club_dept"),
                        )
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            logger.warning("Roster lookup failed for %s: %s", self._path, e)
            return None
        return None


def _field(row: dict[str, str | None], name: str) -> str | None:
    value = (row.get(name) or "").strip()
    return value or None
