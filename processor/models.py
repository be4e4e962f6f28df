"""Data models for poll processing."""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class Attendance(Enum):
    """A participant's availability on one date."""
    NONE = 0
    IF_NEED_BE = 1
    OK = 2


@dataclass(frozen=True)
class Participant:
    """One response to a poll."""
    name: str
    availability: Mapping[str, Attendance] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only copy, detached from the caller's dict
        object.__setattr__(
            self, 'availability', MappingProxyType(dict(self.availability))
        )

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.availability.items())))

    def attendance_on(self, date: str) -> Attendance:
        """Return the attendance for a date, NONE if the date is not listed."""
        return self.availability.get(date, Attendance.NONE)


@dataclass(frozen=True)
class PollResult:
    """Decoded poll document."""
    name: str
    description: str
    dates: Tuple[str, ...]
    responses: Tuple[Participant, ...]
