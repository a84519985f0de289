from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from .errors import EmptyEligibleWindow, SchedulingShortfall

DEFAULT_GAP_DAYS = 2
DEFAULT_CAPACITY = 4


@dataclass
class SchedulerConfig:
    capacity: int = DEFAULT_CAPACITY       # max exams on one calendar day
    short_weekday: int = 4                 # date.weekday() of the reduced-duration day (Friday)
    short_slot: str = "11:00 AM - 1:30 PM"
    standard_slot: str = "12:00 PM - 2:30 PM"
    default_gap_days: int = DEFAULT_GAP_DAYS

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if not 0 <= self.short_weekday <= 6:
            raise ValueError("short_weekday must be in 0..6")


@dataclass(frozen=True)
class ExamDemand:
    course_id: str
    cohort: int                        # semester number
    gap_days: int = DEFAULT_GAP_DAYS
    program_type: str = "B.Tech"       # informational only
    teacher: Optional[str] = None

    def __post_init__(self):
        if not str(self.course_id).strip():
            raise ValueError("course_id must not be empty")
        if self.gap_days < 0:
            raise ValueError(f"gap_days must be non-negative, got {self.gap_days} for {self.course_id}")


@dataclass(frozen=True)
class Placement:
    id: str
    course_id: str
    cohort: int
    date: date
    day_of_week: str
    time_slot: str
    gap_days: int = DEFAULT_GAP_DAYS
    is_first_paper: bool = False
    program_type: str = "B.Tech"

    @staticmethod
    def make_id(course_id: str, cohort: int) -> str:
        return f"S{cohort}:{course_id}"


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str = ""
    recurring: bool = False


class GenerationStatus(Enum):
    COMPLETE = "complete"
    SHORTFALL = "shortfall"
    EMPTY_WINDOW = "empty_window"


@dataclass
class GenerationResult:
    status: GenerationStatus
    placements: List[Placement] = field(default_factory=list)
    unplaced: List[ExamDemand] = field(default_factory=list)
    eligible_days: List[date] = field(default_factory=list)
    sweeps: int = 0

    @property
    def total_demand(self) -> int:
        return len(self.placements) + len(self.unplaced)

    @property
    def ok(self) -> bool:
        return self.status is GenerationStatus.COMPLETE

    def unplaced_by_cohort(self) -> Dict[int, List[str]]:
        out: Dict[int, List[str]] = {}
        for d in self.unplaced:
            out.setdefault(d.cohort, []).append(d.course_id)
        return out

    def raise_for_status(self):
        """Raise when the run did not place every demand item."""
        if self.status is GenerationStatus.EMPTY_WINDOW:
            raise EmptyEligibleWindow(len(self.unplaced))
        if self.status is GenerationStatus.SHORTFALL:
            raise SchedulingShortfall(self.unplaced, self.total_demand)
        return self


class MoveRejection(Enum):
    COHORT_CONFLICT = "CohortConflict"
    DAY_FULL = "DayFull"
    GAP_VIOLATION = "GapViolation"


@dataclass
class MoveResult:
    accepted: bool
    message: str
    reason: Optional[MoveRejection] = None
    before: Optional[Placement] = None
    after: Optional[Placement] = None
    overridden: bool = False
    # rules broken by an accepted override move
    violations: List[MoveRejection] = field(default_factory=list)
