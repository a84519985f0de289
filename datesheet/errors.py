from typing import List


class SchedulingError(Exception):
    """Base class for every datesheet error."""


class InvalidRange(SchedulingError, ValueError):
    def __init__(self, start, end):
        super().__init__(f"end date {end} is before start date {start}")
        self.start = start
        self.end = end


class DuplicateDemand(SchedulingError, ValueError):
    def __init__(self, course_id: str, cohort: int):
        super().__init__(f"course {course_id} appears more than once for semester {cohort}")
        self.course_id = course_id
        self.cohort = cohort


class UnknownPlacement(SchedulingError, KeyError):
    def __init__(self, placement_id: str):
        super().__init__(placement_id)
        self.placement_id = placement_id

    def __str__(self):
        return f"no placement with id {self.placement_id!r}"


class EmptyEligibleWindow(SchedulingError):
    def __init__(self, demand_count: int):
        super().__init__(f"no working days in range; {demand_count} exam(s) cannot be scheduled")
        self.demand_count = demand_count


class SchedulingShortfall(SchedulingError):
    def __init__(self, unplaced: List, total: int):
        super().__init__(
            f"{len(unplaced)} of {total} exam(s) could not be placed. "
            "Try extending the date range or reducing gap requirements."
        )
        self.unplaced = list(unplaced)
        self.total = total
