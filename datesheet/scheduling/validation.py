from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from ..eligible_days import as_date, is_weekend
from ..models import DEFAULT_CAPACITY, Placement
from .ledger import Ledger


@dataclass(frozen=True)
class Violation:
    rule: str            # double_booking | capacity | gap | closed_day
    date: date
    detail: str
    placement_id: Optional[str] = None


def double_booking_violations(ledger: Ledger) -> List[Violation]:
    out = []
    seen = {}
    for p in ledger:
        key = (p.cohort, p.date)
        if key in seen:
            out.append(Violation("double_booking", p.date,
                                 f"{seen[key]} and {p.course_id} share semester {p.cohort}", p.id))
        else:
            seen[key] = p.course_id
    return out


def capacity_violations(ledger: Ledger, capacity: int = DEFAULT_CAPACITY) -> List[Violation]:
    counts = Counter(p.date for p in ledger)
    return [Violation("capacity", d, f"{n} exams exceed capacity {capacity}")
            for d, n in sorted(counts.items()) if n > capacity]


def gap_violations(ledger: Ledger) -> List[Violation]:
    out = []
    for cohort in ledger.cohorts():
        prev: Optional[Placement] = None
        for p in ledger.for_cohort(cohort):
            if prev is not None and not p.is_first_paper:
                elapsed = (p.date - prev.date).days
                if elapsed < p.gap_days:
                    out.append(Violation("gap", p.date,
                                         f"{p.course_id} is {elapsed} day(s) after {prev.course_id}, "
                                         f"needs {p.gap_days}", p.id))
            prev = p
    return out


def closed_day_violations(ledger: Ledger, holidays: Iterable = ()) -> List[Violation]:
    closed = {as_date(h) for h in holidays}
    out = []
    for p in ledger:
        if is_weekend(p.date):
            out.append(Violation("closed_day", p.date, f"{p.course_id} falls on a weekend", p.id))
        elif p.date in closed:
            out.append(Violation("closed_day", p.date, f"{p.course_id} falls on a holiday", p.id))
    return out


def find_violations(ledger: Ledger, capacity: int = DEFAULT_CAPACITY, holidays: Iterable = ()) -> List[Violation]:
    return (double_booking_violations(ledger) + capacity_violations(ledger, capacity)
            + gap_violations(ledger) + closed_day_violations(ledger, holidays))


def no_double_booking_ok(ledger: Ledger) -> bool:
    return not double_booking_violations(ledger)


def capacity_ok(ledger: Ledger, capacity: int = DEFAULT_CAPACITY) -> bool:
    return not capacity_violations(ledger, capacity)


def gaps_ok(ledger: Ledger) -> bool:
    return not gap_violations(ledger)


def working_days_ok(ledger: Ledger, holidays: Iterable = ()) -> bool:
    return not closed_day_violations(ledger, holidays)
