from datetime import date

from datesheet.models import GenerationResult, GenerationStatus, ExamDemand
from datesheet.scheduling.evaluation import summary
from datesheet.scheduling.ledger import Ledger
from datesheet.scheduling.validation import (
    capacity_ok, find_violations, gaps_ok, no_double_booking_ok, working_days_ok,
)

from helpers import placement


def test_clean_ledger_has_no_violations():
    ledger = Ledger([placement("A", 1, date(2025, 1, 6), first=True), placement("B", 1, date(2025, 1, 8))])
    assert find_violations(ledger) == []
    assert no_double_booking_ok(ledger) and capacity_ok(ledger) and gaps_ok(ledger)
    assert working_days_ok(ledger)


def test_every_kind_of_violation_is_found():
    monday = date(2025, 1, 6)
    ledger = Ledger(
        [placement("A", 1, monday, first=True), placement("B", 1, monday)]
        + [placement("P", s, monday, first=True) for s in (3, 5, 7)]
        + [placement("W", 9, date(2025, 1, 11), first=True),
           placement("H", 11, date(2025, 1, 7), first=True)]
    )
    rules = {v.rule for v in find_violations(ledger, capacity=4, holidays=[date(2025, 1, 7)])}
    assert rules == {"double_booking", "capacity", "gap", "closed_day"}
    assert not working_days_ok(ledger)
    assert not capacity_ok(ledger, 4)
    assert capacity_ok(ledger, 5)


def test_first_paper_is_not_gap_checked():
    ledger = Ledger([placement("A", 1, date(2025, 1, 6), first=True),
                     placement("B", 1, date(2025, 1, 7), first=True)])
    assert gaps_ok(ledger)


def test_summary_mentions_shortfall():
    ledger = Ledger([placement("A", 1, date(2025, 1, 6), first=True)])
    result = GenerationResult(GenerationStatus.SHORTFALL, placements=ledger.placements,
                              unplaced=[ExamDemand("B", 1)], eligible_days=[date(2025, 1, 6)], sweeps=2)
    text = summary(ledger, result)
    assert "Status: shortfall" in text
    assert "Exams placed: 1 / 2" in text
    assert "B.Tech Semester 1: B" in text
