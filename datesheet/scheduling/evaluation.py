from typing import Iterable, Optional

from ..models import GenerationResult, SchedulerConfig
from ..semesters import semester_label
from .ledger import Ledger
from .validation import capacity_ok, gaps_ok, no_double_booking_ok, working_days_ok


def _busiest_day(ledger: Ledger):
    by_date = ledger.by_date()
    if not by_date:
        return None, 0
    d = max(by_date, key=lambda k: len(by_date[k]))
    return d, len(by_date[d])


def summary(ledger: Ledger, result: GenerationResult, holidays: Iterable = (),
            config: Optional[SchedulerConfig] = None) -> str:
    config = config or SchedulerConfig()
    holidays = list(holidays)
    dates_used = len(ledger.by_date())
    busiest, busiest_n = _busiest_day(ledger)
    span = ""
    if len(ledger):
        placements = ledger.placements
        span = f"First exam: {placements[0].date}  Last exam: {placements[-1].date}\n"
    shortfall = ""
    if result.unplaced:
        lines = [f"  {semester_label(c)}: {', '.join(courses)}"
                 for c, courses in result.unplaced_by_cohort().items()]
        shortfall = (
            f"Warning: {len(result.unplaced)} exam(s) could not be placed; "
            "widen the date range or relax gap settings.\n" + "\n".join(lines) + "\n"
        )
    return (
        f"Status: {result.status.value}\n"
        f"Eligible days: {len(result.eligible_days)}  Used: {dates_used}  Sweeps: {result.sweeps}\n"
        f"Exams placed: {len(ledger)} / {result.total_demand}  Capacity per day: {config.capacity}\n"
        f"{span}"
        f"Busiest day: {busiest or '-'} ({busiest_n})\n"
        f"Valid (cohort clash): {no_double_booking_ok(ledger)}  "
        f"Valid (capacity): {capacity_ok(ledger, config.capacity)}  "
        f"Valid (gaps): {gaps_ok(ledger)}  "
        f"Valid (working days): {working_days_ok(ledger, holidays)}\n"
        f"{shortfall}"
    )
