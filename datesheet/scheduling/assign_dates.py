from datetime import date
from typing import Iterable, Optional, Tuple

from ..algorithms.greedy import greedy_place
from ..demand import build_demand
from ..eligible_days import DateLike, eligible_days
from ..models import ExamDemand, GenerationResult, SchedulerConfig
from .ledger import Ledger


def assign_dates(selections: Iterable[ExamDemand], start: DateLike, end: DateLike,
                 holidays: Iterable[DateLike] = (), config: Optional[SchedulerConfig] = None,
                 merge_similar: bool = False) -> Tuple[Ledger, GenerationResult]:
    """Calendar filter -> demand sets -> greedy placement -> fresh ledger.

    Raises InvalidRange or DuplicateDemand before any placement is made.
    Shortfalls are reported on the result; the ledger holds whatever fit.
    """
    config = config or SchedulerConfig()
    days = eligible_days(start, end, holidays)
    demand = build_demand(selections, merge_similar=merge_similar)
    result = greedy_place(days, demand, config)
    return Ledger(result.placements), result


def regenerate(ledger: Ledger, selections: Iterable[ExamDemand], start: date, end: date,
               holidays: Iterable[DateLike] = (), config: Optional[SchedulerConfig] = None,
               merge_similar: bool = False) -> GenerationResult:
    """Discard the ledger's contents and refill it from a new run."""
    fresh, result = assign_dates(selections, start, end, holidays, config, merge_similar)
    ledger.replace_all(fresh)
    return result
