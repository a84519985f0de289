import logging
import math
from collections import deque
from datetime import date
from typing import Deque, Dict, List, Optional, Sequence

from ..models import (
    ExamDemand, GenerationResult, GenerationStatus, Placement, SchedulerConfig,
)
from ..scheduling.time_slots import day_of_week, time_slot

logger = logging.getLogger(__name__)


def _place(item: ExamDemand, d: date, first: bool, config: SchedulerConfig) -> Placement:
    return Placement(
        id=Placement.make_id(item.course_id, item.cohort),
        course_id=item.course_id,
        cohort=item.cohort,
        date=d,
        day_of_week=day_of_week(d),
        time_slot=time_slot(d, config),
        gap_days=item.gap_days,
        is_first_paper=first,
        program_type=item.program_type,
    )


def eligible_cohorts(d: date, queues: Dict[int, Deque[ExamDemand]], last_date: Dict[int, date],
                     booked: Dict[date, set]) -> List[int]:
    """Cohorts allowed to sit an exam on d, in queue order.

    The required gap is that of the cohort's next unplaced course.
    """
    out = []
    for cohort, queue in queues.items():
        if not queue or cohort in booked.get(d, ()):
            continue
        prev = last_date.get(cohort)
        if prev is not None and (d - prev).days < queue[0].gap_days:
            continue
        out.append(cohort)
    return out


def greedy_place(days: Sequence[date], demand: Dict[int, List[ExamDemand]],
                 config: Optional[SchedulerConfig] = None) -> GenerationResult:
    """Sweep working days in order, giving each eligible cohort its next exam.

    A day takes at most config.capacity exams, one per cohort. The sweep is
    repeated while demand remains and the previous pass placed something.
    """
    config = config or SchedulerConfig()
    days = list(days)
    queues: Dict[int, Deque[ExamDemand]] = {c: deque(items) for c, items in demand.items()}
    total = sum(len(q) for q in queues.values())

    if not days:
        logger.warning("no eligible days; %d exam(s) cannot be scheduled", total)
        return GenerationResult(GenerationStatus.EMPTY_WINDOW,
                                unplaced=[d for q in queues.values() for d in q])

    needed = math.ceil(total / config.capacity)
    if len(days) < needed:
        logger.warning("%d eligible day(s) cannot hold %d exam(s) at %d per day",
                       len(days), total, config.capacity)
        return GenerationResult(GenerationStatus.SHORTFALL,
                                unplaced=[d for q in queues.values() for d in q],
                                eligible_days=days)

    placements: List[Placement] = []
    last_date: Dict[int, date] = {}
    booked: Dict[date, set] = {}
    per_day: Dict[date, int] = {}
    sweeps = 0
    remaining = total

    while remaining:
        sweeps += 1
        progressed = False
        for d in days:
            room = config.capacity - per_day.get(d, 0)
            if room <= 0:
                continue
            for cohort in eligible_cohorts(d, queues, last_date, booked)[:room]:
                item = queues[cohort].popleft()
                first = cohort not in last_date
                placements.append(_place(item, d, first, config))
                last_date[cohort] = d
                booked.setdefault(d, set()).add(cohort)
                per_day[d] = per_day.get(d, 0) + 1
                remaining -= 1
                progressed = True
                logger.debug("%s: placed %s for semester %d%s", d, item.course_id, cohort,
                             " (first paper)" if first else "")
        if not progressed:
            break

    unplaced = [d for q in queues.values() for d in q]
    status = GenerationStatus.SHORTFALL if unplaced else GenerationStatus.COMPLETE
    if unplaced:
        logger.warning("placed %d of %d exam(s) after %d sweep(s)", len(placements), total, sweeps)
    else:
        logger.info("placed all %d exam(s) over %d eligible day(s)", total, len(days))
    placements.sort(key=lambda p: p.date)
    return GenerationResult(status, placements=placements, unplaced=unplaced,
                            eligible_days=days, sweeps=sweeps)
