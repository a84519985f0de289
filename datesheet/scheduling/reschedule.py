import logging
from datetime import date
from typing import List, Optional

from ..models import MoveRejection, MoveResult, Placement, SchedulerConfig
from ..semesters import semester_label
from .ledger import Ledger
from .time_slots import day_of_week

logger = logging.getLogger(__name__)

REASON_TEXT = {
    MoveRejection.COHORT_CONFLICT: "{sem} already has an exam on {day}",
    MoveRejection.DAY_FULL: "{day} already holds {cap} exams",
    MoveRejection.GAP_VIOLATION: "{course} needs {gap} day(s) after the previous {sem} exam",
}


def _fmt(d: date) -> str:
    return f"{d.isoformat()} ({day_of_week(d)})"


def check_move(ledger: Ledger, p: Placement, new_date: date, config: SchedulerConfig) -> List[MoveRejection]:
    """Every rule moving p to new_date would break, in checking order."""
    broken = []
    others_that_day = [o for o in ledger.on_date(new_date) if o.id != p.id]
    if any(o.cohort == p.cohort for o in others_that_day):
        broken.append(MoveRejection.COHORT_CONFLICT)
    if len(others_that_day) >= config.capacity:
        broken.append(MoveRejection.DAY_FULL)
    if not p.is_first_paper:
        others = [o for o in ledger.for_cohort(p.cohort) if o.id != p.id]
        if others:
            latest = others[-1]
            if (new_date - latest.date).days < p.gap_days:
                broken.append(MoveRejection.GAP_VIOLATION)
    return broken


def move(ledger: Ledger, placement_id: str, new_date: date, override_rules: bool = False,
         config: Optional[SchedulerConfig] = None) -> MoveResult:
    """Validate and apply a manual move of one placement.

    On rejection the ledger is left exactly as it was. With override_rules
    the move always goes through and any rules it breaks are recorded on
    the result. Raises UnknownPlacement for an id not in the ledger.
    """
    config = config or SchedulerConfig()
    before = ledger.get(placement_id)
    broken = check_move(ledger, before, new_date, config)
    sem = semester_label(before.cohort)

    if broken and not override_rules:
        reason = broken[0]
        text = REASON_TEXT[reason].format(sem=sem, day=_fmt(new_date), cap=config.capacity,
                                          course=before.course_id, gap=before.gap_days)
        logger.info("rejected move of %s to %s: %s", placement_id, new_date, reason.value)
        return MoveResult(False, f"Cannot move {before.course_id}: {text}", reason=reason, before=before)

    after = ledger.apply_move(placement_id, new_date, config)
    message = f"Moved {before.course_id} ({sem}) from {_fmt(before.date)} to {_fmt(after.date)}"
    if override_rules:
        message += " [rules overridden]"
    if broken:
        logger.warning("override move of %s to %s breaks %s", placement_id, new_date,
                       ", ".join(b.value for b in broken))
    else:
        logger.info(message)
    return MoveResult(True, message, before=before, after=after,
                      overridden=override_rules, violations=broken)
