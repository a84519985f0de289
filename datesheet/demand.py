import logging
from typing import Dict, Iterable, List, Tuple

from .errors import DuplicateDemand
from .models import ExamDemand

logger = logging.getLogger(__name__)

MERGED_PREFIXES = {"BTCS-": "BT-"}


def normalize_course_code(course_id: str) -> str:
    """BTCS- and BT- codes denote the same paper."""
    for prefix, target in MERGED_PREFIXES.items():
        if course_id.startswith(prefix):
            return target + course_id[len(prefix):]
    return course_id


def _merge_group(group: List[ExamDemand]) -> ExamDemand:
    head = group[0]
    if len(group) == 1:
        return head
    teachers = [d.teacher for d in group if d.teacher]
    return ExamDemand(
        course_id=normalize_course_code(head.course_id),
        cohort=head.cohort,
        gap_days=max(d.gap_days for d in group),
        program_type=head.program_type,
        teacher=", ".join(teachers) if teachers else None,
    )


def build_demand(selections: Iterable[ExamDemand], merge_similar: bool = False) -> Dict[int, List[ExamDemand]]:
    """Stable partition of the selected demand by cohort.

    Cohorts keep the order of their first appearance and courses keep their
    relative order inside a cohort. A course listed twice for one cohort
    raises DuplicateDemand. With merge_similar, codes that normalise to the
    same paper are folded into one demand first.
    """
    by_cohort: Dict[int, List[ExamDemand]] = {}
    seen = set()
    groups: Dict[Tuple[int, str], List[ExamDemand]] = {}
    for item in selections:
        key = (item.cohort, item.course_id)
        if key in seen:
            raise DuplicateDemand(item.course_id, item.cohort)
        seen.add(key)
        if merge_similar:
            norm_key = (item.cohort, normalize_course_code(item.course_id))
            if norm_key in groups:
                groups[norm_key].append(item)
                continue
            groups[norm_key] = [item]
        by_cohort.setdefault(item.cohort, []).append(item)

    if merge_similar:
        for cohort, items in by_cohort.items():
            merged = [_merge_group(groups[(cohort, normalize_course_code(d.course_id))]) for d in items]
            by_cohort[cohort] = merged
        folded = len(seen) - sum(len(v) for v in by_cohort.values())
        if folded:
            logger.info("merged %d similar course code(s)", folded)
    return by_cohort
