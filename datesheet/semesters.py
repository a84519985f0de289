from typing import Iterable, List, Optional

BTECH_SEMESTERS = 8


def btech_semesters(semester_type: str) -> List[int]:
    return [1, 3, 5, 7] if semester_type == "odd" else [2, 4, 6, 8]


def mtech_semesters(semester_type: str) -> List[int]:
    return [9, 11] if semester_type == "odd" else [10, 12]


def all_semesters(semester_type: str) -> List[int]:
    if semester_type not in ("odd", "even"):
        raise ValueError("semester_type must be 'odd' or 'even'")
    return btech_semesters(semester_type) + mtech_semesters(semester_type)


def semester_label(semester: int) -> str:
    """M.Tech semesters are numbered after the eight B.Tech ones."""
    if semester <= BTECH_SEMESTERS:
        return f"B.Tech Semester {semester}"
    return f"M.Tech Semester {semester - BTECH_SEMESTERS}"


def detect_semester_type(semesters: Iterable[int]) -> Optional[str]:
    """Return 'odd' or 'even' when every semester shares a parity, else None."""
    seen = set(semesters)
    has_odd = any(s % 2 == 1 for s in seen)
    has_even = any(s % 2 == 0 for s in seen)
    if has_odd and not has_even:
        return "odd"
    if has_even and not has_odd:
        return "even"
    return None
