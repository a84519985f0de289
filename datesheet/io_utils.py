import csv
import dataclasses
import io
import os
from datetime import date, datetime
from typing import IO, Dict, Iterable, List, Optional, Union

import pandas as pd

from .models import DEFAULT_GAP_DAYS, ExamDemand, Holiday, Placement, SchedulerConfig
from .scheduling.ledger import Ledger
from .scheduling.time_slots import day_of_week, time_slot

TextOrPath = Union[str, os.PathLike, IO]

LEDGER_COLUMNS = [
    "id", "course_id", "semester", "exam_date", "day_of_week",
    "time_slot", "gap_days", "is_first_paper", "program_type",
]


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _rows(src: TextOrPath) -> List[Dict[str, str]]:
    f, should_close = _open_text(src)
    try:
        reader = csv.DictReader(f)
        rows = []
        for row in reader:
            row = {(k or '').strip(): (v or '').strip() for k, v in row.items()}
            if any(row.values()):
                rows.append(row)
        return rows
    finally:
        if should_close:
            f.close()


def parse_date(text: str) -> date:
    """ISO date; a trailing time component is ignored."""
    text = text.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return datetime.fromisoformat(text).date()


def parse_bool(text: str) -> bool:
    return text.strip().lower() in ('1', 'true', 'yes', 'y')


def load_demand(src: TextOrPath, default_gap: int = DEFAULT_GAP_DAYS) -> List[ExamDemand]:
    """CSV with course_id,semester[,gap_days,program_type,teacher]."""
    out: List[ExamDemand] = []
    for row in _rows(src):
        gap = row.get('gap_days', '')
        out.append(ExamDemand(
            course_id=row['course_id'],
            cohort=int(row['semester']),
            gap_days=int(gap) if gap else default_gap,
            program_type=row.get('program_type') or "B.Tech",
            teacher=row.get('teacher') or None,
        ))
    return out


def load_holidays(src: TextOrPath) -> List[Holiday]:
    """CSV with date[,name,recurring]."""
    return [
        Holiday(date=parse_date(row['date']), name=row.get('name', ''),
                recurring=parse_bool(row.get('recurring', '')))
        for row in _rows(src)
    ]


def mark_first_papers(placements: Iterable[Placement]) -> List[Placement]:
    """Flag the earliest placement of each cohort, clear the flag elsewhere."""
    ordered = sorted(placements, key=lambda p: p.date)
    seen = set()
    out = []
    for p in ordered:
        first = p.cohort not in seen
        seen.add(p.cohort)
        if p.is_first_paper != first:
            p = dataclasses.replace(p, is_first_paper=first)
        out.append(p)
    return out


def load_ledger(src: TextOrPath, config: Optional[SchedulerConfig] = None) -> Ledger:
    """Read a saved ledger back.

    Day and slot labels are recomputed from the date. Stored first-paper
    flags are kept; they are derived from dates only when the file has no
    is_first_paper column.
    """
    config = config or SchedulerConfig()
    placements = []
    has_flags = False
    for row in _rows(src):
        d = parse_date(row['exam_date'])
        cohort = int(row['semester'])
        gap = row.get('gap_days', '')
        flag = row.get('is_first_paper')
        has_flags = has_flags or flag is not None
        placements.append(Placement(
            id=row.get('id') or Placement.make_id(row['course_id'], cohort),
            course_id=row['course_id'],
            cohort=cohort,
            date=d,
            day_of_week=day_of_week(d),
            time_slot=time_slot(d, config),
            gap_days=int(gap) if gap else config.default_gap_days,
            is_first_paper=parse_bool(flag or ''),
            program_type=row.get('program_type') or "B.Tech",
        ))
    if not has_flags:
        placements = mark_first_papers(placements)
    return Ledger(placements)


def ledger_rows(ledger: Ledger) -> List[List]:
    return [
        [p.id, p.course_id, p.cohort, p.date.isoformat(), p.day_of_week,
         p.time_slot, p.gap_days, str(p.is_first_paper).lower(), p.program_type]
        for p in ledger
    ]


def write_ledger_csv(f: IO, ledger: Ledger):
    w = csv.writer(f)
    w.writerow(LEDGER_COLUMNS)
    w.writerows(ledger_rows(ledger))


def save_ledger_csv(path: str, ledger: Ledger):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        write_ledger_csv(f, ledger)


def ledger_to_frame(ledger: Ledger) -> pd.DataFrame:
    df = pd.DataFrame(ledger_rows(ledger), columns=LEDGER_COLUMNS)
    df['is_first_paper'] = df['is_first_paper'] == 'true'
    return df


def save_unplaced_csv(path: str, unplaced: Iterable[ExamDemand]):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(['course_id', 'semester', 'gap_days', 'program_type'])
        for d in unplaced:
            w.writerow([d.course_id, d.cohort, d.gap_days, d.program_type])
