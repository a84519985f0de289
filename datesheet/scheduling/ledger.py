import dataclasses
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional

from ..errors import UnknownPlacement
from ..models import Placement, SchedulerConfig
from .time_slots import day_of_week, time_slot


def relocate(p: Placement, new_date: date, config: Optional[SchedulerConfig] = None) -> Placement:
    """Copy of p on new_date with the date-derived labels recomputed."""
    return dataclasses.replace(
        p,
        date=new_date,
        day_of_week=day_of_week(new_date),
        time_slot=time_slot(new_date, config),
    )


class Ledger:
    """Placements kept in ascending date order.

    Ties keep insertion order. The ledger does no constraint checking of
    its own; see scheduling.reschedule for validated moves.
    """

    def __init__(self, placements: Iterable[Placement] = ()):
        self._items: List[Placement] = []
        self.replace_all(placements)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Placement]:
        return iter(list(self._items))

    def __contains__(self, placement_id) -> bool:
        return any(p.id == placement_id for p in self._items)

    @property
    def placements(self) -> List[Placement]:
        return list(self._items)

    def get(self, placement_id: str) -> Placement:
        for p in self._items:
            if p.id == placement_id:
                return p
        raise UnknownPlacement(placement_id)

    def on_date(self, d: date) -> List[Placement]:
        return [p for p in self._items if p.date == d]

    def count_on(self, d: date) -> int:
        return sum(1 for p in self._items if p.date == d)

    def for_cohort(self, cohort: int) -> List[Placement]:
        return [p for p in self._items if p.cohort == cohort]

    def latest_before(self, cohort: int, d: date) -> Optional[Placement]:
        """Most recent placement of cohort strictly before d."""
        found = None
        for p in self._items:
            if p.date >= d:
                break
            if p.cohort == cohort:
                found = p
        return found

    def by_date(self) -> Dict[date, List[Placement]]:
        grouped: Dict[date, List[Placement]] = {}
        for p in self._items:
            grouped.setdefault(p.date, []).append(p)
        return grouped

    def cohorts(self) -> List[int]:
        return sorted({p.cohort for p in self._items})

    def replace_all(self, placements: Iterable[Placement]):
        items = list(placements)
        ids = [p.id for p in items]
        if len(ids) != len(set(ids)):
            raise ValueError("placement ids must be unique")
        # sorted() is stable, so same-day entries keep their given order
        self._items = sorted(items, key=lambda p: p.date)

    def apply_move(self, placement_id: str, new_date: date, config: Optional[SchedulerConfig] = None) -> Placement:
        """Move one placement unconditionally and restore date order."""
        old = self.get(placement_id)
        moved = relocate(old, new_date, config)
        rest = [p for p in self._items if p.id != placement_id]
        rest.append(moved)
        self._items = sorted(rest, key=lambda p: p.date)
        return moved
