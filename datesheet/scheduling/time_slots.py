from datetime import date
from typing import Optional

from ..models import SchedulerConfig

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def day_of_week(d: date) -> str:
    # fixed English labels, independent of the process locale
    return DAY_NAMES[d.weekday()]


def time_slot(d: date, config: Optional[SchedulerConfig] = None) -> str:
    config = config or SchedulerConfig()
    if d.weekday() == config.short_weekday:
        return config.short_slot
    return config.standard_slot
