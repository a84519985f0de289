from datetime import date

from datesheet.models import Placement
from datesheet.scheduling.time_slots import day_of_week, time_slot


def placement(course, cohort, d: date, first=False, gap=2):
    return Placement(
        id=Placement.make_id(course, cohort),
        course_id=course,
        cohort=cohort,
        date=d,
        day_of_week=day_of_week(d),
        time_slot=time_slot(d),
        gap_days=gap,
        is_first_paper=first,
    )
