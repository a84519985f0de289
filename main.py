import argparse
import logging
import sys
from typing import List, Optional

from datesheet.eligible_days import expand_holidays
from datesheet.errors import SchedulingError
from datesheet.io_utils import (
    load_demand, load_holidays, load_ledger, parse_date, save_ledger_csv, save_unplaced_csv
)
from datesheet.models import SchedulerConfig
from datesheet.scheduling.assign_dates import assign_dates
from datesheet.scheduling.evaluation import summary
from datesheet.scheduling.reschedule import move


def config_from_args(args) -> SchedulerConfig:
    return SchedulerConfig(
        capacity=args.capacity,
        short_slot=args.short_slot,
        standard_slot=args.standard_slot,
    )


def cmd_generate(args) -> int:
    config = config_from_args(args)
    start, end = parse_date(args.start), parse_date(args.end)
    demand = load_demand(args.demand, default_gap=args.default_gap)
    holidays = expand_holidays(load_holidays(args.holidays), start, end) if args.holidays else set()

    ledger, result = assign_dates(demand, start, end, holidays, config, merge_similar=args.merge_similar)
    print(summary(ledger, result, holidays, config))

    save_ledger_csv(args.out_ledger, ledger)
    print(f"Saved: {args.out_ledger}")
    if result.unplaced and args.out_unplaced:
        save_unplaced_csv(args.out_unplaced, result.unplaced)
        print(f"Saved: {args.out_unplaced}")
    if args.strict:
        result.raise_for_status()
    return 0


def cmd_move(args) -> int:
    config = config_from_args(args)
    ledger = load_ledger(args.ledger, config)
    outcome = move(ledger, args.placement_id, parse_date(args.date), override_rules=args.override, config=config)
    print(outcome.message)
    if not outcome.accepted:
        return 1
    if outcome.violations:
        print("Rules broken: " + ", ".join(v.value for v in outcome.violations))
    save_ledger_csv(args.out_ledger or args.ledger, ledger)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Datesheet – Semester-aware exam date scheduler")
    p.add_argument('-v', '--verbose', action='store_true', help='Log every placement decision')

    # Tunables shared by both subcommands
    defaults = SchedulerConfig()
    p.add_argument('--capacity', type=int, default=defaults.capacity, help='Max exams per day')
    p.add_argument('--short-slot', default=defaults.short_slot, help='Time slot label on Fridays')
    p.add_argument('--standard-slot', default=defaults.standard_slot, help='Time slot label on other days')

    sub = p.add_subparsers(dest='command', required=True)

    g = sub.add_parser('generate', help='Build a fresh ledger from demand data')
    g.add_argument('--demand', required=True, help='CSV course_id,semester,gap_days,program_type[,teacher]')
    g.add_argument('--start', required=True, help='First exam date (YYYY-MM-DD)')
    g.add_argument('--end', required=True, help='Last exam date (YYYY-MM-DD)')
    g.add_argument('--holidays', help='CSV date,name,recurring')
    g.add_argument('--default-gap', type=int, default=defaults.default_gap_days,
                   help='Gap for rows that leave gap_days empty')
    g.add_argument('--merge-similar', action='store_true', help='Treat BTCS-xxx and BT-xxx as one paper')
    g.add_argument('--strict', action='store_true', help='Exit non-zero when any exam is left unplaced')
    g.add_argument('--out-ledger', default='ledger.csv')
    g.add_argument('--out-unplaced', default='unplaced.csv')
    g.set_defaults(func=cmd_generate)

    m = sub.add_parser('move', help='Move one placement of a saved ledger')
    m.add_argument('--ledger', required=True, help='Ledger CSV written by generate')
    m.add_argument('placement_id')
    m.add_argument('date', help='Target date (YYYY-MM-DD)')
    m.add_argument('--override', action='store_true', help='Skip cohort, capacity and gap checks')
    m.add_argument('--out-ledger', help='Where to write the result (defaults to --ledger)')
    m.set_defaults(func=cmd_move)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        return args.func(args)
    except SchedulingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyError as e:
        print(f"Error: missing column {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
