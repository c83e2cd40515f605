#!/usr/bin/env python
"""
Print the season care calendar.

Shows every week with its events, highlights the current week and the next
fertilization, and optionally writes the flat event table to CSV.

Run from the project root with:
    python scripts/print_season.py --mode primary --plant cream-mandarine-maceta
    python scripts/print_season.py --mode topcrop --csv outputs/topcrop.csv
"""
import argparse
import logging
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from cultivo.core.calendar import format_date, format_week_range
from cultivo.core.config import CultivoConfig, get_config
from cultivo.core.exceptions import CultivoError
from cultivo.core.types import ScheduleMode
from cultivo.schedule import (
    ScheduleService, current_week, filter_season, find_next_fertilization, season_to_frame,
)

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Print the season care calendar")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--mode", choices=[m.value for m in ScheduleMode], default=None)
    parser.add_argument("--plant", default=None, help="Only events for this plant id")
    parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--csv", type=Path, default=None, help="Write the event table here")
    return parser.parse_args()


def print_season(season, today, next_fert, timezone=None):
    this_week = current_week(season, today, timezone)

    print("=" * 72)
    print("CALENDARIO DE CULTIVO")
    print("=" * 72)

    for bucket in season:
        marker = ""
        if this_week is not None and bucket.week_index == this_week.week_index:
            marker = "  << HOY"
        elif next_fert is not None and bucket.contains(next_fert.date):
            marker = "  << Próximo fertilizante"

        print(f"\nSemana {bucket.number:<3} {format_week_range(bucket.start, bucket.end)}{marker}")
        print("-" * 72)
        if not bucket.events:
            print("  No hay eventos para esta planta en esta semana")
            continue
        for event in bucket.events:
            products = ", ".join(
                f"{p} ({d:g} ml/L)" for p, d in zip(event.products, event.doses)
            )
            print(f"  {format_date(event.scheduled_at)}  {event.type.label:<14} "
                  f"Maceta {event.volumes.pot} | Suelo {event.volumes.ground}"
                  f"{'  ' + products if products else ''}")


def main():
    load_dotenv()
    args = parse_args()

    config = CultivoConfig.from_yaml(args.config) if args.config else get_config()
    config.log.apply()

    timezone = config.season.timezone
    today = datetime.fromisoformat(args.today) if args.today else datetime.now(ZoneInfo(timezone))

    try:
        service = ScheduleService(config)
        season = service.build(args.mode)
    except CultivoError as e:
        logger.error(f"Could not build season: {e}")
        raise SystemExit(1)

    next_fert = find_next_fertilization(season, today, timezone)
    if args.plant:
        season = filter_season(season, args.plant)

    print_season(season, today, next_fert, timezone)

    print()
    if next_fert is None:
        print("Sin fertilizaciones pendientes esta temporada.")
    else:
        print(f"Próximo fertilizante: {format_date(next_fert.scheduled_at)} ({next_fert.phase_name})")

    if args.csv:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        season_to_frame(season).to_csv(args.csv, index=False)
        logger.info(f"Wrote event table to {args.csv}")


if __name__ == "__main__":
    main()
