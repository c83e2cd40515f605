"""
Season builder.

Walks the season in 7-day buckets, resolving the phase for each bucket and
collecting its events. Output depends only on the season window, the tables
and the rule variant.
"""
import math
from datetime import date
from typing import List, Optional, Union
import logging

from cultivo.core.calendar import Calendar, DEFAULT_CALENDAR
from cultivo.core.config import CultivoConfig, get_config
from cultivo.core.exceptions import SeasonIterationError, ErrorContext
from cultivo.core.types import ScheduleMode, SeasonWindow, WeekBucket
from cultivo.data.catalog import default_catalog, load_catalog
from cultivo.data.contracts import Catalog, PhaseTable, VarietyTable, WashWindowTable
from cultivo.schedule.phases import resolve_phase
from cultivo.schedule.rules import RuleSet, get_rule_set
from cultivo.schedule.weekly import generate_week

logger = logging.getLogger(__name__)


def max_iterations(start: date, end: date) -> int:
    """Upper bound on buckets for a window: ceil(days / 7) + 1"""
    return math.ceil((end - start).days / 7) + 1


def build_season(season: SeasonWindow,
                 phases: PhaseTable,
                 wash_windows: WashWindowTable,
                 varieties: VarietyTable,
                 mode: Union[ScheduleMode, str, RuleSet] = ScheduleMode.PRIMARY,
                 calendar: Calendar = DEFAULT_CALENDAR) -> List[WeekBucket]:
    """
    Full season timeline, one bucket per week.

    A window whose start is after its end yields an empty list.
    """
    rules = mode if isinstance(mode, RuleSet) else get_rule_set(mode)

    if calendar.compare(season.start, season.end) > 0:
        logger.warning(
            f"Season start {season.start} is after end {season.end}; no weeks generated"
        )
        return []

    bound = max_iterations(season.start, season.end)
    buckets: List[WeekBucket] = []
    fallbacks = 0

    cursor = season.start
    week_index = 0
    while calendar.compare(cursor, season.end) <= 0:
        if week_index >= bound:
            raise SeasonIterationError(
                f"Exceeded {bound} weeks between {season.start} and {season.end}",
                ErrorContext(week_index=week_index, date=cursor.isoformat(),
                             component="build_season"),
            )

        resolution = resolve_phase(week_index, phases, rules.fallback_policy)
        if resolution.is_fallback:
            fallbacks += 1

        events = generate_week(
            cursor, week_index, resolution.phase, wash_windows, varieties,
            phases.harvest_phase_id, rules=rules, calendar=calendar,
        )
        buckets.append(WeekBucket(
            start=cursor,
            end=calendar.add_days(cursor, 6),
            week_index=week_index,
            events=tuple(events),
        ))

        cursor = calendar.add_weeks(cursor, 1)
        week_index += 1

    logger.info(
        f"Built {rules.mode.value} season {season.start} -> {season.end}: "
        f"{len(buckets)} weeks, {sum(len(b.events) for b in buckets)} events, "
        f"{fallbacks} fallback weeks"
    )
    return buckets


class ScheduleService:
    """
    Builds seasons from a configuration and a catalog.

    The catalog comes from ``config.catalog_path`` when set, otherwise from
    the built-in tables.
    """

    def __init__(self, config: Optional[CultivoConfig] = None,
                 catalog: Optional[Catalog] = None,
                 calendar: Calendar = DEFAULT_CALENDAR):
        self.config = config or get_config()
        if catalog is None:
            if self.config.catalog_path is not None:
                catalog = load_catalog(self.config.catalog_path)
            else:
                catalog = default_catalog()
        self.catalog = catalog
        self.calendar = calendar
        self.logger = logging.getLogger("cultivo.schedule.service")

    def build(self, mode: Union[ScheduleMode, str, None] = None) -> List[WeekBucket]:
        """Season for ``mode`` (the configured default when omitted)"""
        mode = ScheduleMode(mode) if mode is not None else self.config.season.default_mode
        self.logger.debug(f"Building season in {mode.value} mode")
        return build_season(
            self.config.season_window(),
            self.catalog.phases,
            self.catalog.wash_windows,
            self.catalog.varieties,
            mode=mode,
            calendar=self.calendar,
        )
