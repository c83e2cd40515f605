"""Season schedule generation."""
from cultivo.schedule.phases import Found, UsedFallback, PhaseResolution, resolve_phase
from cultivo.schedule.rules import RuleSet, PRIMARY_RULES, TOPCROP_RULES, get_rule_set
from cultivo.schedule.weekly import generate_week
from cultivo.schedule.season import build_season, max_iterations, ScheduleService
from cultivo.schedule.lookup import (
    find_next_event,
    find_next_fertilization,
    events_for_plant,
    filter_season,
    current_week,
    season_to_frame,
)

__all__ = [
    "Found",
    "UsedFallback",
    "PhaseResolution",
    "resolve_phase",
    "RuleSet",
    "PRIMARY_RULES",
    "TOPCROP_RULES",
    "get_rule_set",
    "generate_week",
    "build_season",
    "max_iterations",
    "ScheduleService",
    # Queries
    "find_next_event",
    "find_next_fertilization",
    "events_for_plant",
    "filter_season",
    "current_week",
    "season_to_frame",
]
