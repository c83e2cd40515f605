"""
Per-week event synthesis.

Within a week, relative to its first day:

    day 0  irrigation
    day 3  root washing while any wash window is open, otherwise fertilization
    day 5  irrigation, plus harvest while the harvest phase is active

Washing and fertilization never share a week.
"""
from datetime import date
from typing import List, Optional

from cultivo.core.calendar import Calendar, DEFAULT_CALENDAR
from cultivo.core.types import Event, EventType, PhaseID, WeekIndex
from cultivo.data.contracts import PhaseDefinition, VarietyTable, WashWindowTable
from cultivo.schedule.rules import RuleSet, PRIMARY_RULES


def _stamp(day: date) -> str:
    return day.strftime("%Y%m%d")


def generate_week(week_start: date,
                  week_index: WeekIndex,
                  phase: PhaseDefinition,
                  wash_windows: WashWindowTable,
                  varieties: VarietyTable,
                  harvest_phase_id: Optional[PhaseID],
                  rules: RuleSet = PRIMARY_RULES,
                  calendar: Calendar = DEFAULT_CALENDAR) -> List[Event]:
    """
    Events for one week, sorted by date.

    Args:
        week_start: First day of the week
        week_index: Zero-based week number within the season
        phase: Phase governing this week
        wash_windows: Wash windows for every variety group
        varieties: Plants the events apply to
        harvest_phase_id: Id of the phase that produces harvest events
            (``PhaseTable.harvest_phase_id``); None only for tables without one
        rules: Variant-specific volume, scoping and id rules
        calendar: Date arithmetic provider

    Returns:
        List of events ordered by date; same-day events keep emission order
    """
    volumes = phase.irrigation.volumes()
    if rules.uniform_ground_volume:
        volumes = volumes.ground_only()

    all_plants = varieties.plant_ids
    events: List[Event] = []

    # Irrigation
    for idx, offset in enumerate(rules.irrigation_offsets):
        day = calendar.add_days(week_start, offset)
        events.append(Event(
            id=rules.event_id("riego", week_index, idx, _stamp(day)),
            type=EventType.IRRIGATION,
            scheduled_at=calendar.at_start_of_day(day),
            volumes=volumes,
            plant_ids=all_plants,
            phase_name=phase.name,
            notes=rules.irrigation_note,
        ))

    # Washing preempts fertilization
    treatment_day = calendar.add_days(week_start, rules.fertilization_offset)
    washing = wash_windows.washing_on(treatment_day)

    if washing:
        if rules.scope_washing_to_group:
            targets = [
                (rules.event_id("lavado", week_index, w.group, _stamp(treatment_day)),
                 varieties.ids_in_group(w.group))
                for w in washing
            ]
        else:
            # Unscoped washing covers every plant, so one event per week
            targets = [(rules.event_id("lavado", week_index, _stamp(treatment_day)), all_plants)]

        for event_id, plant_ids in targets:
            events.append(Event(
                id=event_id,
                type=EventType.WASHING,
                scheduled_at=calendar.at_start_of_day(treatment_day),
                volumes=volumes,
                plant_ids=plant_ids,
                phase_name=rules.washing_phase_label or phase.name,
                notes=rules.washing_note,
            ))
    elif not phase.fertilization.is_empty:
        events.append(Event(
            id=rules.event_id("fert", week_index, _stamp(treatment_day)),
            type=EventType.FERTILIZATION,
            scheduled_at=calendar.at_start_of_day(treatment_day),
            volumes=volumes,
            plant_ids=all_plants,
            phase_name=phase.name,
            products=phase.fertilization.products,
            doses=phase.fertilization.doses,
            notes=phase.fertilization.notes,
        ))

    # Harvest
    if harvest_phase_id is not None and phase.id == harvest_phase_id:
        day = calendar.add_days(week_start, rules.harvest_offset)
        events.append(Event(
            id=rules.event_id("cosecha", week_index, _stamp(day)),
            type=EventType.HARVEST,
            scheduled_at=calendar.at_start_of_day(day),
            volumes=volumes,
            plant_ids=all_plants,
            phase_name=phase.name,
            notes=rules.harvest_note,
        ))

    # sorted() is stable, so same-day events keep emission order
    return sorted(events, key=lambda e: e.scheduled_at)
