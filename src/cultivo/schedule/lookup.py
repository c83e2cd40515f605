"""
Queries over a built season: next event, plant filter, current week, export.
"""
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Union
import pandas as pd

from cultivo.core.calendar import as_date, as_datetime
from cultivo.core.types import Event, EventType, PlantID, WeekBucket


def find_next_event(season: Sequence[WeekBucket],
                    reference: Union[date, datetime],
                    event_type: Optional[EventType] = None,
                    timezone: Optional[str] = None) -> Optional[Event]:
    """
    Earliest event at or after ``reference``, optionally of one type.

    An aware ``reference`` is read as wall-clock time in ``timezone`` (the
    season timezone); a naive one is already local.

    Buckets and their events are already in date order, so the first match
    is the earliest one.
    """
    reference = as_datetime(reference, timezone)
    for bucket in season:
        for event in bucket.events:
            if event_type is not None and event.type != event_type:
                continue
            if event.scheduled_at >= reference:
                return event
    return None


def find_next_fertilization(season: Sequence[WeekBucket],
                            reference: Union[date, datetime],
                            timezone: Optional[str] = None) -> Optional[Event]:
    """Earliest fertilization at or after ``reference``; None when there is none left"""
    return find_next_event(season, reference, EventType.FERTILIZATION, timezone)


def events_for_plant(events: Iterable[Event], plant_id: Optional[PlantID]) -> List[Event]:
    """Events that apply to ``plant_id``; all events when it is None"""
    if plant_id is None:
        return list(events)
    return [e for e in events if e.applies_to(plant_id)]


def filter_season(season: Sequence[WeekBucket],
                  plant_id: Optional[PlantID]) -> List[WeekBucket]:
    """Copy of the season keeping only events for ``plant_id``; empty weeks are kept"""
    return [
        WeekBucket(
            start=bucket.start,
            end=bucket.end,
            week_index=bucket.week_index,
            events=tuple(events_for_plant(bucket.events, plant_id)),
        )
        for bucket in season
    ]


def current_week(season: Sequence[WeekBucket],
                 today: Union[date, datetime],
                 timezone: Optional[str] = None) -> Optional[WeekBucket]:
    """Bucket whose 7 days include ``today``"""
    today = as_date(today, timezone)
    for bucket in season:
        if bucket.contains(today):
            return bucket
    return None


def season_to_frame(season: Sequence[WeekBucket]) -> pd.DataFrame:
    """One row per event, ordered by week then date"""
    columns = [
        "week", "week_start", "week_end", "event_id", "type", "scheduled_at",
        "phase", "products", "doses", "pot_litres", "ground_litres", "plants", "notes",
    ]
    rows = []
    for bucket in season:
        for event in bucket.events:
            rows.append({
                "week": bucket.number,
                "week_start": bucket.start,
                "week_end": bucket.end,
                "event_id": event.id,
                "type": event.type.value,
                "scheduled_at": event.scheduled_at,
                "phase": event.phase_name,
                "products": ", ".join(event.products),
                "doses": ", ".join(f"{d:g}" for d in event.doses),
                "pot_litres": str(event.volumes.pot),
                "ground_litres": str(event.volumes.ground),
                "plants": ", ".join(event.plant_ids),
                "notes": event.notes,
            })
    return pd.DataFrame(rows, columns=columns)
