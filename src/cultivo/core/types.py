"""
Type definitions and type aliases for the cultivo system.
Provides strong typing throughout the codebase.
"""
from datetime import date, datetime
from typing import Tuple, Optional
from enum import Enum
from dataclasses import dataclass, field
from typing_extensions import TypeAlias

from cultivo.core.exceptions import DoseMismatchError


# Type aliases for clarity
PlantID: TypeAlias = str
PhaseID: TypeAlias = str
VarietyGroup: TypeAlias = str
EventID: TypeAlias = str
WeekIndex: TypeAlias = int
Date: TypeAlias = date
DateTime: TypeAlias = datetime
LitresPerPlant: TypeAlias = float
DoseMlPerLitre: TypeAlias = float


class PlantingMethod(str, Enum):
    """Where a plant grows; selects the irrigation volume range"""
    POT = "pot"  # maceta
    GROUND = "ground"  # suelo


class EventType(str, Enum):
    """Care event categories"""
    FERTILIZATION = "fertilization"
    IRRIGATION = "irrigation"
    WASHING = "washing"
    HARVEST = "harvest"

    @property
    def label(self) -> str:
        """Spanish display label"""
        labels = {
            EventType.FERTILIZATION: "Fertilización",
            EventType.IRRIGATION: "Riego",
            EventType.WASHING: "Lavado",
            EventType.HARVEST: "Cosecha",
        }
        return labels[self]


class FallbackPolicy(str, Enum):
    """Phase chosen when a week index falls outside every configured range"""
    USE_FIRST = "use_first"
    USE_LAST = "use_last"


class ScheduleMode(str, Enum):
    """Rule variants available to the season builder"""
    PRIMARY = "primary"
    TOPCROP = "topcrop"


@dataclass(frozen=True)
class VolumeRange:
    """Litres per plant, inclusive bounds"""
    min: LitresPerPlant
    max: LitresPerPlant

    def __str__(self) -> str:
        return f"{self.min:g}-{self.max:g}L"


@dataclass(frozen=True)
class IrrigationVolumes:
    """Volume range for each planting method"""
    pot: VolumeRange
    ground: VolumeRange

    def for_method(self, method: PlantingMethod) -> VolumeRange:
        if method == PlantingMethod.POT:
            return self.pot
        return self.ground

    def ground_only(self) -> "IrrigationVolumes":
        """Ground range applied to both methods"""
        return IrrigationVolumes(pot=self.ground, ground=self.ground)


@dataclass(frozen=True)
class Event:
    """Immutable dated care event"""
    id: EventID
    type: EventType
    scheduled_at: DateTime
    volumes: IrrigationVolumes
    plant_ids: Tuple[PlantID, ...]
    phase_name: str
    products: Tuple[str, ...] = ()
    doses: Tuple[DoseMlPerLitre, ...] = ()
    notes: str = ""

    def __post_init__(self):
        if len(self.products) != len(self.doses):
            raise DoseMismatchError(
                f"Event {self.id} has {len(self.products)} products "
                f"but {len(self.doses)} doses"
            )

    @property
    def date(self) -> Date:
        return self.scheduled_at.date()

    def applies_to(self, plant_id: PlantID) -> bool:
        return plant_id in self.plant_ids


@dataclass(frozen=True)
class WeekBucket:
    """One calendar week of the season timeline"""
    start: Date
    end: Date
    week_index: WeekIndex
    events: Tuple[Event, ...] = field(default_factory=tuple)

    @property
    def number(self) -> int:
        """One-based week number for display"""
        return self.week_index + 1

    def contains(self, day: Date) -> bool:
        return self.start <= day <= self.end

    def events_of_type(self, event_type: EventType) -> Tuple[Event, ...]:
        return tuple(e for e in self.events if e.type == event_type)


@dataclass(frozen=True)
class SeasonWindow:
    """Season boundaries handed to the builder (both inclusive)"""
    start: Date
    end: Date
    timezone: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.start > self.end
