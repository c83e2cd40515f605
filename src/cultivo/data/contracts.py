"""
Data contracts and schemas for the cultivo system.
Ensures table consistency and provides validation.

Every table is validated on construction, so a malformed phase or variety
definition fails loudly before any event is generated.
"""
from datetime import date, datetime
from typing import Optional, List, Dict, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cultivo.core.exceptions import (
    DoseMismatchError, PhaseTableError, VarietyTableError, WashWindowError, ErrorContext
)
from cultivo.core.types import (
    PlantID, PhaseID, VarietyGroup, WeekIndex, PlantingMethod,
    VolumeRange, IrrigationVolumes,
)


class VolumeRangeSpec(BaseModel):
    """Litres per plant"""
    min: float = Field(ge=0)
    max: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.max < self.min:
            raise ValueError(f"volume max {self.max} is below min {self.min}")
        return self

    def to_range(self) -> VolumeRange:
        return VolumeRange(min=self.min, max=self.max)


class IrrigationRule(BaseModel):
    """Volume range per planting method"""
    pot: VolumeRangeSpec
    ground: VolumeRangeSpec

    model_config = ConfigDict(frozen=True)

    def volumes(self) -> IrrigationVolumes:
        return IrrigationVolumes(pot=self.pot.to_range(), ground=self.ground.to_range())


class FertilizationRule(BaseModel):
    """Products applied on the fertilization day with parallel doses (ml/L or g)"""
    products: Tuple[str, ...] = ()
    doses: Tuple[float, ...] = ()
    notes: str = ""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_parallel_lists(self):
        """Every product needs exactly one dose"""
        if len(self.products) != len(self.doses):
            raise DoseMismatchError(
                f"{len(self.products)} products but {len(self.doses)} doses: "
                f"{list(self.products)} / {list(self.doses)}"
            )
        return self

    @property
    def is_empty(self) -> bool:
        return not self.products


class PhaseDefinition(BaseModel):
    """One stage of the season, active over an inclusive week range"""
    id: PhaseID
    name: str
    start_week: WeekIndex = Field(ge=0)
    end_week: WeekIndex = Field(ge=0)
    description: str = ""
    fertilization: FertilizationRule = Field(default_factory=FertilizationRule)
    irrigation: IrrigationRule

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_week_range(self):
        if self.end_week < self.start_week:
            raise PhaseTableError(
                f"end_week {self.end_week} is before start_week {self.start_week}",
                ErrorContext(phase_id=self.id, component="PhaseDefinition"),
            )
        return self

    def covers(self, week_index: WeekIndex) -> bool:
        return self.start_week <= week_index <= self.end_week

    @property
    def weeks(self) -> range:
        return range(self.start_week, self.end_week + 1)


class PhaseTable(BaseModel):
    """
    Ordered phase definitions.

    Week ranges must start at week 0, be contiguous and never overlap. The
    harvest phase is named by id and must exist in the table.
    """
    phases: Tuple[PhaseDefinition, ...]
    harvest_phase_id: Optional[PhaseID] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_ranges(self):
        """Contiguous, non-overlapping, unique ids"""
        if not self.phases:
            raise PhaseTableError("Phase table is empty", ErrorContext(component="PhaseTable"))

        seen: set = set()
        for phase in self.phases:
            if phase.id in seen:
                raise PhaseTableError(
                    "Duplicate phase id",
                    ErrorContext(phase_id=phase.id, component="PhaseTable"),
                )
            seen.add(phase.id)

        first = self.phases[0]
        if first.start_week != 0:
            raise PhaseTableError(
                f"First phase must start at week 0, got {first.start_week}",
                ErrorContext(phase_id=first.id, component="PhaseTable"),
            )

        for previous, current in zip(self.phases, self.phases[1:]):
            expected = previous.end_week + 1
            if current.start_week < expected:
                raise PhaseTableError(
                    f"Overlaps '{previous.id}' (weeks {previous.start_week}-{previous.end_week})",
                    ErrorContext(phase_id=current.id, week_index=current.start_week,
                                 component="PhaseTable"),
                )
            if current.start_week > expected:
                raise PhaseTableError(
                    f"Gap after '{previous.id}': weeks {expected}-{current.start_week - 1} uncovered",
                    ErrorContext(phase_id=current.id, week_index=expected, component="PhaseTable"),
                )

        if self.harvest_phase_id is not None and self.harvest_phase_id not in seen:
            raise PhaseTableError(
                "Harvest phase id not present in table",
                ErrorContext(phase_id=self.harvest_phase_id, component="PhaseTable"),
            )
        return self

    def __iter__(self):
        return iter(self.phases)

    def __len__(self) -> int:
        return len(self.phases)

    @property
    def first(self) -> PhaseDefinition:
        return self.phases[0]

    @property
    def last(self) -> PhaseDefinition:
        return self.phases[-1]

    @property
    def last_week(self) -> WeekIndex:
        return self.phases[-1].end_week

    def get(self, phase_id: PhaseID) -> Optional[PhaseDefinition]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def is_harvest(self, phase: PhaseDefinition) -> bool:
        return self.harvest_phase_id is not None and phase.id == self.harvest_phase_id


class SoilPhBand(BaseModel):
    """Recommended soil pH"""
    min: float = Field(ge=0, le=14)
    max: float = Field(ge=0, le=14)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_band(self):
        if self.max < self.min:
            raise ValueError(f"pH max {self.max} is below min {self.min}")
        return self

    def __str__(self) -> str:
        return f"{self.min:g}-{self.max:g}"


class PlantVariety(BaseModel):
    """A plant in the garden"""
    id: PlantID
    name: str
    group: VarietyGroup = Field(description="Variety key used by wash windows")
    bank: str = ""
    method: PlantingMethod
    soil_ph: Optional[SoilPhBand] = None
    notes: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("id", "group")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("identifier must not be blank")
        return v.strip()


class VarietyTable(BaseModel):
    """All plants in the season, unique by id"""
    plants: Tuple[PlantVariety, ...]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_unique_ids(self):
        seen: set = set()
        for plant in self.plants:
            if plant.id in seen:
                raise VarietyTableError(
                    f"Duplicate plant id '{plant.id}'",
                    ErrorContext(component="VarietyTable"),
                )
            seen.add(plant.id)
        return self

    def __iter__(self):
        return iter(self.plants)

    def __len__(self) -> int:
        return len(self.plants)

    @property
    def plant_ids(self) -> Tuple[PlantID, ...]:
        return tuple(p.id for p in self.plants)

    @property
    def groups(self) -> Tuple[VarietyGroup, ...]:
        ordered: Dict[VarietyGroup, None] = {}
        for plant in self.plants:
            ordered.setdefault(plant.group)
        return tuple(ordered)

    def ids_in_group(self, group: VarietyGroup) -> Tuple[PlantID, ...]:
        return tuple(p.id for p in self.plants if p.group == group)

    def get(self, plant_id: PlantID) -> Optional[PlantVariety]:
        for plant in self.plants:
            if plant.id == plant_id:
                return plant
        return None

    def select(self, plant_ids) -> List[PlantVariety]:
        """Plants whose id is in ``plant_ids``, in table order"""
        wanted = set(plant_ids)
        return [p for p in self.plants if p.id in wanted]


class WashWindow(BaseModel):
    """
    Root-washing window for one variety group.

    Washing runs over ``[washing_date, harvest_start)``; harvest runs over
    ``[harvest_start, harvest_end)``.
    """
    group: VarietyGroup
    washing_date: date
    harvest_start: date
    harvest_end: date

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_order(self):
        if not (self.washing_date <= self.harvest_start <= self.harvest_end):
            raise WashWindowError(
                f"Expected washing_date <= harvest_start <= harvest_end, got "
                f"{self.washing_date} / {self.harvest_start} / {self.harvest_end}",
                ErrorContext(component="WashWindow", details={"group": self.group}),
            )
        return self

    def is_washing(self, day: date) -> bool:
        return self.washing_date <= day < self.harvest_start


class WashWindowTable(BaseModel):
    """Wash windows keyed by variety group"""
    windows: Tuple[WashWindow, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_unique_groups(self):
        seen: set = set()
        for window in self.windows:
            if window.group in seen:
                raise WashWindowError(
                    f"More than one wash window for group '{window.group}'",
                    ErrorContext(component="WashWindowTable"),
                )
            seen.add(window.group)
        return self

    def __iter__(self):
        return iter(self.windows)

    def __len__(self) -> int:
        return len(self.windows)

    def get(self, group: VarietyGroup) -> Optional[WashWindow]:
        for window in self.windows:
            if window.group == group:
                return window
        return None

    def washing_on(self, day: date) -> List[WashWindow]:
        """Windows whose washing interval contains ``day``, in table order"""
        return [w for w in self.windows if w.is_washing(day)]

    def check_groups(self, varieties: VarietyTable):
        """Every window must target a group with at least one plant"""
        known = set(varieties.groups)
        for window in self.windows:
            if window.group not in known:
                raise WashWindowError(
                    f"Wash window targets unknown group '{window.group}'",
                    ErrorContext(component="WashWindowTable", details={"known": sorted(known)}),
                )


class Catalog(BaseModel):
    """Phase, variety and wash-window tables for one garden"""
    phases: PhaseTable
    varieties: VarietyTable
    wash_windows: WashWindowTable = Field(default_factory=WashWindowTable)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_cross_references(self):
        self.wash_windows.check_groups(self.varieties)
        return self


# Weather contracts

class CurrentWeather(BaseModel):
    """Current conditions"""
    temperature_c: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    wind_gusts_kmh: Optional[float] = None
    precipitation_mm: Optional[float] = None
    relative_humidity_pct: Optional[float] = Field(default=None, ge=0, le=100)
    weather_code: Optional[int] = None


class DailyForecast(BaseModel):
    """One forecast day"""
    date: date
    temp_max_c: Optional[float] = None
    temp_min_c: Optional[float] = None
    precipitation_sum_mm: float = Field(default=0.0, ge=0)
    precipitation_probability_max_pct: float = Field(default=0.0, ge=0, le=100)
    wind_max_kmh: float = Field(default=0.0, ge=0)
    uv_index_max: float = Field(default=0.0, ge=0)


class WeatherSnapshot(BaseModel):
    """Current conditions plus daily forecast"""
    current: Optional[CurrentWeather] = None
    daily: List[DailyForecast] = Field(default_factory=list)
    fetched_at: datetime
    source: str = "open_meteo"
