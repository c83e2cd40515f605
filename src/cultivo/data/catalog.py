"""
Built-in cultivation tables and YAML catalog loading.

Factories return fresh, validated table objects; nothing here is shared
module state that the schedule builder reads implicitly.
"""
from datetime import date
from pathlib import Path
from typing import Union
import logging
import yaml

from cultivo.core.exceptions import ConfigurationError
from cultivo.data.contracts import (
    Catalog, PhaseTable, PhaseDefinition, FertilizationRule, IrrigationRule,
    VolumeRangeSpec, VarietyTable, PlantVariety, SoilPhBand,
    WashWindow, WashWindowTable,
)
from cultivo.core.types import PlantingMethod

logger = logging.getLogger(__name__)

HARVEST_PHASE_ID = "cosecha"


def _irrigation(pot: tuple, ground: tuple) -> IrrigationRule:
    return IrrigationRule(
        pot=VolumeRangeSpec(min=pot[0], max=pot[1]),
        ground=VolumeRangeSpec(min=ground[0], max=ground[1]),
    )


def default_phase_table() -> PhaseTable:
    """Spring-to-summer plan starting the first Thursday of September"""
    return PhaseTable(
        harvest_phase_id=HARVEST_PHASE_ID,
        phases=(
            PhaseDefinition(
                id="germinacion",
                name="Germinación y Plántula",
                start_week=0,
                end_week=1,
                description="Emergencia de semillas y desarrollo de primeras hojas verdaderas",
                fertilization=FertilizationRule(
                    notes="Mantener sustrato húmedo, sin fertilizantes",
                ),
                irrigation=_irrigation(pot=(0.1, 0.2), ground=(0.2, 0.3)),
            ),
            PhaseDefinition(
                id="crecimiento",
                name="Crecimiento Vegetativo",
                start_week=2,
                end_week=8,
                description="Desarrollo de tallos y hojas. Mayor demanda de nitrógeno.",
                fertilization=FertilizationRule(
                    products=("Compost", "Purín de Ortiga"),
                    doses=(100, 20),
                    notes="Aplicar compost en superficie o purín diluido",
                ),
                irrigation=_irrigation(pot=(0.5, 1.0), ground=(1.0, 2.0)),
            ),
            PhaseDefinition(
                id="floracion",
                name="Floración y Cuajado",
                start_week=9,
                end_week=14,
                description="Aparición de flores y primeros frutos. Demanda de potasio.",
                fertilization=FertilizationRule(
                    products=("Té de Banana", "Humus"),
                    doses=(50, 100),
                    notes="Reforzar potasio para la floración",
                ),
                irrigation=_irrigation(pot=(1.5, 2.5), ground=(2.0, 3.0)),
            ),
            PhaseDefinition(
                id="fructificacion",
                name="Desarrollo de Fruto",
                start_week=15,
                end_week=22,
                description="Engorde y maduración de frutos.",
                fertilization=FertilizationRule(
                    products=("Compost", "Ceniza de madera"),
                    doses=(100, 10),
                    notes="Mantener nutrición equilibrada",
                ),
                irrigation=_irrigation(pot=(2.0, 3.0), ground=(3.0, 4.0)),
            ),
            PhaseDefinition(
                id=HARVEST_PHASE_ID,
                name="Cosecha Continua",
                start_week=23,
                end_week=30,
                description="Recolección de frutos maduros.",
                fertilization=FertilizationRule(
                    notes="Reducir fertilización, mantener humedad constante",
                ),
                irrigation=_irrigation(pot=(1.5, 2.5), ground=(2.5, 3.5)),
            ),
        ),
    )


def default_variety_table() -> VarietyTable:
    return VarietyTable(plants=(
        PlantVariety(
            id="fresh-candy-suelo",
            name="Fresh Candy",
            group="fresh-candy",
            bank="Semillas Orgánicas",
            method=PlantingMethod.GROUND,
            soil_ph=SoilPhBand(min=6.2, max=6.8),
            notes="Requiere entutorado",
        ),
        PlantVariety(
            id="cream-mandarine-suelo",
            name="Cream Mandarine",
            group="cream-mandarine",
            bank="Huerto Local",
            method=PlantingMethod.GROUND,
            soil_ph=SoilPhBand(min=6.0, max=7.0),
            notes="Necesita mucho sol",
        ),
        PlantVariety(
            id="cream-mandarine-maceta",
            name="Cream Mandarine",
            group="cream-mandarine",
            bank="Huerto Local",
            method=PlantingMethod.POT,
            soil_ph=SoilPhBand(min=6.0, max=6.8),
            notes="Ideal para balcones",
        ),
    ))


def default_wash_windows() -> WashWindowTable:
    """Cream Mandarine finishes early; Fresh Candy closes the season"""
    return WashWindowTable(windows=(
        WashWindow(
            group="cream-mandarine",
            washing_date=date(2025, 11, 14),
            harvest_start=date(2025, 11, 21),
            harvest_end=date(2025, 12, 5),
        ),
        WashWindow(
            group="fresh-candy",
            washing_date=date(2026, 2, 1),
            harvest_start=date(2026, 2, 15),
            harvest_end=date(2026, 3, 1),
        ),
    ))


def default_catalog() -> Catalog:
    return Catalog(
        phases=default_phase_table(),
        varieties=default_variety_table(),
        wash_windows=default_wash_windows(),
    )


def load_catalog(yaml_path: Union[str, Path]) -> Catalog:
    """
    Load phase, variety and wash-window tables from a YAML file.

    Expected top-level keys: ``phases`` (mapping with ``harvest_phase_id`` and
    ``phases`` list), ``varieties`` (mapping with ``plants`` list) and an
    optional ``wash_windows`` (mapping with ``windows`` list). Any invariant
    violation raises the matching ConfigurationError subclass.
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise ConfigurationError(f"Catalog file not found: {yaml_path}")

    with open(yaml_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    missing = [key for key in ("phases", "varieties") if key not in raw]
    if missing:
        raise ConfigurationError(f"Catalog {yaml_path} is missing sections: {missing}")

    catalog = Catalog.model_validate(raw)
    logger.info(
        f"Loaded catalog from {yaml_path}: {len(catalog.phases)} phases, "
        f"{len(catalog.varieties)} plants, {len(catalog.wash_windows)} wash windows"
    )
    return catalog


def save_catalog(catalog: Catalog, yaml_path: Union[str, Path]):
    """Write a catalog in the format ``load_catalog`` reads"""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(catalog.model_dump(mode="json"), f,
                       default_flow_style=False, allow_unicode=True, sort_keys=False)
