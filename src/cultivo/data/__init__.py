"""
cultivo Data Package.

Provides table contracts, the built-in catalog and external data sources.
"""

from cultivo.data.contracts import (
    PhaseDefinition,
    PhaseTable,
    FertilizationRule,
    IrrigationRule,
    VolumeRangeSpec,
    PlantVariety,
    SoilPhBand,
    VarietyTable,
    WashWindow,
    WashWindowTable,
    Catalog,
    CurrentWeather,
    DailyForecast,
    WeatherSnapshot,
)
from cultivo.data.catalog import (
    default_phase_table,
    default_variety_table,
    default_wash_windows,
    default_catalog,
    load_catalog,
    save_catalog,
)

__all__ = [
    "PhaseDefinition",
    "PhaseTable",
    "FertilizationRule",
    "IrrigationRule",
    "VolumeRangeSpec",
    "PlantVariety",
    "SoilPhBand",
    "VarietyTable",
    "WashWindow",
    "WashWindowTable",
    "Catalog",
    "CurrentWeather",
    "DailyForecast",
    "WeatherSnapshot",
    # Built-in tables
    "default_phase_table",
    "default_variety_table",
    "default_wash_windows",
    "default_catalog",
    "load_catalog",
    "save_catalog",
]
