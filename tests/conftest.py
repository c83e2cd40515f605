import os
from datetime import date

import pytest

from cultivo.core.config import CultivoConfig, set_config
from cultivo.core.types import ScheduleMode, SeasonWindow
from cultivo.data.catalog import default_catalog
from cultivo.schedule import build_season


SEASON_START = date(2025, 9, 4)
SEASON_END = date(2026, 3, 16)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Fresh settings per test, unaffected by the developer's environment"""
    for key in list(os.environ):
        if key.upper().startswith("CULTIVO_"):
            monkeypatch.delenv(key, raising=False)
    set_config(CultivoConfig())
    yield
    set_config(None)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def season_window():
    return SeasonWindow(start=SEASON_START, end=SEASON_END)


@pytest.fixture
def primary_season(catalog, season_window):
    return build_season(season_window, catalog.phases, catalog.wash_windows,
                        catalog.varieties, mode=ScheduleMode.PRIMARY)


@pytest.fixture
def topcrop_season(catalog, season_window):
    return build_season(season_window, catalog.phases, catalog.wash_windows,
                        catalog.varieties, mode=ScheduleMode.TOPCROP)
