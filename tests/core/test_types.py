"""
Tests for core value types and the exception hierarchy.
"""
from datetime import date, datetime

import pytest

from cultivo.core.exceptions import (
    ConfigurationError, CultivoError, DataSourceError, DoseMismatchError, ErrorContext,
    handle_exception,
)
from cultivo.core.types import (
    Event, EventType, IrrigationVolumes, PlantingMethod, VolumeRange, WeekBucket,
)


VOLUMES = IrrigationVolumes(pot=VolumeRange(0.5, 1.0), ground=VolumeRange(1.0, 2.0))


class TestEvent:

    def test_dose_mismatch(self):
        """Test events refuse unequal product and dose lists"""
        with pytest.raises(DoseMismatchError):
            Event(id="fert-0-20250907", type=EventType.FERTILIZATION,
                  scheduled_at=datetime(2025, 9, 7), volumes=VOLUMES,
                  plant_ids=("a",), phase_name="x", products=("Compost",), doses=())

    def test_applies_to(self):
        """Test plant membership"""
        event = Event(id="riego-0-0-20250904", type=EventType.IRRIGATION,
                      scheduled_at=datetime(2025, 9, 4), volumes=VOLUMES,
                      plant_ids=("a", "b"), phase_name="x")
        assert event.applies_to("a")
        assert not event.applies_to("c")
        assert event.date == date(2025, 9, 4)

    def test_labels(self):
        """Test Spanish event labels"""
        assert EventType.WASHING.label == "Lavado"
        assert EventType.FERTILIZATION.label == "Fertilización"


class TestVolumes:

    def test_for_method(self):
        """Test range selection by planting method"""
        assert VOLUMES.for_method(PlantingMethod.POT) == VolumeRange(0.5, 1.0)
        assert VOLUMES.for_method(PlantingMethod.GROUND) == VolumeRange(1.0, 2.0)

    def test_ground_only(self):
        """Test the ground range copied onto pots"""
        assert VOLUMES.ground_only().pot == VolumeRange(1.0, 2.0)

    def test_str(self):
        """Test the litre range label"""
        assert str(VolumeRange(0.1, 0.2)) == "0.1-0.2L"


class TestWeekBucket:

    def test_number_and_contains(self):
        """Test one-based number and inclusive bounds"""
        bucket = WeekBucket(start=date(2025, 9, 4), end=date(2025, 9, 10), week_index=0)
        assert bucket.number == 1
        assert bucket.contains(date(2025, 9, 10))
        assert not bucket.contains(date(2025, 9, 11))
        assert bucket.events == ()


class TestExceptions:

    def test_context_in_message(self):
        """Test context fields are appended to the message"""
        err = ConfigurationError("bad table", ErrorContext(phase_id="floracion", week_index=9))
        assert "[Phase: floracion]" in str(err)
        assert "[Week: 9]" in str(err)

    @pytest.mark.parametrize("exc, expected", [
        (FileNotFoundError("x"), ConfigurationError),
        (ValueError("x"), ConfigurationError),
        (ConnectionError("x"), DataSourceError),
        (TimeoutError("x"), DataSourceError),
        (RuntimeError("x"), CultivoError),
    ])
    def test_handle_exception(self, exc, expected):
        """Test third-party exceptions are mapped into the hierarchy"""
        assert type(handle_exception(exc)) is expected

    def test_handle_exception_passthrough(self):
        """Test cultivo errors are returned unchanged"""
        err = DoseMismatchError("x")
        assert handle_exception(err) is err
