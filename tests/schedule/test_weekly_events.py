"""
Tests for per-week event generation.
"""
from datetime import date, datetime

import pytest

from cultivo.core.types import EventType, VolumeRange
from cultivo.data.catalog import default_catalog
from cultivo.data.contracts import WashWindow, WashWindowTable
from cultivo.schedule import PRIMARY_RULES, TOPCROP_RULES, generate_week


class TestGenerateWeek:

    def setup_method(self):
        self.catalog = default_catalog()
        self.phases = self.catalog.phases
        self.varieties = self.catalog.varieties
        self.wash_windows = self.catalog.wash_windows

    def _week(self, week_start, week_index, phase_id, rules=PRIMARY_RULES, wash_windows=None):
        return generate_week(
            week_start, week_index, self.phases.get(phase_id),
            self.wash_windows if wash_windows is None else wash_windows,
            self.varieties, self.phases.harvest_phase_id, rules=rules,
        )

    def test_germination_week_is_irrigation_only(self):
        """Test that a phase without products yields just the two irrigations"""
        events = self._week(date(2025, 9, 4), 0, "germinacion")

        assert [e.type for e in events] == [EventType.IRRIGATION, EventType.IRRIGATION]
        assert [e.id for e in events] == ["riego-0-0-20250904", "riego-0-1-20250909"]
        assert events[0].scheduled_at == datetime(2025, 9, 4)

    def test_growth_week_day_offsets(self):
        """Test irrigation on days 0 and 5 and fertilization on day 3"""
        events = self._week(date(2025, 9, 18), 2, "crecimiento")

        assert [(e.type, e.date) for e in events] == [
            (EventType.IRRIGATION, date(2025, 9, 18)),
            (EventType.FERTILIZATION, date(2025, 9, 21)),
            (EventType.IRRIGATION, date(2025, 9, 23)),
        ]
        fert = events[1]
        assert fert.id == "fert-2-20250921"
        assert fert.products == ("Compost", "Purín de Ortiga")
        assert fert.doses == (100, 20)
        assert fert.plant_ids == self.varieties.plant_ids

    def test_primary_volumes_differ_by_method(self):
        """Test that primary mode keeps separate pot and ground ranges"""
        events = self._week(date(2025, 9, 18), 2, "crecimiento")

        assert events[0].volumes.pot == VolumeRange(0.5, 1.0)
        assert events[0].volumes.ground == VolumeRange(1.0, 2.0)

    def test_topcrop_uses_ground_volume_for_pots(self):
        """Test that topcrop copies the ground range onto pots"""
        events = self._week(date(2025, 9, 18), 2, "crecimiento", rules=TOPCROP_RULES)

        for event in events:
            assert event.volumes.pot == VolumeRange(1.0, 2.0)
            assert event.volumes.ground == VolumeRange(1.0, 2.0)
        assert events[0].id == "tc-riego-2-0-20250918"
        assert events[1].id == "tc-fert-2-20250921"

    def test_washing_replaces_fertilization(self):
        """Test the cream-mandarine wash week: washing on day 3, no fertilization"""
        events = self._week(date(2025, 11, 13), 10, "floracion")

        types = [e.type for e in events]
        assert EventType.FERTILIZATION not in types
        assert types == [EventType.IRRIGATION, EventType.WASHING, EventType.IRRIGATION]

        washing = events[1]
        assert washing.id == "lavado-10-cream-mandarine-20251116"
        assert washing.date == date(2025, 11, 16)
        assert washing.plant_ids == ("cream-mandarine-suelo", "cream-mandarine-maceta")
        assert washing.products == ()
        assert washing.phase_name == "Floración y Cuajado"

    def test_topcrop_washing_covers_all_plants(self):
        """Test that topcrop washing events list every plant under the wash label"""
        events = self._week(date(2025, 11, 13), 10, "floracion", rules=TOPCROP_RULES)

        washing = [e for e in events if e.type == EventType.WASHING]
        assert len(washing) == 1
        assert washing[0].plant_ids == self.varieties.plant_ids
        assert washing[0].phase_name == "Lavado"
        assert washing[0].id == "tc-lavado-10-20251116"

    def test_washing_interval_is_half_open(self):
        """Test that the harvest start day is no longer a washing day"""
        windows = WashWindowTable(windows=(
            WashWindow(group="fresh-candy", washing_date=date(2025, 9, 14),
                       harvest_start=date(2025, 9, 21), harvest_end=date(2025, 9, 30)),
        ))

        # day 3 of this week is 2025-09-21, equal to harvest_start
        events = self._week(date(2025, 9, 18), 2, "crecimiento", wash_windows=windows)
        assert EventType.WASHING not in [e.type for e in events]
        assert EventType.FERTILIZATION in [e.type for e in events]

        # day 3 is 2025-09-14, equal to washing_date
        events = self._week(date(2025, 9, 11), 1, "germinacion", wash_windows=windows)
        assert [e.type for e in events].count(EventType.WASHING) == 1

    def test_overlapping_wash_windows_emit_one_event_per_group(self):
        """Test two groups washing in the same week get separate scoped events"""
        windows = WashWindowTable(windows=(
            WashWindow(group="cream-mandarine", washing_date=date(2025, 9, 20),
                       harvest_start=date(2025, 9, 28), harvest_end=date(2025, 10, 5)),
            WashWindow(group="fresh-candy", washing_date=date(2025, 9, 19),
                       harvest_start=date(2025, 9, 25), harvest_end=date(2025, 10, 5)),
        ))
        events = self._week(date(2025, 9, 18), 2, "crecimiento", wash_windows=windows)

        washing = [e for e in events if e.type == EventType.WASHING]
        assert [w.plant_ids for w in washing] == [
            ("cream-mandarine-suelo", "cream-mandarine-maceta"),
            ("fresh-candy-suelo",),
        ]
        assert len({e.id for e in events}) == len(events)
        assert EventType.FERTILIZATION not in [e.type for e in events]

    def test_topcrop_overlapping_wash_windows_emit_single_event(self):
        """Test unscoped washing is one event per week however many windows are open"""
        windows = WashWindowTable(windows=(
            WashWindow(group="cream-mandarine", washing_date=date(2025, 9, 20),
                       harvest_start=date(2025, 9, 28), harvest_end=date(2025, 10, 5)),
            WashWindow(group="fresh-candy", washing_date=date(2025, 9, 19),
                       harvest_start=date(2025, 9, 25), harvest_end=date(2025, 10, 5)),
        ))
        events = self._week(date(2025, 9, 18), 2, "crecimiento",
                            rules=TOPCROP_RULES, wash_windows=windows)

        washing = [e for e in events if e.type == EventType.WASHING]
        assert len(washing) == 1
        assert washing[0].id == "tc-lavado-2-20250921"
        assert washing[0].plant_ids == self.varieties.plant_ids
        assert EventType.FERTILIZATION not in [e.type for e in events]

    def test_harvest_phase_adds_harvest_on_day_five(self):
        """Test that the harvest phase schedules a harvest after the second irrigation"""
        events = self._week(date(2026, 2, 12), 23, "cosecha")

        assert [e.type for e in events] == [
            EventType.IRRIGATION, EventType.IRRIGATION, EventType.HARVEST,
        ]
        harvest = events[-1]
        assert harvest.id == "cosecha-23-20260217"
        assert harvest.date == date(2026, 2, 17)
        # same day as the second irrigation, emitted after it
        assert events[1].date == harvest.date

    def test_harvest_phase_id_is_required(self):
        """Test a caller cannot silently drop harvest events by omitting the harvest id"""
        with pytest.raises(TypeError):
            generate_week(date(2026, 2, 12), 23, self.phases.get("cosecha"),
                          self.wash_windows, self.varieties)

    @pytest.mark.parametrize("rules", [PRIMARY_RULES, TOPCROP_RULES])
    def test_harvest_phase_harvests_in_both_modes(self, rules):
        """Test the harvest phase emits a harvest event whatever the rule variant"""
        events = generate_week(
            date(2026, 2, 12), 23, self.phases.get("cosecha"), self.wash_windows,
            self.varieties, self.phases.harvest_phase_id, rules=rules,
        )
        assert [e.type for e in events].count(EventType.HARVEST) == 1

    def test_other_phases_do_not_harvest(self):
        """Test only the phase named by the harvest id harvests"""
        events = self._week(date(2026, 1, 22), 20, "fructificacion")
        assert EventType.HARVEST not in [e.type for e in events]

    @pytest.mark.parametrize("rules", [PRIMARY_RULES, TOPCROP_RULES])
    def test_events_are_sorted(self, rules):
        """Test events come back in date order"""
        events = self._week(date(2026, 2, 12), 23, "cosecha", rules=rules)
        stamps = [e.scheduled_at for e in events]
        assert stamps == sorted(stamps)
