"""
Rule variants for the weekly event generator.

``PRIMARY`` is the garden calendar. ``TOPCROP`` is the reference comparison
table built on the same phases and wash windows; its simplifications are kept
on purpose and live only in its own RuleSet.
"""
from dataclasses import dataclass
from typing import Tuple

from cultivo.core.types import FallbackPolicy, ScheduleMode


@dataclass(frozen=True)
class RuleSet:
    """Everything that differs between schedule variants"""
    mode: ScheduleMode
    fallback_policy: FallbackPolicy

    # Ground range copied onto pots when True
    uniform_ground_volume: bool

    # Washing events carry only the washed group's plants when True
    scope_washing_to_group: bool

    id_prefix: str = ""

    # Day offsets from the week start
    irrigation_offsets: Tuple[int, ...] = (0, 5)
    fertilization_offset: int = 3
    harvest_offset: int = 5

    irrigation_note: str = "Riego regular. Verificar humedad del sustrato."
    washing_note: str = "Lavado de raíces - solo agua de la llave"
    washing_phase_label: str = ""
    harvest_note: str = "Recolección de frutos maduros"

    def event_id(self, *parts) -> str:
        return self.id_prefix + "-".join(str(p) for p in parts)


PRIMARY_RULES = RuleSet(
    mode=ScheduleMode.PRIMARY,
    fallback_policy=FallbackPolicy.USE_LAST,
    uniform_ground_volume=False,
    scope_washing_to_group=True,
)

# TODO: confirm with the grower whether pots really get the ground volume in the
# comparison table; kept as observed until then.
TOPCROP_RULES = RuleSet(
    mode=ScheduleMode.TOPCROP,
    fallback_policy=FallbackPolicy.USE_FIRST,
    uniform_ground_volume=True,
    scope_washing_to_group=False,
    id_prefix="tc-",
    irrigation_note="Riego con agua de la llave",
    washing_phase_label="Lavado",
)

_RULES = {
    ScheduleMode.PRIMARY: PRIMARY_RULES,
    ScheduleMode.TOPCROP: TOPCROP_RULES,
}


def get_rule_set(mode) -> RuleSet:
    """RuleSet for a mode or its string value"""
    return _RULES[ScheduleMode(mode)]
