"""
Week index to phase resolution.

Lookup returns a tagged result so callers can tell a normal match from an
edge-of-season fallback.
"""
from dataclasses import dataclass
from typing import Union
import logging

from cultivo.core.types import FallbackPolicy, WeekIndex
from cultivo.data.contracts import PhaseDefinition, PhaseTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """A phase whose week range contains the index"""
    phase: PhaseDefinition

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class UsedFallback:
    """No range matched; ``phase`` was picked by the fallback policy"""
    phase: PhaseDefinition
    reason: str
    policy: FallbackPolicy

    @property
    def is_fallback(self) -> bool:
        return True


PhaseResolution = Union[Found, UsedFallback]


def resolve_phase(week_index: WeekIndex, phase_table: PhaseTable,
                  policy: FallbackPolicy) -> PhaseResolution:
    """First phase in table order covering ``week_index``, else the policy's pick."""
    for phase in phase_table:
        if phase.covers(week_index):
            return Found(phase)

    if policy == FallbackPolicy.USE_FIRST:
        fallback = phase_table.first
    else:
        fallback = phase_table.last

    reason = (
        f"week {week_index} outside configured weeks "
        f"{phase_table.first.start_week}-{phase_table.last_week}"
    )
    logger.debug(f"Phase fallback ({policy.value}) to '{fallback.id}': {reason}")
    return UsedFallback(phase=fallback, reason=reason, policy=policy)
