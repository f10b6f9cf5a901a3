from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class SkillLevel(str, Enum):
    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return LEVEL_ORDER.index(self)

    @property
    def points(self) -> int:
        return LEVEL_POINTS[self]

    def __ge__(self, other):
        if isinstance(other, SkillLevel):
            return self.rank >= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, SkillLevel):
            return self.rank > other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, SkillLevel):
            return self.rank <= other.rank
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, SkillLevel):
            return self.rank < other.rank
        return NotImplemented


LEVEL_ORDER: tuple[SkillLevel, ...] = (
    SkillLevel.NONE,
    SkillLevel.BEGINNER,
    SkillLevel.INTERMEDIATE,
    SkillLevel.ADVANCED,
    SkillLevel.EXPERT,
)

LEVEL_POINTS = MappingProxyType(
    {
        SkillLevel.NONE: 0,
        SkillLevel.BEGINNER: 25,
        SkillLevel.INTERMEDIATE: 50,
        SkillLevel.ADVANCED: 75,
        SkillLevel.EXPERT: 100,
    }
)

# Hours to move up one level, keyed by the level being left.
HOURS_PER_LEVEL = MappingProxyType(
    {
        SkillLevel.NONE: 20,
        SkillLevel.BEGINNER: 40,
        SkillLevel.INTERMEDIATE: 80,
        SkillLevel.ADVANCED: 160,
    }
)


def level_points(level: SkillLevel) -> int:
    return LEVEL_POINTS[level]


def meets_level(current: SkillLevel, required: SkillLevel) -> bool:
    return current.rank >= required.rank


def levels_between(current: SkillLevel, target: SkillLevel) -> int:
    return max(0, target.rank - current.rank)


def hours_between(current: SkillLevel, target: SkillLevel) -> int:
    """Estimated study hours to climb from ``current`` to ``target``; 0 when already there."""
    return sum(HOURS_PER_LEVEL[level] for level in LEVEL_ORDER[current.rank : target.rank])


def max_level(first: SkillLevel, second: SkillLevel) -> SkillLevel:
    return first if first.rank >= second.rank else second
