from __future__ import annotations

from skillgap.levels import (
    LEVEL_ORDER,
    SkillLevel,
    hours_between,
    level_points,
    levels_between,
    max_level,
    meets_level,
)


def test_points_follow_the_fixed_scale():
    assert [level_points(level) for level in LEVEL_ORDER] == [0, 25, 50, 75, 100]
    assert SkillLevel.ADVANCED.points == 75


def test_levels_compare_by_rank_not_by_label():
    assert SkillLevel.EXPERT > SkillLevel.INTERMEDIATE
    assert SkillLevel.NONE < SkillLevel.BEGINNER
    assert meets_level(SkillLevel.EXPERT, SkillLevel.INTERMEDIATE)
    assert not meets_level(SkillLevel.BEGINNER, SkillLevel.INTERMEDIATE)
    assert meets_level(SkillLevel.NONE, SkillLevel.NONE)


def test_levels_between_never_negative():
    assert levels_between(SkillLevel.NONE, SkillLevel.ADVANCED) == 3
    assert levels_between(SkillLevel.EXPERT, SkillLevel.BEGINNER) == 0


def test_hours_sum_each_level_transition():
    assert hours_between(SkillLevel.NONE, SkillLevel.INTERMEDIATE) == 60
    assert hours_between(SkillLevel.NONE, SkillLevel.EXPERT) == 300
    assert hours_between(SkillLevel.ADVANCED, SkillLevel.EXPERT) == 160
    assert hours_between(SkillLevel.EXPERT, SkillLevel.EXPERT) == 0


def test_max_level():
    assert max_level(SkillLevel.ADVANCED, SkillLevel.INTERMEDIATE) is SkillLevel.ADVANCED
    assert max_level(SkillLevel.NONE, SkillLevel.BEGINNER) is SkillLevel.BEGINNER
