from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from skillgap.levels import SkillLevel, level_points, meets_level
from skillgap.models import (
    Benchmark,
    ReadinessResult,
    SkillReadinessBreakdown,
    SkillSource,
    UserSkillInput,
    ValidationStatus,
)

logger = logging.getLogger(__name__)

# Trust discount for unverified claims, in percent so totals stay exact integers.
VALIDATION_MULTIPLIERS = MappingProxyType(
    {
        SkillSource.VALIDATED: 100,
        SkillSource.SELF: 80,
        SkillSource.RESUME: 70,
    }
)


def round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def validation_multiplier_pct(
    source: SkillSource | None, validation_status: ValidationStatus | None
) -> int:
    if validation_status is ValidationStatus.VALIDATED:
        return VALIDATION_MULTIPLIERS[SkillSource.VALIDATED]
    if source is None:
        return 0
    return VALIDATION_MULTIPLIERS[source]


def _breakdown_entry(
    benchmark: Benchmark, user_skill: UserSkillInput | None
) -> tuple[SkillReadinessBreakdown, int]:
    user_level = user_skill.level if user_skill else SkillLevel.NONE
    source = user_skill.source if user_skill else None
    status = user_skill.validation_status if user_skill else None

    points = level_points(user_level)
    multiplier = validation_multiplier_pct(source, status)
    scaled = points * multiplier * benchmark.weight

    entry = SkillReadinessBreakdown(
        skill_id=benchmark.skill_id,
        skill_name=benchmark.skill_name,
        importance=benchmark.importance,
        weight=benchmark.weight,
        required_level=benchmark.required_level,
        user_level=user_level,
        level_points=points,
        validation_multiplier=multiplier / 100,
        meets_requirement=meets_level(user_level, benchmark.required_level),
        is_missing=user_level is SkillLevel.NONE,
        source=source,
        validation_status=status,
        weighted_score=scaled / 100,
        max_possible_score=100 * benchmark.weight,
    )
    return entry, scaled


def calculate_readiness(
    benchmarks: Iterable[Benchmark], user_skills: Iterable[UserSkillInput]
) -> ReadinessResult:
    """Score a skill profile against a role's benchmarks.

    Only active benchmarks are scored and only they appear in the breakdown.
    User skills without a matching benchmark are ignored. Weights are assumed
    to be within [1, 10]; ``Benchmark`` refuses anything else at construction.

    ``percentage`` is ``round_half_up(100 * total / max)``. Scores are summed
    in hundredths of a point so the rounding does not depend on float error.
    """
    skills_by_id = {skill.skill_id: skill for skill in user_skills}
    active = [benchmark for benchmark in benchmarks if benchmark.is_active]

    breakdown: list[SkillReadinessBreakdown] = []
    total_scaled = 0
    max_possible = 0
    required_total = 0
    required_met = 0
    has_all_required = True
    matched = 0
    missing = 0

    for benchmark in active:
        entry, scaled = _breakdown_entry(benchmark, skills_by_id.get(benchmark.skill_id))
        breakdown.append(entry)
        total_scaled += scaled
        max_possible += entry.max_possible_score

        if entry.is_required:
            required_total += 1
            if entry.meets_requirement and not entry.is_missing:
                required_met += 1
            else:
                has_all_required = False

        if entry.is_missing:
            missing += 1
        else:
            matched += 1

    percentage = round_half_up(total_scaled, max_possible) if max_possible > 0 else 0

    logger.debug(
        "Readiness computed: %d%% over %d active benchmarks (%d required met of %d)",
        percentage,
        len(active),
        required_met,
        required_total,
    )
    return ReadinessResult(
        total_score=total_scaled / 100,
        max_possible_score=max_possible,
        percentage=percentage,
        has_all_required=has_all_required,
        required_skills_met=required_met,
        required_skills_total=required_total,
        skills_matched=matched,
        skills_missing=missing,
        total_benchmarks=len(active),
        breakdown=tuple(breakdown),
    )


def scaled_score(entry: SkillReadinessBreakdown) -> int:
    """Weighted score of a breakdown entry in hundredths of a point."""
    return entry.level_points * round(entry.validation_multiplier * 100) * entry.weight


def percentage_of(breakdown: Sequence[SkillReadinessBreakdown]) -> int:
    max_possible = sum(entry.max_possible_score for entry in breakdown)
    if max_possible <= 0:
        return 0
    total_scaled = sum(scaled_score(entry) for entry in breakdown)
    return round_half_up(total_scaled, max_possible)


def rank_roles(
    role_catalog: Mapping[str, Sequence[Benchmark]],
    user_skills: Sequence[UserSkillInput],
    limit: int = 3,
) -> list[tuple[str, int]]:
    results = [
        (role, calculate_readiness(benchmarks, user_skills).percentage)
        for role, benchmarks in role_catalog.items()
    ]
    results.sort(key=lambda r: (-r[1], r[0]))
    return results[:limit]
