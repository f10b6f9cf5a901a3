from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Sequence

from skillgap.levels import hours_between, level_points, levels_between, max_level
from skillgap.models import (
    Category,
    EdgeCaseReport,
    GeneratedRoadmap,
    Importance,
    RoadmapStep,
    SkillReadinessBreakdown,
    StepType,
    ValidationStatus,
)
from skillgap.resources import suggested_resources
from skillgap.scoring import percentage_of, round_half_up, scaled_score

logger = logging.getLogger(__name__)

REVIEW_SESSION_HOURS = 2

TIER_LABELS = {1: "high", 2: "medium", 3: "low"}


@dataclass(frozen=True)
class RoadmapRule:
    number: int
    description: str
    applies: Callable[[SkillReadinessBreakdown], bool]
    tier: int | None = None
    base_score: int = 0
    weight_factor: int = 0
    category: Category | None = None
    step_type: StepType | None = None

    @property
    def excludes(self) -> bool:
        return self.tier is None

    def priority_score(self, weight: int) -> int:
        return self.base_score + weight * self.weight_factor


# Evaluated top to bottom, first match wins. Rule 1 outranks rule 2 when a
# required skill is both missing and rejected.
RULES: tuple[RoadmapRule, ...] = (
    RoadmapRule(
        number=1,
        description="Required skill missing",
        applies=lambda e: e.importance is Importance.REQUIRED and e.is_missing,
        tier=1,
        base_score=80,
        weight_factor=5,
        category=Category.REQUIRED_GAP,
        step_type=StepType.ACQUIRE,
    ),
    RoadmapRule(
        number=2,
        description="Skill rejected by reviewer",
        applies=lambda e: e.validation_status is ValidationStatus.REJECTED,
        tier=1,
        base_score=70,
        weight_factor=5,
        category=Category.REJECTED,
        step_type=StepType.REVALIDATE,
    ),
    RoadmapRule(
        number=3,
        description="Required skill not yet validated",
        applies=lambda e: e.importance is Importance.REQUIRED
        and not e.is_missing
        and e.validation_status is not ValidationStatus.VALIDATED,
        tier=2,
        base_score=50,
        weight_factor=3,
        category=Category.REQUIRED_GAP,
        step_type=StepType.IMPROVE,
    ),
    RoadmapRule(
        number=4,
        description="Optional skill missing",
        applies=lambda e: e.importance is Importance.OPTIONAL and e.is_missing,
        tier=3,
        base_score=20,
        weight_factor=2,
        category=Category.OPTIONAL_GAP,
        step_type=StepType.ACQUIRE,
    ),
    RoadmapRule(
        number=5,
        description="Requirement met and validated",
        applies=lambda e: e.meets_requirement
        and e.validation_status is ValidationStatus.VALIDATED,
    ),
)


def classify(entry: SkillReadinessBreakdown) -> RoadmapRule | None:
    for rule in RULES:
        if rule.applies(entry):
            return rule
    return None


def _action_description(step_type: StepType, skill_name: str, target: str, levels: int) -> str:
    if step_type is StepType.ACQUIRE:
        return f"Start learning {skill_name} fundamentals and build up to {target} level proficiency."
    if step_type is StepType.REVALIDATE:
        return (
            f"Work through the reviewer feedback on {skill_name} and resubmit it for "
            f"validation at {target} level."
        )
    if levels > 0:
        return (
            f"Deepen your {skill_name} knowledge through practice and study to reach "
            f"{target} level, then request mentor validation."
        )
    return f"Request mentor validation for your {skill_name} skill to increase your readiness score."


def build_step(entry: SkillReadinessBreakdown, rule: RoadmapRule) -> RoadmapStep:
    target = max_level(entry.user_level, entry.required_level)
    levels = levels_between(entry.user_level, target)
    hours = hours_between(entry.user_level, target) if levels else REVIEW_SESSION_HOURS
    return RoadmapStep(
        skill_id=entry.skill_id,
        skill_name=entry.skill_name,
        step_type=rule.step_type,
        importance=entry.importance,
        weight=entry.weight,
        current_level=entry.user_level,
        target_level=target,
        levels_to_improve=levels,
        priority_tier=rule.tier,
        priority_score=rule.priority_score(entry.weight),
        category=rule.category,
        rule=rule.number,
        action_description=_action_description(rule.step_type, entry.skill_name, target.value, levels),
        estimated_hours=hours,
        suggested_resources=suggested_resources(entry.skill_name, rule.step_type, levels),
    )


def _step_order(step: RoadmapStep) -> tuple:
    return (-step.priority_score, -step.weight, step.skill_name, step.skill_id)


def _projected_readiness(
    breakdown: Sequence[SkillReadinessBreakdown],
    planned: Sequence[tuple[RoadmapStep, SkillReadinessBreakdown]],
    current: int,
) -> int:
    if not planned:
        return current
    max_possible = sum(entry.max_possible_score for entry in breakdown)
    if max_possible <= 0:
        return 100

    total = sum(scaled_score(entry) for entry in breakdown)
    for step, entry in planned:
        target_scaled = level_points(step.target_level) * 100 * step.weight
        total += max(0, target_scaled - scaled_score(entry))
    return min(100, round_half_up(total, max_possible))


def _edge_case(
    breakdown: Sequence[SkillReadinessBreakdown], steps: Sequence[RoadmapStep]
) -> EdgeCaseReport:
    pending = sum(1 for e in breakdown if e.validation_status is ValidationStatus.PENDING)
    unvalidated_required = sum(1 for s in steps if s.rule == 3)
    required_met = all(
        e.meets_requirement and not e.is_missing for e in breakdown if e.is_required
    )
    fully_ready = not steps and required_met
    only_optional = bool(steps) and all(s.category is Category.OPTIONAL_GAP for s in steps)

    if fully_ready:
        message = "You meet every requirement for this role with validated skills."
        message_type = "success"
    elif only_optional:
        message = (
            "All required skills are covered. The remaining steps are optional skills "
            "that strengthen your profile."
        )
        message_type = "info"
    elif unvalidated_required:
        message = (
            f"{unvalidated_required} required skill(s) still need mentor validation "
            "before they count in full."
        )
        message_type = "warning"
    elif steps:
        high = sum(1 for s in steps if s.priority_tier == 1)
        message = f"{high} high-priority step(s) to work on first."
        message_type = "info"
    else:
        message = (
            "Some required skills are validated below their target level. Ask a mentor "
            "to reassess them after further practice."
        )
        message_type = "info"

    return EdgeCaseReport(
        is_fully_ready=fully_ready,
        only_optional_gaps=only_optional,
        has_pending_validation=pending > 0,
        pending_validation_count=pending,
        has_unvalidated_required=unvalidated_required > 0,
        unvalidated_required_count=unvalidated_required,
        message=message,
        message_type=message_type,
    )


def _summary(role: str | None, steps: int, current: int, projected: int) -> tuple[str, str]:
    if role:
        title = f"Roadmap to {role}"
        intro = f"Your personalized learning path to become a {role}. "
    else:
        title = "Improvement roadmap"
        intro = ""
    plan = "this step" if steps == 1 else f"these {steps} steps"
    description = (
        f"{intro}Complete {plan} to improve your readiness from "
        f"{current}% to an estimated {projected}%."
    )
    return title, description


def generate_roadmap(
    breakdown: Sequence[SkillReadinessBreakdown],
    max_steps: int | None = None,
    role: str | None = None,
) -> GeneratedRoadmap:
    """Turn a readiness breakdown into ordered, deduplicated improvement steps.

    Each entry is matched against ``RULES`` (first match wins); only rules 1-4
    produce steps. Steps are ordered by priority score, then weight, then
    skill name, and a skill appears at most once. ``max_steps`` keeps the
    first N ordered steps (``0`` keeps none, ``None`` keeps all); the
    edge-case report always describes the full list.
    """
    if max_steps is not None and max_steps < 0:
        raise ValueError(f"max_steps must be zero or positive, got {max_steps}")

    candidates: list[tuple[RoadmapStep, SkillReadinessBreakdown]] = []
    for entry in breakdown:
        rule = classify(entry)
        if rule is None or rule.excludes:
            continue
        candidates.append((build_step(entry, rule), entry))

    candidates.sort(key=lambda pair: _step_order(pair[0]))
    seen: set[str] = set()
    ordered: list[tuple[RoadmapStep, SkillReadinessBreakdown]] = []
    for step, entry in candidates:
        if step.skill_id in seen:
            continue
        seen.add(step.skill_id)
        ordered.append((step, entry))

    planned = ordered if max_steps is None else ordered[:max_steps]
    steps = [step for step, _ in planned]

    tier_counts = {label: 0 for label in TIER_LABELS.values()}
    category_counts = {category.value: 0 for category in Category}
    rule_counts = {rule.number: 0 for rule in RULES if not rule.excludes}
    for step in steps:
        tier_counts[TIER_LABELS[step.priority_tier]] += 1
        category_counts[step.category.value] += 1
        rule_counts[step.rule] += 1

    rules_applied = tuple(
        (rule.description, rule_counts[rule.number])
        for rule in RULES
        if not rule.excludes and rule_counts[rule.number]
    )

    current = percentage_of(breakdown)
    projected = _projected_readiness(breakdown, planned, current)
    title, description = _summary(role, len(steps), current, projected)
    roadmap = GeneratedRoadmap(
        steps=tuple(steps),
        tier_counts=MappingProxyType(tier_counts),
        category_counts=MappingProxyType(category_counts),
        rule_counts=MappingProxyType(rule_counts),
        rules_applied=rules_applied,
        total_estimated_hours=sum(step.estimated_hours for step in steps),
        readiness_at_generation=current,
        projected_readiness=projected,
        edge_case=_edge_case(breakdown, [step for step, _ in ordered]),
        title=title,
        description=description,
    )
    logger.debug(
        "Roadmap generated: %d steps (%d high, %d medium, %d low)",
        len(steps),
        tier_counts["high"],
        tier_counts["medium"],
        tier_counts["low"],
    )
    return roadmap
