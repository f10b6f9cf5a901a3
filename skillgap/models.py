from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from skillgap.exceptions import InvalidRecordError
from skillgap.levels import SkillLevel

MIN_WEIGHT = 1
MAX_WEIGHT = 10


class ValidationStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    VALIDATED = "validated"
    REJECTED = "rejected"


class SkillSource(str, Enum):
    SELF = "self"
    RESUME = "resume"
    VALIDATED = "validated"


class Importance(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class StepType(str, Enum):
    ACQUIRE = "acquire"
    IMPROVE = "improve"
    REVALIDATE = "revalidate"


class Category(str, Enum):
    REQUIRED_GAP = "required_gap"
    REJECTED = "rejected"
    OPTIONAL_GAP = "optional_gap"


@dataclass(frozen=True)
class SkillId:
    value: str


@dataclass(frozen=True)
class SkillRecord:
    id: str
    name: str
    category: str | None = None


SkillRef = SkillId | SkillRecord


def skill_key(ref: SkillRef) -> str:
    if isinstance(ref, SkillRecord):
        return ref.id
    return ref.value


def clamp_weight(weight: int) -> int:
    return max(MIN_WEIGHT, min(MAX_WEIGHT, int(weight)))


@dataclass(frozen=True)
class Benchmark:
    skill_id: str
    skill_name: str
    importance: Importance
    weight: int
    required_level: SkillLevel
    is_active: bool = True

    def __post_init__(self):
        if not MIN_WEIGHT <= self.weight <= MAX_WEIGHT:
            raise InvalidRecordError(
                f"Benchmark weight for {self.skill_id!r} must be within "
                f"[{MIN_WEIGHT}, {MAX_WEIGHT}], got {self.weight}",
                field="weight",
            )

    @classmethod
    def build(
        cls,
        skill_id: str,
        skill_name: str,
        importance: Importance | str,
        weight: int,
        required_level: SkillLevel | str,
        is_active: bool = True,
    ) -> Benchmark:
        """Smart constructor: coerces enum labels and clamps the weight into range."""
        return cls(
            skill_id=skill_id,
            skill_name=skill_name,
            importance=Importance(importance),
            weight=clamp_weight(weight),
            required_level=SkillLevel(required_level),
            is_active=bool(is_active),
        )

    @property
    def is_required(self) -> bool:
        return self.importance is Importance.REQUIRED


@dataclass(frozen=True)
class UserSkillInput:
    skill_id: str
    level: SkillLevel
    source: SkillSource = SkillSource.SELF
    validation_status: ValidationStatus = ValidationStatus.NONE

    @classmethod
    def build(
        cls,
        skill_id: str,
        level: SkillLevel | str,
        source: SkillSource | str = SkillSource.SELF,
        validation_status: ValidationStatus | str = ValidationStatus.NONE,
    ) -> UserSkillInput:
        return cls(
            skill_id=skill_id,
            level=SkillLevel(level),
            source=SkillSource(source),
            validation_status=ValidationStatus(validation_status),
        )


@dataclass(frozen=True)
class SkillReadinessBreakdown:
    skill_id: str
    skill_name: str
    importance: Importance
    weight: int
    required_level: SkillLevel
    user_level: SkillLevel
    level_points: int
    validation_multiplier: float
    meets_requirement: bool
    is_missing: bool
    source: SkillSource | None
    validation_status: ValidationStatus | None
    weighted_score: float
    max_possible_score: int

    @property
    def is_required(self) -> bool:
        return self.importance is Importance.REQUIRED

    @property
    def is_validated(self) -> bool:
        return self.validation_status is ValidationStatus.VALIDATED


@dataclass(frozen=True)
class ReadinessResult:
    total_score: float
    max_possible_score: int
    percentage: int
    has_all_required: bool
    required_skills_met: int
    required_skills_total: int
    skills_matched: int
    skills_missing: int
    total_benchmarks: int
    breakdown: tuple[SkillReadinessBreakdown, ...] = ()


@dataclass(frozen=True)
class SkillGap:
    skill_id: str
    skill_name: str
    importance: Importance
    weight: int
    current_level: SkillLevel
    required_level: SkillLevel
    levels_needed: int
    validation_status: ValidationStatus | None
    reason: str
    priority: int


@dataclass(frozen=True)
class RoadmapStep:
    skill_id: str
    skill_name: str
    step_type: StepType
    importance: Importance
    weight: int
    current_level: SkillLevel
    target_level: SkillLevel
    levels_to_improve: int
    priority_tier: int
    priority_score: int
    category: Category
    rule: int
    action_description: str
    estimated_hours: int
    suggested_resources: tuple[str, ...] = ()


@dataclass(frozen=True)
class EdgeCaseReport:
    is_fully_ready: bool
    only_optional_gaps: bool
    has_pending_validation: bool
    pending_validation_count: int
    has_unvalidated_required: bool
    unvalidated_required_count: int
    message: str
    message_type: str


@dataclass(frozen=True)
class GeneratedRoadmap:
    steps: tuple[RoadmapStep, ...]
    tier_counts: Mapping[str, int]
    category_counts: Mapping[str, int]
    rule_counts: Mapping[int, int]
    rules_applied: tuple[tuple[str, int], ...]
    total_estimated_hours: int
    readiness_at_generation: int
    projected_readiness: int
    edge_case: EdgeCaseReport
    title: str = ""
    description: str = ""
