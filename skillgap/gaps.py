from __future__ import annotations

from typing import Iterable

from skillgap.levels import levels_between
from skillgap.models import SkillGap, SkillReadinessBreakdown, ValidationStatus


def _gap_reason(entry: SkillReadinessBreakdown) -> str | None:
    if entry.is_missing:
        return "missing"
    if entry.validation_status is ValidationStatus.REJECTED:
        return "rejected"
    if not entry.meets_requirement:
        return "below_level"
    if not entry.is_validated:
        return "unvalidated"
    return None


def extract_gaps(breakdown: Iterable[SkillReadinessBreakdown]) -> list[SkillGap]:
    """Entries that are missing, under their required level, rejected or not yet validated."""
    gaps: list[SkillGap] = []
    for entry in breakdown:
        reason = _gap_reason(entry)
        if reason is None:
            continue
        levels_needed = levels_between(entry.user_level, entry.required_level)
        priority = (100 if entry.is_required else 0) + levels_needed * 10 + entry.weight
        gaps.append(
            SkillGap(
                skill_id=entry.skill_id,
                skill_name=entry.skill_name,
                importance=entry.importance,
                weight=entry.weight,
                current_level=entry.user_level,
                required_level=entry.required_level,
                levels_needed=levels_needed,
                validation_status=entry.validation_status,
                reason=reason,
                priority=priority,
            )
        )

    gaps.sort(key=lambda g: (-g.priority, g.skill_name))
    return gaps
