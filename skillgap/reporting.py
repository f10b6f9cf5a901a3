from __future__ import annotations

import pandas as pd

from skillgap.models import GeneratedRoadmap, ReadinessResult

BREAKDOWN_COLUMNS = [
    "Skill",
    "Importance",
    "Weight",
    "Required",
    "Current",
    "Status",
    "Meets",
    "Score",
    "Max",
]

ROADMAP_COLUMNS = ["Tier", "Priority", "Skill", "Step", "Category", "Target", "Hours", "Action"]


def _breakdown_rows(result: ReadinessResult) -> list[dict]:
    return [
        {
            "Skill": entry.skill_name,
            "Importance": entry.importance.value,
            "Weight": entry.weight,
            "Required": entry.required_level.value,
            "Current": entry.user_level.value,
            "Status": entry.validation_status.value if entry.validation_status else "absent",
            "Meets": entry.meets_requirement,
            "Score": entry.weighted_score,
            "Max": entry.max_possible_score,
        }
        for entry in result.breakdown
    ]


def breakdown_frame(result: ReadinessResult) -> pd.DataFrame:
    return pd.DataFrame(_breakdown_rows(result), columns=BREAKDOWN_COLUMNS)


def roadmap_frame(roadmap: GeneratedRoadmap) -> pd.DataFrame:
    rows = [
        {
            "Tier": step.priority_tier,
            "Priority": step.priority_score,
            "Skill": step.skill_name,
            "Step": step.step_type.value,
            "Category": step.category.value,
            "Target": step.target_level.value,
            "Hours": step.estimated_hours,
            "Action": step.action_description,
        }
        for step in roadmap.steps
    ]
    return pd.DataFrame(rows, columns=ROADMAP_COLUMNS)


def hours_by_tier(roadmap: GeneratedRoadmap) -> pd.Series:
    frame = roadmap_frame(roadmap)
    if frame.empty:
        return pd.Series(dtype="int64", name="Hours")
    return frame.groupby("Tier")["Hours"].sum()


def export_payload(role: str, result: ReadinessResult, roadmap: GeneratedRoadmap) -> dict:
    return {
        "role": role,
        "readiness": {
            "total_score": result.total_score,
            "max_possible_score": result.max_possible_score,
            "percentage": result.percentage,
            "has_all_required": result.has_all_required,
            "required_skills_met": result.required_skills_met,
            "required_skills_total": result.required_skills_total,
            "skills_matched": result.skills_matched,
            "skills_missing": result.skills_missing,
            "total_benchmarks": result.total_benchmarks,
            "breakdown": _breakdown_rows(result),
        },
        "roadmap": {
            "title": roadmap.title,
            "description": roadmap.description,
            "steps": [
                {
                    "skill_id": step.skill_id,
                    "skill_name": step.skill_name,
                    "step_type": step.step_type.value,
                    "importance": step.importance.value,
                    "current_level": step.current_level.value,
                    "target_level": step.target_level.value,
                    "priority_tier": step.priority_tier,
                    "priority_score": step.priority_score,
                    "category": step.category.value,
                    "action_description": step.action_description,
                    "estimated_hours": step.estimated_hours,
                    "suggested_resources": list(step.suggested_resources),
                }
                for step in roadmap.steps
            ],
            "summary": dict(roadmap.tier_counts),
            "categories": dict(roadmap.category_counts),
            "rules_applied": [
                {"description": description, "count": count}
                for description, count in roadmap.rules_applied
            ],
            "total_estimated_hours": roadmap.total_estimated_hours,
            "readiness_at_generation": roadmap.readiness_at_generation,
            "projected_readiness": roadmap.projected_readiness,
            "edge_case": {
                "is_fully_ready": roadmap.edge_case.is_fully_ready,
                "only_optional_gaps": roadmap.edge_case.only_optional_gaps,
                "pending_validation_count": roadmap.edge_case.pending_validation_count,
                "unvalidated_required_count": roadmap.edge_case.unvalidated_required_count,
                "message": roadmap.edge_case.message,
                "message_type": roadmap.edge_case.message_type,
            },
        },
    }
