from __future__ import annotations

from typing import Sequence
from urllib.parse import quote_plus

from skillgap.models import RoadmapStep, StepType

RESOURCE_SUGGESTIONS = {
    "default": (
        "Online courses (Coursera, Udemy, Pluralsight)",
        "Official documentation and tutorials",
        "Practice projects and hands-on exercises",
        "Community forums and discussion groups",
    ),
    "programming": (
        "Algorithm practice on LeetCode or Exercism",
        "Open source contributions on GitHub",
        "A personal project built end to end",
        "Code review sessions with peers",
    ),
    "soft_skills": (
        "Books and audiobooks on the topic",
        "Workshops and webinars",
        "Mentorship sessions",
        "Real-world practice opportunities",
    ),
}

VALIDATION_RESOURCES = (
    "Schedule a mentor validation session",
    "Prepare examples of your work",
)

CATEGORY_KEYWORDS = {
    "soft_skills": ("communication", "leadership", "teamwork", "presentation", "negotiation"),
    "programming": ("python", "javascript", "java", "sql", "programming", "coding", "typescript"),
}


def skill_category(skill_name: str) -> str:
    lowered = skill_name.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return "default"


def suggested_resources(
    skill_name: str, step_type: StepType, levels_to_improve: int = 1
) -> tuple[str, ...]:
    if step_type is not StepType.ACQUIRE and levels_to_improve == 0:
        return VALIDATION_RESOURCES
    return RESOURCE_SUGGESTIONS[skill_category(skill_name)]


TRAINING_PROVIDERS = {
    "default": (
        ("Coursera", "https://www.coursera.org/search?query={query}"),
        ("edX", "https://www.edx.org/search?q={query}"),
    ),
    "programming": (
        ("Exercism", "https://exercism.org/tracks?criteria={query}"),
        ("Udemy", "https://www.udemy.com/courses/search/?q={query}"),
    ),
    "soft_skills": (
        ("LinkedIn Learning", "https://www.linkedin.com/learning/search?keywords={query}"),
        ("Coursera", "https://www.coursera.org/search?query={query}"),
    ),
}


def build_training_links(steps: Sequence[RoadmapStep], limit: int = 3) -> list[dict[str, str]]:
    """Search links for the first ``limit`` steps that still need learning.

    Validation-only steps are skipped since a mentor review, not a course,
    closes them. Providers are picked by the skill's category and the query
    carries the step's target level.
    """
    links: list[dict[str, str]] = []
    learning = [step for step in steps if step.levels_to_improve > 0][:limit]
    for step in learning:
        query = quote_plus(f"{step.skill_name} {step.target_level.value}")
        for provider, template in TRAINING_PROVIDERS[skill_category(step.skill_name)]:
            links.append(
                {
                    "skill": step.skill_name,
                    "provider": provider,
                    "title": f"{step.skill_name} to {step.target_level.value}",
                    "url": template.format(query=query),
                }
            )
    return links
