from __future__ import annotations

from pathlib import Path

from skillgap.levels import LEVEL_ORDER, SkillLevel
from skillgap.models import Benchmark, UserSkillInput
from skillgap.records import load_role_catalog
from skillgap.scoring import calculate_readiness, percentage_of, rank_roles

BASE_DIR = Path(__file__).resolve().parents[1]


def _sql(weight: int = 5, importance: str = "required", active: bool = True) -> Benchmark:
    return Benchmark.build("sql", "SQL", importance, weight, "intermediate", active)


def test_missing_required_skill_scores_zero():
    result = calculate_readiness([_sql()], [UserSkillInput.build("sql", "none")])
    entry = result.breakdown[0]
    assert entry.is_missing
    assert not entry.meets_requirement
    assert entry.weighted_score == 0
    assert entry.max_possible_score == 500
    assert not result.has_all_required
    assert result.percentage == 0


def test_self_reported_skill_is_discounted():
    result = calculate_readiness([_sql()], [UserSkillInput.build("sql", "advanced", "self", "none")])
    entry = result.breakdown[0]
    assert entry.meets_requirement
    assert not entry.is_missing
    assert entry.validation_multiplier == 0.8
    assert entry.weighted_score == 300
    assert result.percentage == 60
    assert result.has_all_required


def test_validated_expert_reaches_max_score():
    result = calculate_readiness(
        [_sql()], [UserSkillInput.build("sql", "expert", "self", "validated")]
    )
    entry = result.breakdown[0]
    assert entry.weighted_score == entry.max_possible_score == 500
    assert result.percentage == 100


def test_resume_source_counts_less_than_validated():
    resume = calculate_readiness([_sql(weight=4)], [UserSkillInput.build("sql", "expert", "resume")])
    validated = calculate_readiness([_sql(weight=4)], [UserSkillInput.build("sql", "expert", "validated")])
    assert resume.total_score == 280
    assert validated.total_score == 400
    assert resume.total_score < validated.total_score


def test_empty_benchmarks_are_vacuously_ready():
    result = calculate_readiness([], [UserSkillInput.build("sql", "expert")])
    assert result.percentage == 0
    assert result.total_benchmarks == 0
    assert result.has_all_required
    assert result.breakdown == ()


def test_inactive_benchmarks_are_excluded():
    benchmarks = [_sql(), Benchmark.build("git", "Git", "required", 9, "expert", is_active=False)]
    result = calculate_readiness(benchmarks, [UserSkillInput.build("sql", "intermediate", "validated")])
    assert result.total_benchmarks == 1
    assert [entry.skill_id for entry in result.breakdown] == ["sql"]
    assert result.has_all_required
    assert result.percentage == 50

    all_inactive = calculate_readiness([_sql(active=False)], [])
    assert all_inactive.percentage == 0
    assert all_inactive.total_benchmarks == 0
    assert all_inactive.has_all_required


def test_skills_without_benchmark_are_ignored():
    result = calculate_readiness(
        [_sql()],
        [UserSkillInput.build("sql", "beginner"), UserSkillInput.build("rust", "expert", "validated")],
    )
    assert len(result.breakdown) == 1
    assert result.skills_matched == 1


def test_present_but_below_level_fails_required():
    result = calculate_readiness([_sql()], [UserSkillInput.build("sql", "beginner", "validated")])
    entry = result.breakdown[0]
    assert not entry.is_missing
    assert not entry.meets_requirement
    assert not result.has_all_required
    assert result.required_skills_met == 0
    assert result.required_skills_total == 1


def test_optional_gaps_do_not_block_required():
    benchmarks = [
        _sql(),
        Benchmark.build("docker", "Docker", "optional", 3, "advanced"),
    ]
    result = calculate_readiness(benchmarks, [UserSkillInput.build("sql", "intermediate")])
    assert result.has_all_required
    assert result.required_skills_met == 1
    assert result.skills_matched == 1
    assert result.skills_missing == 1


def test_percentage_rounds_half_up():
    benchmarks = [
        Benchmark.build("a", "A", "optional", 1, "beginner"),
        Benchmark.build("b", "B", "optional", 1, "beginner"),
    ]
    # 25 of 200 points is 12.5%
    result = calculate_readiness(benchmarks, [UserSkillInput.build("a", "beginner", "validated")])
    assert result.percentage == 13


def test_calculation_is_deterministic():
    benchmarks = [_sql(), Benchmark.build("stats", "Statistics", "optional", 3, "advanced")]
    skills = [UserSkillInput.build("sql", "advanced", "resume"), UserSkillInput.build("stats", "beginner")]
    assert calculate_readiness(benchmarks, skills) == calculate_readiness(benchmarks, skills)


def test_raising_a_level_never_lowers_percentage():
    benchmarks = [_sql(weight=7), Benchmark.build("stats", "Statistics", "optional", 3, "advanced")]
    for source in ("self", "resume", "validated"):
        percentages = [
            calculate_readiness(
                benchmarks,
                [UserSkillInput.build("sql", level, source), UserSkillInput.build("stats", "intermediate")],
            ).percentage
            for level in LEVEL_ORDER
        ]
        assert percentages == sorted(percentages)


def test_weighted_score_never_exceeds_max():
    benchmarks = [Benchmark.build(f"s{w}", f"Skill {w}", "required", w, "beginner") for w in range(1, 11)]
    skills = [UserSkillInput.build(f"s{w}", SkillLevel.EXPERT, "validated") for w in range(1, 11)]
    result = calculate_readiness(benchmarks, skills)
    assert all(entry.weighted_score <= entry.max_possible_score for entry in result.breakdown)
    assert percentage_of(result.breakdown) == result.percentage == 100


def test_rank_roles_orders_catalog_by_readiness():
    catalog = load_role_catalog(BASE_DIR / "data" / "role_benchmarks.json")
    skills = [
        UserSkillInput.build("sql", "advanced", "validated"),
        UserSkillInput.build("statistics", "intermediate", "validated"),
        UserSkillInput.build("excel", "advanced", "validated"),
        UserSkillInput.build("python", "beginner", "validated"),
        UserSkillInput.build("communication", "intermediate", "validated"),
    ]
    assert rank_roles(catalog, skills) == [
        ("Product Analyst", 60),
        ("Data Analyst", 57),
        ("Backend Developer", 33),
    ]
    assert rank_roles(catalog, skills, limit=1) == [("Product Analyst", 60)]
