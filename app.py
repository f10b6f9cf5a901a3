from __future__ import annotations

import json
import logging

import pandas as pd
import streamlit as st

from skillgap.config import settings
from skillgap.exceptions import CatalogError
from skillgap.gaps import extract_gaps
from skillgap.levels import LEVEL_ORDER
from skillgap.logging_config import setup_logging
from skillgap.models import Benchmark, SkillSource, UserSkillInput, ValidationStatus
from skillgap.records import load_role_catalog
from skillgap.reporting import breakdown_frame, export_payload, hours_by_tier, roadmap_frame
from skillgap.resources import build_training_links
from skillgap.roadmap import generate_roadmap
from skillgap.scoring import calculate_readiness, rank_roles

APP_TITLE = "SkillPath Readiness"
APP_SUBTITLE = "See how close you are to your target role, and what to do next"
LEVEL_LABELS = [level.value for level in LEVEL_ORDER]
SOURCE_LABELS = [source.value for source in SkillSource]
STATUS_LABELS = [status.value for status in ValidationStatus]
TIER_TITLES = {1: "High priority", 2: "Medium priority", 3: "Low priority"}
BANNER = {"success": st.success, "warning": st.warning, "info": st.info}
SCENARIO_PRESETS = {
    "Recent Graduate": {
        "sql": ("intermediate", "self", "none"),
        "statistics": ("beginner", "resume", "none"),
        "excel": ("advanced", "validated", "validated"),
        "python": ("beginner", "self", "pending"),
    },
    "Career Switcher": {
        "sql": ("advanced", "self", "rejected"),
        "communication": ("expert", "validated", "validated"),
        "excel": ("intermediate", "resume", "none"),
    },
    "Validated Developer": {
        "python": ("expert", "validated", "validated"),
        "sql": ("advanced", "validated", "validated"),
        "git": ("intermediate", "validated", "validated"),
        "docker": ("beginner", "self", "none"),
    },
}

logger = logging.getLogger(__name__)


def ensure_state():
    if "skill_defaults" not in st.session_state:
        st.session_state["skill_defaults"] = {}
    if "result" not in st.session_state:
        st.session_state["result"] = None


def inject_styles():
    st.markdown(
        """
        <style>
        .hero-wrap {
            background: radial-gradient(circle at 20% 20%, #1ed760 0%, #10954b 35%, #0f172a 100%);
            border-radius: 18px;
            padding: 28px;
            color: #f8fff7;
            margin-bottom: 18px;
        }
        .hero-title { font-size: 2.2rem; font-weight: 700; margin-bottom: 0.4rem; }
        .hero-sub { opacity: 0.92; font-size: 1.03rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def skill_names(catalog: dict[str, list[Benchmark]]) -> dict[str, str]:
    names: dict[str, str] = {}
    for benchmarks in catalog.values():
        for benchmark in benchmarks:
            names.setdefault(benchmark.skill_id, benchmark.skill_name)
    return dict(sorted(names.items(), key=lambda item: item[1]))


def render_hero():
    st.markdown(
        f"""
        <div class="hero-wrap">
          <div class="hero-title">{APP_TITLE}</div>
          <div class="hero-sub">{APP_SUBTITLE}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def collect_skills(names: dict[str, str]) -> list[UserSkillInput]:
    defaults = st.session_state["skill_defaults"]
    user_skills: list[UserSkillInput] = []
    for skill_id, name in names.items():
        level, source, status = defaults.get(skill_id, ("none", "self", "none"))
        c1, c2, c3 = st.columns(3)
        level = c1.selectbox(name, LEVEL_LABELS, index=LEVEL_LABELS.index(level), key=f"level_{skill_id}")
        source = c2.selectbox("Source", SOURCE_LABELS, index=SOURCE_LABELS.index(source), key=f"source_{skill_id}")
        status = c3.selectbox(
            "Validation", STATUS_LABELS, index=STATUS_LABELS.index(status), key=f"status_{skill_id}"
        )
        if level != "none":
            user_skills.append(UserSkillInput.build(skill_id, level, source, status))
    return user_skills


def render_workspace(catalog: dict[str, list[Benchmark]]):
    roles = list(catalog.keys())
    names = skill_names(catalog)

    with st.expander("Section A - Target Role + Skills", expanded=True):
        with st.form("skills_form"):
            role = st.selectbox("Target role", roles)
            st.markdown("Set each skill you have; leave `none` for skills you do not have yet.")
            user_skills = collect_skills(names)
            submitted = st.form_submit_button("Calculate readiness")

    if submitted:
        result = calculate_readiness(catalog[role], user_skills)
        roadmap = generate_roadmap(result.breakdown, max_steps=settings.ROADMAP_MAX_STEPS, role=role)
        st.session_state["result"] = (role, user_skills, result, roadmap)
        logger.info(
            "Readiness calculated",
            extra={"role": role, "percentage": result.percentage, "steps": len(roadmap.steps)},
        )

    if not st.session_state.get("result"):
        st.info("Choose a role, set your skills and calculate readiness to view results.")
        return
    role, user_skills, result, roadmap = st.session_state["result"]

    with st.expander("Section B - Readiness Dashboard", expanded=True):
        c1, c2, c3 = st.columns(3)
        c1.metric("Readiness", f"{result.percentage}%", f"{result.total_score:g} / {result.max_possible_score}")
        c1.progress(result.percentage / 100.0)
        c2.metric(
            "Required skills met",
            f"{result.required_skills_met} / {result.required_skills_total}",
            "All required met" if result.has_all_required else "Requirements missing",
        )
        c3.metric("Skills matched", f"{result.skills_matched} / {result.total_benchmarks}", f"{result.skills_missing} missing")

        frame = breakdown_frame(result)
        if not frame.empty:
            st.bar_chart(frame.set_index("Skill")[["Score", "Max"]])
        st.dataframe(frame, use_container_width=True, hide_index=True)

        gaps = extract_gaps(result.breakdown)
        if gaps:
            gap_df = pd.DataFrame(
                [
                    {"Skill": g.skill_name, "Reason": g.reason, "Levels needed": g.levels_needed, "Priority": g.priority}
                    for g in gaps
                ]
            )
            st.markdown("Skill gaps")
            st.dataframe(gap_df, use_container_width=True, hide_index=True)

    with st.expander("Section C - Improvement Roadmap", expanded=True):
        st.markdown(f"**{roadmap.title}**")
        st.caption(roadmap.description)
        BANNER.get(roadmap.edge_case.message_type, st.info)(roadmap.edge_case.message)
        if roadmap.edge_case.has_pending_validation:
            st.caption(f"{roadmap.edge_case.pending_validation_count} skill(s) are awaiting mentor review.")

        a, b, c = st.columns(3)
        a.metric("Current", f"{roadmap.readiness_at_generation}%")
        b.metric("Projected", f"{roadmap.projected_readiness}%")
        c.metric("Estimated effort", f"{roadmap.total_estimated_hours} h")

        for tier, title in TIER_TITLES.items():
            tier_steps = [step for step in roadmap.steps if step.priority_tier == tier]
            st.markdown(f"**{title}** ({len(tier_steps)})")
            for step in tier_steps:
                st.write(f"- {step.action_description} _(~{step.estimated_hours} h)_")

        if roadmap.rules_applied:
            st.caption(" | ".join(f"{description}: {count}" for description, count in roadmap.rules_applied))
        st.dataframe(roadmap_frame(roadmap), use_container_width=True, hide_index=True)
        effort = hours_by_tier(roadmap)
        if not effort.empty:
            st.bar_chart(effort)

    with st.expander("Section D - Role Comparison + Training", expanded=True):
        ranked = rank_roles(catalog, user_skills, limit=settings.TOP_ROLES)
        st.dataframe(
            pd.DataFrame([{"Role": name, "Readiness %": pct} for name, pct in ranked]),
            use_container_width=True,
            hide_index=True,
        )
        for item in build_training_links(roadmap.steps):
            st.write(f"- [{item['provider']}: {item['title']}]({item['url']})")

    with st.expander("Section E - Export", expanded=True):
        report = export_payload(role, result, roadmap)
        st.download_button(
            "Download Readiness JSON",
            data=json.dumps(report, indent=2),
            file_name=f"{role.lower().replace(' ', '_')}_readiness.json",
            mime="application/json",
        )


setup_logging()
st.set_page_config(page_title=APP_TITLE, layout="wide")
inject_styles()
ensure_state()
render_hero()

with st.sidebar:
    st.markdown("### Presets")
    preset = st.selectbox("Load preset profile", list(SCENARIO_PRESETS.keys()))
    if st.button("Apply Preset"):
        st.session_state["skill_defaults"] = SCENARIO_PRESETS[preset]
        st.session_state["result"] = None
        for key in [k for k in st.session_state.keys() if k.startswith(("level_", "source_", "status_"))]:
            del st.session_state[key]
        st.success(f"Loaded preset: {preset}")

try:
    role_catalog = load_role_catalog(settings.CATALOG_PATH)
except CatalogError as exc:
    st.error(str(exc))
    st.stop()

render_workspace(role_catalog)
