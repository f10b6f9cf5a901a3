from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, TypeVar

from skillgap.exceptions import CatalogError, InvalidRecordError
from skillgap.levels import SkillLevel
from skillgap.models import (
    Benchmark,
    Importance,
    SkillId,
    SkillRecord,
    SkillRef,
    SkillSource,
    UserSkillInput,
    ValidationStatus,
    skill_key,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _enum_field(record: Mapping[str, Any], key: str, enum_cls: type[E], default: E | None = None) -> E:
    raw = record.get(key)
    if raw is None:
        if default is not None:
            return default
        raise InvalidRecordError(f"Missing field {key!r}", field=key)
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        logger.warning("Rejected record: %s=%r is not one of %s", key, raw, allowed)
        raise InvalidRecordError(f"Unknown {key} {raw!r}; expected one of {allowed}", field=key) from None


def resolve_skill_ref(raw: Any) -> SkillRef:
    """Narrow a stored skill reference to an id or a fully populated record."""
    if isinstance(raw, str) and raw:
        return SkillId(raw)
    if isinstance(raw, Mapping):
        ref_id = raw.get("id") or raw.get("_id")
        name = raw.get("name")
        if isinstance(ref_id, str) and ref_id and isinstance(name, str) and name:
            return SkillRecord(id=ref_id, name=name, category=raw.get("category"))
    raise InvalidRecordError(f"Unresolvable skill reference {raw!r}", field="skill")


def _skill_from(record: Mapping[str, Any]) -> SkillRef:
    raw = record.get("skill", record.get("skillId"))
    return resolve_skill_ref(raw)


def benchmark_from_record(record: Mapping[str, Any]) -> Benchmark:
    ref = _skill_from(record)
    if isinstance(ref, SkillRecord):
        name = ref.name
    else:
        name = record.get("skillName") or ref.value

    weight = record.get("weight", 1)
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight != int(weight):
        raise InvalidRecordError(f"Weight must be an integer, got {weight!r}", field="weight")

    return Benchmark.build(
        skill_id=skill_key(ref),
        skill_name=name,
        importance=_enum_field(record, "importance", Importance),
        weight=int(weight),
        required_level=_enum_field(record, "requiredLevel", SkillLevel),
        is_active=bool(record.get("isActive", True)),
    )


def user_skill_from_record(record: Mapping[str, Any]) -> UserSkillInput:
    return UserSkillInput.build(
        skill_id=skill_key(_skill_from(record)),
        level=_enum_field(record, "level", SkillLevel),
        source=_enum_field(record, "source", SkillSource, SkillSource.SELF),
        validation_status=_enum_field(record, "validationStatus", ValidationStatus, ValidationStatus.NONE),
    )


def load_role_catalog(path: Path | str) -> dict[str, list[Benchmark]]:
    """Read ``[{"role": ..., "benchmarks": [...]}, ...]`` into ``{role: benchmarks}``."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as exc:
        raise CatalogError(f"Cannot read role catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in role catalog {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise CatalogError(f"Role catalog {path} must be a list of roles")

    catalog: dict[str, list[Benchmark]] = {}
    for item in raw:
        if not isinstance(item, Mapping) or "role" not in item:
            raise CatalogError(f"Role catalog {path} has an entry without a role name")
        role = item["role"]
        benchmarks = item.get("benchmarks", [])
        if not isinstance(benchmarks, list) or not all(isinstance(b, Mapping) for b in benchmarks):
            raise CatalogError(f"Role {role!r} in {path} must list its benchmarks as objects")
        try:
            catalog[role] = [benchmark_from_record(b) for b in benchmarks]
        except InvalidRecordError as exc:
            raise CatalogError(f"Role {role!r} in {path} has an invalid benchmark: {exc}") from exc
    logger.info("Loaded role catalog", extra={"roles": len(catalog), "path": str(path)})
    return catalog
