from __future__ import annotations


class SkillGapError(Exception):
    """Base error for the readiness and roadmap package."""


class InvalidRecordError(SkillGapError, ValueError):
    """A benchmark or user-skill record does not satisfy the engine contract."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class CatalogError(SkillGapError):
    """The role catalog could not be read or has the wrong shape."""
