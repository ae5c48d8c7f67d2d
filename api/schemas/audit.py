"""Audit schemas."""

from typing import Any

from pydantic import BaseModel, Field

from auditor.audits.base import AuditMeta


class AuditMetaRead(BaseModel):
    """Schema for reading audit metadata."""

    id: str
    title: str
    description: str
    score_display_mode: str
    guidance_level: int | None = None
    required_artifacts: list[str] = Field(default_factory=list)

    @classmethod
    def from_meta(cls, meta: AuditMeta) -> "AuditMetaRead":
        return cls.model_validate(meta.to_dict())


class AuditResultRead(BaseModel):
    """Schema for reading an audit result."""

    id: str
    title: str
    description: str
    score: float | None
    score_display_mode: str
    display_value: str | None = None
    metric_savings: dict[str, float] | None = None
    guidance_level: int | None = None
    details: dict[str, Any]
    duration_ms: float | None = None
