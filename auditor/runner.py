"""Audit runner.

Resolves audits by id, checks their required artifacts, runs them and
wraps their output in an AuditResult.
"""

import time
from dataclasses import dataclass
from typing import Any

import structlog

from api.exceptions import MissingArtifactError, NotFoundError
from auditor.artifacts import Artifacts
from auditor.audits.base import Audit, AuditContext, AuditMeta, DiagnosticReport, ScoringMode
from auditor.audits.layout_shift_elements import LayoutShiftElements
from auditor.details import TableDetails

logger = structlog.get_logger(__name__)

AUDITS: dict[str, type[Audit]] = {
    LayoutShiftElements.meta.id: LayoutShiftElements,
}


@dataclass
class AuditResult:
    """A finished audit, ready for display or serialization."""

    id: str
    title: str
    description: str
    score: float | None
    score_display_mode: ScoringMode
    details: TableDetails
    display_value: str | None = None
    metric_savings: dict[str, float] | None = None
    guidance_level: int | None = None
    duration_ms: float | None = None

    @classmethod
    def from_product(
        cls,
        meta: AuditMeta,
        product: DiagnosticReport,
        duration_ms: float | None = None,
    ) -> "AuditResult":
        score_display_mode = meta.score_display_mode
        score = product.score
        if product.not_applicable:
            score_display_mode = ScoringMode.NOT_APPLICABLE
            score = None

        return cls(
            id=meta.id,
            title=meta.title,
            description=meta.description,
            score=score,
            score_display_mode=score_display_mode,
            details=product.details,
            display_value=product.display_value,
            metric_savings=product.metric_savings,
            guidance_level=meta.guidance_level,
            duration_ms=duration_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "score": self.score,
            "score_display_mode": self.score_display_mode.value,
            "display_value": self.display_value,
            "metric_savings": self.metric_savings,
            "guidance_level": self.guidance_level,
            "details": self.details.to_dict(),
            "duration_ms": round(self.duration_ms, 2) if self.duration_ms is not None else None,
        }


def get_audit(audit_id: str) -> type[Audit]:
    """Look up an audit class by id."""
    try:
        return AUDITS[audit_id]
    except KeyError:
        raise NotFoundError("Audit", audit_id) from None


def list_audits() -> list[AuditMeta]:
    return [audit_cls.meta for audit_cls in AUDITS.values()]


async def run_audit(
    audit: str | Audit,
    artifacts: Artifacts,
    context: AuditContext | None = None,
) -> AuditResult:
    """
    Run one audit against validated artifacts.

    Args:
        audit: Audit id or a configured Audit instance
        artifacts: Validated artifacts
        context: Run context; a fresh one is created if omitted

    Returns:
        AuditResult for the audit

    Raises:
        NotFoundError: If the audit id is unknown
        MissingArtifactError: If a required artifact is absent
        ShiftscopeError: Whatever the audit itself raises
    """
    if isinstance(audit, str):
        audit = get_audit(audit)()
    context = context or AuditContext.create()
    meta = audit.meta

    missing = artifacts.missing_artifacts(meta.required_artifacts)
    if missing:
        raise MissingArtifactError(missing, audit_id=meta.id)

    logger.info("audit_started", audit_id=meta.id)
    start = time.perf_counter()

    try:
        product = await audit.audit(artifacts, context)
    except Exception as e:
        logger.warning("audit_failed", audit_id=meta.id, error=str(e))
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "audit_completed",
        audit_id=meta.id,
        not_applicable=product.not_applicable,
        duration_ms=round(duration_ms, 2),
    )
    return AuditResult.from_product(meta, product, duration_ms=duration_ms)
