"""Audit endpoints."""

from typing import Any

from fastapi import APIRouter, Body

from api.deps import AuditContextDep
from api.schemas.audit import AuditMetaRead, AuditResultRead
from api.schemas.responses import ErrorResponse, SuccessResponse
from auditor.artifacts import load_artifacts
from auditor.runner import get_audit, list_audits, run_audit

router = APIRouter(prefix="/audits", tags=["audits"])


@router.get("", response_model=SuccessResponse[list[AuditMetaRead]])
async def get_audits() -> SuccessResponse[list[AuditMetaRead]]:
    """List the available audits."""
    return SuccessResponse(data=[AuditMetaRead.from_meta(meta) for meta in list_audits()])


@router.get("/{audit_id}", response_model=SuccessResponse[AuditMetaRead])
async def get_audit_meta(audit_id: str) -> SuccessResponse[AuditMetaRead]:
    """Get metadata for one audit."""
    return SuccessResponse(data=AuditMetaRead.from_meta(get_audit(audit_id).meta))


@router.post(
    "/{audit_id}",
    response_model=SuccessResponse[AuditResultRead],
    summary="Run an audit against gathered artifacts",
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_audit_result(
    audit_id: str,
    context: AuditContextDep,
    artifacts_in: dict[str, Any] = Body(..., description="Gathered artifacts"),
) -> SuccessResponse[AuditResultRead]:
    """
    Run an audit.

    The body carries the gathered artifacts (`traces`, `TraceElements`).
    Returns 404 for an unknown audit, 422 when artifacts are missing or the
    trace cannot be processed.
    """
    audit_cls = get_audit(audit_id)
    artifacts = load_artifacts(artifacts_in)

    result = await run_audit(audit_cls(), artifacts, context)
    return SuccessResponse(data=AuditResultRead.model_validate(result.to_dict()))
