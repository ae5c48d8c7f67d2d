"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from api.config import Settings, get_settings
from auditor.audits.base import AuditContext

__all__ = ["SettingsDep", "AuditContextDep"]


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_audit_context(settings: SettingsDep) -> AuditContext:
    """Build a run context with its own computed artifact cache.

    Computed artifacts are keyed by the identity of the parsed trace, which
    is new on every request, so the cache lives and dies with the request.
    """
    return AuditContext.create(settings=settings)


AuditContextDep = Annotated[AuditContext, Depends(get_audit_context)]
