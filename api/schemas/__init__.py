"""Pydantic schemas package.

Use explicit imports:
    from api.schemas.audit import AuditMetaRead, AuditResultRead
    from api.schemas.responses import ErrorResponse, SuccessResponse
"""
