"""Audits.

Use explicit imports:
    from auditor.audits.base import Audit, AuditContext, AuditMeta
    from auditor.audits.layout_shift_elements import LayoutShiftElements
"""

__all__ = [
    # Base
    "Audit",
    "AuditContext",
    "AuditMeta",
    "DiagnosticReport",
    "ScoringMode",
    # Audits
    "LayoutShiftElements",
    "LayoutShiftElementsConfig",
]
