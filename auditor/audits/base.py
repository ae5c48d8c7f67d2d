"""Audit base class and the structures audits produce."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from api.config import Settings, get_settings
from auditor.artifacts import DEFAULT_PASS, Artifacts
from auditor.computed.cache import ComputedArtifactCache
from auditor.details import TableDetails, make_node_item, make_table_details


class ScoringMode(StrEnum):
    """How an audit's score should be displayed."""

    NUMERIC = "numeric"
    BINARY = "binary"
    MANUAL = "manual"
    INFORMATIVE = "informative"
    NOT_APPLICABLE = "notApplicable"
    ERROR = "error"


@dataclass(frozen=True)
class AuditMeta:
    """Static description of an audit."""

    id: str
    title: str
    description: str
    score_display_mode: ScoringMode
    required_artifacts: tuple[str, ...]
    guidance_level: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "score_display_mode": self.score_display_mode.value,
            "required_artifacts": list(self.required_artifacts),
            "guidance_level": self.guidance_level,
        }


@dataclass
class AuditContext:
    """Per-run state shared by the audits of one run."""

    settings: Settings
    computed_cache: ComputedArtifactCache
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        computed_cache: ComputedArtifactCache | None = None,
    ) -> "AuditContext":
        settings = settings or get_settings()
        if computed_cache is None:
            computed_cache = ComputedArtifactCache(max_entries=settings.computed_cache_max_entries)
        return cls(settings=settings, computed_cache=computed_cache)


@dataclass
class DiagnosticReport:
    """What an audit returns: score, savings and details."""

    score: float | None
    details: TableDetails
    metric_savings: dict[str, float] = field(default_factory=dict)
    not_applicable: bool = False
    display_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "metric_savings": self.metric_savings,
            "not_applicable": self.not_applicable,
            "display_value": self.display_value,
            "details": self.details.to_dict(),
        }


class Audit(ABC):
    """
    Base class for audits.

    Subclasses declare `meta` and implement `audit`, which receives validated
    artifacts and the run context and returns a DiagnosticReport.
    """

    DEFAULT_PASS: ClassVar[str] = DEFAULT_PASS

    meta: ClassVar[AuditMeta]

    make_node_item = staticmethod(make_node_item)
    make_table_details = staticmethod(make_table_details)

    @abstractmethod
    async def audit(self, artifacts: Artifacts, context: AuditContext) -> DiagnosticReport:
        """Run the audit and return its report."""
        pass
