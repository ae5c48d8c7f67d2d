"""Base class for computed artifacts."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from auditor.audits.base import AuditContext


class ComputedArtifact(ABC):
    """
    A value derived from an artifact and memoized per audit context.

    Subclasses implement `compute` and callers use `request`, which routes
    through the context's ComputedArtifactCache.
    """

    name: ClassVar[str]

    @classmethod
    async def request(cls, data: Any, context: "AuditContext") -> Any:
        return await context.computed_cache.get_or_compute(
            cls.name,
            data,
            lambda: cls.compute(data, context),
        )

    @classmethod
    @abstractmethod
    async def compute(cls, data: Any, context: "AuditContext") -> Any:
        """Derive the value from `data`."""
        pass
