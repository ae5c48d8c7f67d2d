"""Computed artifacts derived from gathered artifacts.

Use explicit imports:
    from auditor.computed.cache import ComputedArtifactCache
    from auditor.computed.cumulative_layout_shift import CumulativeLayoutShift
"""

__all__ = [
    "ComputedArtifact",
    "ComputedArtifactCache",
    "CumulativeLayoutShift",
    "ProcessedTrace",
    "ProcessedTraceArtifact",
]
