"""Cumulative Layout Shift (CLS) computed from a trace.

CLS is the largest sum of layout shift scores within any session window.
A session window closes when more than 1s passes without a shift, or once
it spans 5s.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from api.exceptions import TraceProcessingError
from auditor.artifacts import Trace
from auditor.computed.base import ComputedArtifact
from auditor.computed.processed_trace import ProcessedTrace, ProcessedTraceArtifact

if TYPE_CHECKING:
    from auditor.audits.base import AuditContext

logger = structlog.get_logger(__name__)

# Session window bounds, in trace microseconds
SESSION_GAP_US = 1_000_000
SESSION_LIMIT_US = 5_000_000

# Shifts flagged with recent input still count this early in the page lifetime
RECENT_INPUT_GRACE_MS = 500


@dataclass(frozen=True)
class LayoutShiftEvent:
    ts: float
    is_main_frame: bool
    weighted_score: float


def get_layout_shift_events(processed: ProcessedTrace) -> list[LayoutShiftEvent]:
    """
    Extract the layout shifts that count toward CLS.

    Chromium marks shifts that follow user input with `had_recent_input`;
    those are excluded, except while still within the first 500ms and
    before any shift without input has been seen.
    """
    shifts: list[LayoutShiftEvent] = []
    must_respect_recent_input = False

    for event in processed.frame_tree_events:
        if event.name != "LayoutShift":
            continue
        data = event.args.get("data")
        if not isinstance(data, dict) or data.get("is_main_frame") is None:
            continue

        weighted_score = data.get("weighted_score_delta")
        if weighted_score is None:
            raise TraceProcessingError(
                "LayoutShift event is missing weighted_score_delta",
                reason="missing_weighted_score_delta",
            )

        if data.get("had_recent_input"):
            timing_ms = (event.ts - processed.time_origin) / 1000
            if timing_ms > RECENT_INPUT_GRACE_MS or must_respect_recent_input:
                continue
        else:
            must_respect_recent_input = True

        shifts.append(
            LayoutShiftEvent(
                ts=event.ts,
                is_main_frame=bool(data["is_main_frame"]),
                weighted_score=float(weighted_score),
            )
        )

    return shifts


def calculate_cls(shifts: list[LayoutShiftEvent]) -> float:
    """Largest session window sum over time-ordered shifts."""
    max_score = 0.0
    window_score = 0.0
    window_start = float("-inf")
    previous_ts = float("-inf")

    for shift in shifts:
        if shift.ts - window_start > SESSION_LIMIT_US or shift.ts - previous_ts > SESSION_GAP_US:
            window_start = shift.ts
            window_score = 0.0
        previous_ts = shift.ts
        window_score += shift.weighted_score
        max_score = max(max_score, window_score)

    return max_score


class CumulativeLayoutShift(ComputedArtifact):
    """CLS over all frames and over the main frame only."""

    name = "CumulativeLayoutShift"

    @classmethod
    async def compute(cls, data: Trace, context: "AuditContext") -> dict[str, float]:
        processed = await ProcessedTraceArtifact.request(data, context)
        shifts = get_layout_shift_events(processed)

        result = {
            "cumulative_layout_shift": calculate_cls(shifts),
            "cumulative_layout_shift_main_frame": calculate_cls(
                [s for s in shifts if s.is_main_frame]
            ),
        }
        logger.info(
            "cls_computed",
            shifts=len(shifts),
            cls=round(result["cumulative_layout_shift"], 4),
            cls_main_frame=round(result["cumulative_layout_shift_main_frame"], 4),
        )
        return result
