"""Trace processing: main frame, time origin and frame-tree events."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from api.exceptions import TraceProcessingError
from auditor.artifacts import Trace, TraceEvent
from auditor.computed.base import ComputedArtifact

if TYPE_CHECKING:
    from auditor.audits.base import AuditContext

logger = structlog.get_logger(__name__)


@dataclass
class ProcessedTrace:
    """The parts of a trace that metric computations need."""

    main_frame_id: str
    main_frame_pid: int
    time_origin: float  # microseconds
    frame_ids: set[str]
    frame_tree_events: list[TraceEvent] = field(default_factory=list)


def _event_frame(event: TraceEvent) -> str | None:
    data = event.args.get("data")
    if isinstance(data, dict) and data.get("frame"):
        return data["frame"]
    return event.args.get("frame")


def _find_main_frame(events: list[TraceEvent]) -> tuple[str, int, set[str]]:
    for event in events:
        if event.name != "TracingStartedInBrowser":
            continue
        frames = (event.args.get("data") or {}).get("frames") or []
        main = next((f for f in frames if not f.get("parent") and f.get("frame")), None)
        if main is not None:
            frame_ids = {f["frame"] for f in frames if f.get("frame")}
            return main["frame"], main.get("processId", event.pid), frame_ids

    for event in events:
        if event.name == "TracingStartedInPage":
            page = (event.args.get("data") or {}).get("page")
            if page:
                return page, event.pid, {page}

    raise TraceProcessingError(
        "Trace has no TracingStartedInBrowser or TracingStartedInPage event",
        reason="no_tracing_started",
    )


def process_trace(trace: Trace, max_events: int | None = None) -> ProcessedTrace:
    """
    Process a raw trace.

    Args:
        trace: The recorded trace
        max_events: Reject traces with more events than this

    Returns:
        ProcessedTrace for the main frame

    Raises:
        TraceProcessingError: If the trace cannot be interpreted
    """
    events = sorted(trace.trace_events, key=lambda e: e.ts)
    if not events:
        raise TraceProcessingError("Trace contains no events", reason="empty_trace")
    if max_events is not None and len(events) > max_events:
        raise TraceProcessingError(
            f"Trace has {len(events)} events, limit is {max_events}",
            reason="trace_too_large",
        )

    main_frame_id, main_frame_pid, frame_ids = _find_main_frame(events)

    # Pick up frames committed under the main frame tree after tracing began
    for event in events:
        if event.name != "FrameCommittedInBrowser":
            continue
        data: dict[str, Any] = event.args.get("data") or {}
        if data.get("parent") in frame_ids and data.get("frame"):
            frame_ids.add(data["frame"])

    navigation_starts = [
        e
        for e in events
        if e.name == "navigationStart"
        and e.args.get("frame") == main_frame_id
        and (e.args.get("data") or {}).get("isLoadingMainFrame", True)
    ]
    if not navigation_starts:
        raise TraceProcessingError(
            "Trace has no navigationStart for the main frame",
            reason="no_navstart",
        )

    frame_tree_events = [e for e in events if _event_frame(e) in frame_ids]

    logger.debug(
        "trace_processed",
        events=len(events),
        frame_tree_events=len(frame_tree_events),
        frames=len(frame_ids),
    )

    return ProcessedTrace(
        main_frame_id=main_frame_id,
        main_frame_pid=main_frame_pid,
        time_origin=navigation_starts[0].ts,
        frame_ids=frame_ids,
        frame_tree_events=frame_tree_events,
    )


class ProcessedTraceArtifact(ComputedArtifact):
    """Memoized `process_trace`."""

    name = "ProcessedTrace"

    @classmethod
    async def compute(cls, data: Trace, context: "AuditContext") -> ProcessedTrace:
        return process_trace(data, max_events=context.settings.max_trace_events)
