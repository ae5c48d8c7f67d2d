"""Tests for trace processing."""

import pytest

from api.exceptions import TraceProcessingError
from auditor.artifacts import Trace
from auditor.audits.base import AuditContext
from auditor.computed.processed_trace import ProcessedTraceArtifact, process_trace
from tests.fixtures import CHILD_FRAME, MAIN_FRAME, TIME_ORIGIN_US, Shift, make_trace


def test_main_frame_and_time_origin() -> None:
    trace = Trace.model_validate(make_trace([Shift(100, 0.1)]))
    processed = process_trace(trace)

    assert processed.main_frame_id == MAIN_FRAME
    assert processed.time_origin == TIME_ORIGIN_US
    assert processed.frame_ids == {MAIN_FRAME}
    assert [e.name for e in processed.frame_tree_events] == ["navigationStart", "LayoutShift"]


def test_child_frames_from_tracing_started() -> None:
    trace = Trace.model_validate(make_trace(with_child=True))
    assert process_trace(trace).frame_ids == {MAIN_FRAME, CHILD_FRAME}


def test_frames_committed_later_join_tree() -> None:
    raw = make_trace()
    raw["traceEvents"].append(
        {
            "name": "FrameCommittedInBrowser",
            "ts": TIME_ORIGIN_US + 5000,
            "args": {"data": {"frame": "LATE_FRAME", "parent": MAIN_FRAME}},
        }
    )
    processed = process_trace(Trace.model_validate(raw))
    assert "LATE_FRAME" in processed.frame_ids


def test_tracing_started_in_page_fallback() -> None:
    raw = {
        "traceEvents": [
            {"name": "TracingStartedInPage", "ts": 10, "pid": 7, "args": {"data": {"page": "PAGE"}}},
            {"name": "navigationStart", "ts": 20, "args": {"frame": "PAGE", "data": {}}},
        ]
    }
    processed = process_trace(Trace.model_validate(raw))

    assert processed.main_frame_id == "PAGE"
    assert processed.main_frame_pid == 7
    assert processed.time_origin == 20


def test_events_sorted_by_timestamp() -> None:
    raw = make_trace([Shift(300, 0.1), Shift(100, 0.2)])
    processed = process_trace(Trace.model_validate(raw))
    timestamps = [e.ts for e in processed.frame_tree_events]
    assert timestamps == sorted(timestamps)


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ({"traceEvents": []}, "empty_trace"),
        ({"traceEvents": [{"name": "navigationStart", "ts": 1}]}, "no_tracing_started"),
        (
            {
                "traceEvents": [
                    {
                        "name": "TracingStartedInBrowser",
                        "ts": 1,
                        "args": {"data": {"frames": [{"frame": "F", "processId": 1}]}},
                    }
                ]
            },
            "no_navstart",
        ),
    ],
)
def test_unparseable_traces(raw: dict, reason: str) -> None:
    with pytest.raises(TraceProcessingError) as exc_info:
        process_trace(Trace.model_validate(raw))
    assert exc_info.value.details["reason"] == reason
    assert exc_info.value.status_code == 422


def test_trace_too_large() -> None:
    trace = Trace.model_validate(make_trace([Shift(100, 0.1), Shift(200, 0.1)]))
    with pytest.raises(TraceProcessingError) as exc_info:
        process_trace(trace, max_events=3)
    assert exc_info.value.details["reason"] == "trace_too_large"


@pytest.mark.asyncio
async def test_artifact_uses_settings_limit(settings) -> None:
    context = AuditContext.create(settings=settings.model_copy(update={"max_trace_events": 1}))
    trace = Trace.model_validate(make_trace())

    with pytest.raises(TraceProcessingError):
        await ProcessedTraceArtifact.request(trace, context)
