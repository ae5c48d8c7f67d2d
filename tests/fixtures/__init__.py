"""Test fixtures for synthetic traces and artifacts."""

from tests.fixtures.traces import (
    CHILD_FRAME,
    MAIN_FRAME,
    TIME_ORIGIN_US,
    Shift,
    layout_shift_event,
    make_artifacts,
    make_element,
    make_trace,
)

__all__ = [
    "CHILD_FRAME",
    "MAIN_FRAME",
    "TIME_ORIGIN_US",
    "Shift",
    "layout_shift_event",
    "make_artifacts",
    "make_element",
    "make_trace",
]
