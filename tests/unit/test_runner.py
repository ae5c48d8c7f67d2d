"""Tests for the audit runner."""

from unittest.mock import AsyncMock, patch

import pytest

from api.exceptions import MissingArtifactError, NotFoundError, TraceProcessingError
from auditor.artifacts import load_artifacts
from auditor.audits.base import ScoringMode
from auditor.audits.layout_shift_elements import LayoutShiftElements
from auditor.computed.cumulative_layout_shift import CumulativeLayoutShift
from auditor.runner import AUDITS, AuditResult, get_audit, list_audits, run_audit
from tests.fixtures import Shift, make_artifacts, make_element


class TestRegistry:
    """Tests for audit lookup."""

    def test_registered(self) -> None:
        assert AUDITS["layout-shift-elements"] is LayoutShiftElements
        assert get_audit("layout-shift-elements") is LayoutShiftElements

    def test_unknown_audit(self) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            get_audit("does-not-exist")
        assert exc_info.value.message == "Audit with id 'does-not-exist' not found"

    def test_list_audits(self) -> None:
        assert [meta.id for meta in list_audits()] == ["layout-shift-elements"]


class TestRunAudit:
    """Tests for run_audit."""

    @pytest.mark.asyncio
    async def test_result_for_contributors(self, audit_context) -> None:
        artifacts = load_artifacts(
            make_artifacts(
                elements=[make_element(0.2), make_element(0.1, label="div.b")],
                shifts=[Shift(100, 0.2), Shift(200, 0.1)],
            )
        )

        result = await run_audit("layout-shift-elements", artifacts, audit_context)

        assert isinstance(result, AuditResult)
        assert result.id == "layout-shift-elements"
        assert result.title == "Avoid large layout shifts"
        assert result.score == 1
        assert result.score_display_mode == ScoringMode.INFORMATIVE
        assert result.display_value == "2 elements found"
        assert result.metric_savings["cumulative_layout_shift"] == pytest.approx(0.3)
        assert result.guidance_level == 2
        assert result.duration_ms is not None

    @pytest.mark.asyncio
    async def test_not_applicable_result(self, audit_context) -> None:
        artifacts = load_artifacts(make_artifacts(elements=[], shifts=[Shift(100, 0.05)]))

        result = await run_audit(LayoutShiftElements(), artifacts, audit_context)

        assert result.score is None
        assert result.score_display_mode == ScoringMode.NOT_APPLICABLE
        assert result.display_value is None
        assert result.metric_savings["cumulative_layout_shift"] == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_missing_default_pass(self, audit_context) -> None:
        data = make_artifacts()
        data["traces"] = {"otherPass": data["traces"]["defaultPass"]}
        artifacts = load_artifacts(data)
        request = AsyncMock()

        with (
            patch.object(CumulativeLayoutShift, "request", new=request),
            pytest.raises(MissingArtifactError) as exc_info,
        ):
            await run_audit("layout-shift-elements", artifacts, audit_context)

        assert exc_info.value.details == {
            "missing": ["traces"],
            "audit_id": "layout-shift-elements",
        }
        request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_trace_failure_propagates(self, audit_context) -> None:
        data = make_artifacts(elements=[make_element(0.1)])
        data["traces"]["defaultPass"]["traceEvents"] = [
            e for e in data["traces"]["defaultPass"]["traceEvents"] if e["name"] != "navigationStart"
        ]
        artifacts = load_artifacts(data)

        with pytest.raises(TraceProcessingError):
            await run_audit("layout-shift-elements", artifacts, audit_context)

    @pytest.mark.asyncio
    async def test_default_context(self, settings) -> None:
        artifacts = load_artifacts(make_artifacts(elements=[make_element(0.1)]))
        result = await run_audit("layout-shift-elements", artifacts)
        assert result.metric_savings == {"cumulative_layout_shift": 0.0}

    @pytest.mark.asyncio
    async def test_to_dict(self, audit_context) -> None:
        artifacts = load_artifacts(make_artifacts(elements=[make_element(0.1)]))

        data = (await run_audit("layout-shift-elements", artifacts, audit_context)).to_dict()

        assert data["score_display_mode"] == "informative"
        assert data["details"]["items"][0]["node"]["node_label"] == "div.banner"
        assert set(data) >= {"id", "title", "description", "score", "metric_savings", "details"}


class TestBaseClasses:
    """Audit and computed artifact bases cannot be used without an implementation."""

    def test_audit_requires_audit_method(self) -> None:
        from auditor.audits.base import Audit

        class Incomplete(Audit):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    def test_computed_artifact_requires_compute(self) -> None:
        from auditor.computed.base import ComputedArtifact

        class Incomplete(ComputedArtifact):
            name = "Incomplete"

        with pytest.raises(TypeError):
            Incomplete()
