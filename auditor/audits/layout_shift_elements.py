"""Layout shift elements audit.

Lists the DOM elements that contributed to the page's Cumulative Layout
Shift, with each element's contribution, alongside the page CLS.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from auditor.artifacts import Artifacts, TraceElementRecord, TraceEventType
from auditor.audits.base import Audit, AuditContext, AuditMeta, DiagnosticReport, ScoringMode
from auditor.computed.cumulative_layout_shift import CumulativeLayoutShift
from auditor.details import NodeItem, TableDetails, TableHeading, make_node_item
from auditor.i18n import MessageTemplate, UIStrings

logger = structlog.get_logger(__name__)

TITLE = "Avoid large layout shifts"
DESCRIPTION = (
    "These DOM elements contribute most to the CLS of the page. "
    "[Learn how to improve CLS](https://web.dev/optimize-cls/)"
)
COLUMN_CONTRIBUTION = "CLS Contribution"

# Informative audits always report full score
INFORMATIVE_SCORE = 1


@dataclass
class ContributorRow:
    """One element and its contribution to CLS."""

    node: NodeItem
    score: float | None

    def to_dict(self) -> dict[str, Any]:
        return {"node": self.node.to_dict(), "score": self.score}


@dataclass
class LayoutShiftElementsConfig:
    """Labels and templates used when assembling the report."""

    display_value: MessageTemplate = field(
        default_factory=lambda: UIStrings.DISPLAY_VALUE_ELEMENTS_FOUND
    )
    column_element: str = UIStrings.COLUMN_ELEMENT
    column_contribution: str = COLUMN_CONTRIBUTION
    score_granularity: float = 0.001


def select_layout_shift_elements(
    records: list[TraceElementRecord],
) -> list[TraceElementRecord]:
    """Records produced by layout-shift events, in input order."""
    return [r for r in records if r.trace_event_type == TraceEventType.LAYOUT_SHIFT]


def to_contributor_row(record: TraceElementRecord) -> ContributorRow:
    return ContributorRow(node=make_node_item(record.node), score=record.score)


class LayoutShiftElements(Audit):
    """Elements contributing to Cumulative Layout Shift."""

    meta = AuditMeta(
        id="layout-shift-elements",
        title=TITLE,
        description=DESCRIPTION,
        score_display_mode=ScoringMode.INFORMATIVE,
        guidance_level=2,
        required_artifacts=("traces", "TraceElements"),
    )

    def __init__(self, config: LayoutShiftElementsConfig | None = None):
        self.config = config or LayoutShiftElementsConfig()

    def build_details(self, rows: list[ContributorRow]) -> TableDetails:
        headings = [
            TableHeading(key="node", value_type="node", label=self.config.column_element),
            TableHeading(
                key="score",
                value_type="numeric",
                label=self.config.column_contribution,
                granularity=self.config.score_granularity,
            ),
        ]
        return self.make_table_details(headings, rows)

    def build_display_value(self, rows: list[ContributorRow]) -> str | None:
        if not rows:
            return None
        return self.config.display_value.format(len(rows))

    async def audit(self, artifacts: Artifacts, context: AuditContext) -> DiagnosticReport:
        """
        Build the layout shift elements report.

        Every layout-shift element is listed in the order the trace surfaced
        it; no ranking or truncation happens here.

        Raises:
            TraceProcessingError: If CLS cannot be computed from the trace
        """
        rows = [
            to_contributor_row(record)
            for record in select_layout_shift_elements(artifacts.trace_elements)
        ]
        details = self.build_details(rows)
        display_value = self.build_display_value(rows)

        metrics = await CumulativeLayoutShift.request(artifacts.traces[self.DEFAULT_PASS], context)
        cls_savings = metrics["cumulative_layout_shift"]

        logger.debug(
            "layout_shift_elements_assembled",
            elements=len(rows),
            cls=cls_savings,
        )

        return DiagnosticReport(
            score=INFORMATIVE_SCORE,
            metric_savings={"cumulative_layout_shift": cls_savings},
            not_applicable=len(details.items) == 0,
            display_value=display_value,
            details=details,
        )
