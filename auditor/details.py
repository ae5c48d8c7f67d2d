"""Audit details structures.

Tables and node references that audits attach to their results, plus the
display formatting used when a table is rendered for humans.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol

from auditor.artifacts import NodeDetails


class TableItem(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class NodeItem:
    """Presentation reference to a DOM node."""

    lh_id: str | None = None
    path: str | None = None
    selector: str | None = None
    bounding_rect: dict[str, float] | None = None
    snippet: str | None = None
    node_label: str | None = None
    explanation: str | None = None

    type: str = "node"

    @property
    def display_label(self) -> str:
        """Short human label for the node."""
        return self.node_label or self.selector or self.snippet or "(unknown element)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "lh_id": self.lh_id,
            "path": self.path,
            "selector": self.selector,
            "bounding_rect": self.bounding_rect,
            "snippet": self.snippet,
            "node_label": self.node_label,
            "explanation": self.explanation,
        }


def make_node_item(node: NodeDetails, explanation: str | None = None) -> NodeItem:
    """Convert captured node details into a table node reference."""
    return NodeItem(
        lh_id=node.lh_id,
        path=node.devtools_node_path,
        selector=node.selector,
        bounding_rect=node.bounding_rect.model_dump() if node.bounding_rect else None,
        snippet=node.snippet,
        node_label=node.node_label,
        explanation=explanation,
    )


def format_numeric(value: float, granularity: float = 0.001) -> str:
    """
    Format a number rounded to the given granularity.

    Rounds half away from zero and keeps as many decimals as the
    granularity has, so 0.04 with granularity 0.001 renders as "0.040".
    """
    step = Decimal(str(granularity))
    steps = (Decimal(str(value)) / step).to_integral_value(rounding=ROUND_HALF_UP)
    places = max(0, -step.normalize().as_tuple().exponent)
    return f"{steps * step:.{places}f}"


@dataclass(frozen=True)
class TableHeading:
    """Column description for a table."""

    key: str
    value_type: str
    label: str
    granularity: float | None = None

    def format_value(self, value: Any) -> str:
        """Format a cell value for display. Stored values are never rounded."""
        if value is None:
            return ""
        if isinstance(value, NodeItem):
            return value.display_label
        if self.value_type == "numeric" and self.granularity is not None:
            return format_numeric(value, self.granularity)
        return str(value)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "key": self.key,
            "value_type": self.value_type,
            "label": self.label,
        }
        if self.granularity is not None:
            data["granularity"] = self.granularity
        return data


@dataclass
class TableDetails:
    """Tabular details: ordered headings over ordered items."""

    headings: list[TableHeading]
    items: list[Any] = field(default_factory=list)

    type: str = "table"

    def display_rows(self) -> list[list[str]]:
        """Items formatted per heading, in item order."""
        return [
            [heading.format_value(getattr(item, heading.key, None)) for heading in self.headings]
            for item in self.items
        ]

    def render_text(self) -> str:
        """Render the table as aligned plain text."""
        labels = [heading.label for heading in self.headings]
        rows = self.display_rows()
        widths = [
            max([len(label)] + [len(row[i]) for row in rows]) for i, label in enumerate(labels)
        ]

        lines = ["  ".join(label.ljust(w) for label, w in zip(labels, widths, strict=True))]
        lines.append("  ".join("-" * w for w in widths))
        for row in rows:
            lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths, strict=True)))
        return "\n".join(line.rstrip() for line in lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "headings": [h.to_dict() for h in self.headings],
            "items": [item.to_dict() for item in self.items],
        }


def make_table_details(
    headings: list[TableHeading],
    items: list[TableItem],
) -> TableDetails:
    """Build table details, keeping items in the order given."""
    return TableDetails(headings=list(headings), items=list(items))
