"""Artifact models consumed by audits.

Artifacts are produced upstream by the trace capture and element extraction
gatherers. They are validated once here, at the boundary, so audits can rely
on named, typed fields instead of probing a loose dictionary.
"""

import json
from enum import StrEnum
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from api.exceptions import MissingArtifactError, ValidationError

logger = structlog.get_logger(__name__)

# Pass whose trace audits read by default
DEFAULT_PASS = "defaultPass"

# Artifact names as the gatherers publish them
KNOWN_ARTIFACTS = frozenset({"traces", "TraceElements"})


class CamelModel(BaseModel):
    """Base model accepting camelCase keys from the gatherers."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class TraceEvent(CamelModel):
    """A single Chrome trace event."""

    name: str
    cat: str = ""
    ph: str = ""
    ts: float = 0  # microseconds
    pid: int = 0
    tid: int = 0
    args: dict[str, Any] = Field(default_factory=dict)


class Trace(CamelModel):
    """A recorded trace."""

    trace_events: list[TraceEvent] = Field(default_factory=list)


class Rect(CamelModel):
    top: float = 0
    bottom: float = 0
    left: float = 0
    right: float = 0
    width: float = 0
    height: float = 0


class NodeDetails(CamelModel):
    """Description of a DOM node as captured by the page."""

    lh_id: str | None = None
    devtools_node_path: str | None = None
    selector: str | None = None
    bounding_rect: Rect | None = None
    snippet: str | None = None
    node_label: str | None = None


class TraceEventType(StrEnum):
    """Kinds of trace events that can surface an element."""

    LAYOUT_SHIFT = "layout-shift"
    LARGEST_CONTENTFUL_PAINT = "largest-contentful-paint"
    ANIMATION = "animation"
    RESPONSIVENESS = "responsiveness"


class TraceElementRecord(CamelModel):
    """An element associated with a trace event."""

    trace_event_type: TraceEventType
    node: NodeDetails
    score: float | None = Field(default=None, ge=0, le=1)
    animations: list[dict[str, Any]] | None = None


class Artifacts(BaseModel):
    """Artifacts required by the trace-based audits."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    traces: dict[str, Trace]
    trace_elements: list[TraceElementRecord] = Field(alias="TraceElements")

    def missing_artifacts(self, required: tuple[str, ...]) -> list[str]:
        """Return the required artifact names that carry no usable data."""
        missing = []
        for name in required:
            if name == "traces" and DEFAULT_PASS not in self.traces:
                missing.append(name)
            elif name not in KNOWN_ARTIFACTS:
                missing.append(name)
        return missing


def load_artifacts(data: dict[str, Any]) -> Artifacts:
    """
    Validate a raw artifacts mapping.

    Args:
        data: Decoded artifacts JSON

    Returns:
        Validated Artifacts

    Raises:
        MissingArtifactError: If a required artifact is absent
        ValidationError: If an artifact is present but malformed
    """
    try:
        return Artifacts.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors()
        missing = [
            str(err["loc"][0]) for err in errors if err["type"] == "missing" and len(err["loc"]) == 1
        ]
        if missing:
            raise MissingArtifactError(missing) from e

        first = errors[0]
        field = ".".join(str(loc) for loc in first["loc"])
        logger.warning("artifacts_invalid", field=field, errors=len(errors))
        raise ValidationError(first["msg"], field=field) from e


def load_artifacts_file(path: str | Path) -> Artifacts:
    """Load and validate artifacts from a JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ValidationError(f"Artifacts file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Artifacts file is not valid JSON: {e.msg} (line {e.lineno})") from e
    if not isinstance(data, dict):
        raise ValidationError("Artifacts file must contain a JSON object")
    return load_artifacts(data)
