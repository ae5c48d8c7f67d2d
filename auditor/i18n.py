"""UI strings and message templates for audit output.

Templates are plain objects handed to audits through their config; there is
no process-wide message registry.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MessageTemplate:
    """A message parameterized by a single named count."""

    template: str
    param_name: str
    # Exact-count overrides, e.g. {1: "1 element found"}
    exact: dict[int, str] = field(default_factory=dict)

    def format(self, value: int) -> str:
        if value in self.exact:
            return self.exact[value].format(**{self.param_name: value})
        return self.template.format(**{self.param_name: value})


class UIStrings:
    """Shared English UI strings."""

    COLUMN_ELEMENT = "Element"

    DISPLAY_VALUE_ELEMENTS_FOUND = MessageTemplate(
        template="{node_count} elements found",
        param_name="node_count",
        exact={1: "1 element found"},
    )
