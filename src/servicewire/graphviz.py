"""
GraphViz (dot) rendering of a binding registry.
"""

from __future__ import annotations

from collections.abc import Sequence

from .registry import BindingRegistry

EVENTS_PER_ROW = 4


class GraphVizFormatter:
    """Renders bindings as dot record nodes with edges to their requirements."""

    def __init__(self, registry: BindingRegistry):
        self._registry = registry

    def format_binding(self, name: str) -> str:
        """Render one service as a dot statement."""
        binding = self._registry.lookup(name)
        if binding is None:
            return f'{name} [ shape="record", label="{name} | (instance)" ]'

        label = binding.friendly_name
        label += self._listener_section(binding.event_listener)
        label += self._source_section(binding.event_source)

        relations = ""
        for target in binding.requires:
            target_binding = self._registry.lookup(target)
            target_name = target_binding.friendly_name if target_binding else target
            relations += f"; {binding.friendly_name} -> {target_name}"

        return f'{binding.friendly_name} [ shape="record", label="{label}" ]{relations}'

    @staticmethod
    def _listener_section(events: Sequence[str]) -> str:
        if not events:
            return ""

        section = " | \\>"
        for i, event in enumerate(sorted(events)):
            section += f" {event}"
            if i % EVENTS_PER_ROW == EVENTS_PER_ROW - 1:
                section += " | \\>"
        return section

    @staticmethod
    def _source_section(events: Sequence[str]) -> str:
        if not events:
            return ""

        section = " |"
        for i, event in enumerate(sorted(events)):
            section += f" {event}"
            if i % EVENTS_PER_ROW == EVENTS_PER_ROW - 1:
                section += " \\> |"
        return section + " \\>"

    def render(self) -> str:
        """Render every binding, in registration order, as a dot digraph."""
        lines = ["digraph {", '    graph [rankdir = "LR"];']
        lines.extend(f"    {self.format_binding(name)}" for name in self._registry.all_names())
        lines.append("}")
        return "\n".join(lines) + "\n"
