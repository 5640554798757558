"""
Dependency weights and deterministic ordering of the binding graph.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .errors import CircularDependencyError
from .registry import BindingRegistry

logger = logging.getLogger(__name__)

Visitor = Callable[[str, str | None, int], None]

INDENT = "    "


class DependencyGrapher:
    """
    Orders the services of a registry for presentation.

    Services with heavier dependency subtrees come first. Registration order
    breaks near-ties, so the same registry always produces the same order.

    The weight cache belongs to the registry revision it was computed for and
    is dropped as soon as a new binding is registered.
    """

    def __init__(self, registry: BindingRegistry):
        self._registry = registry
        self._weights: dict[str, int] = {}
        self._revision = registry.revision

    def registered_services(self) -> list[str]:
        """Get all registered service names in registration order."""
        return self._registry.all_names()

    def top_level_services(self) -> list[str]:
        """Get the services no other service requires, in registration order."""
        required = {name for binding in self._registry for name in binding.requires}
        return [name for name in self._registry.all_names() if name not in required]

    def weight_of(self, name: str) -> int:
        """
        Get the size of a service's dependency tree, itself included.

        Unregistered names weigh 1.

        Raises:
            CircularDependencyError: If the required services form a cycle
        """
        self._check_revision()
        return self._weight(name, [])

    def _weight(self, name: str, path: list[str]) -> int:
        cached = self._weights.get(name)
        if cached is not None:
            return cached

        if name in path:
            raise CircularDependencyError(path[path.index(name) :] + [name])

        total = 1
        binding = self._registry.lookup(name)
        if binding is not None:
            path.append(name)
            for dependency in binding.requires:
                total += self._weight(dependency, path)
            path.pop()

        self._weights[name] = total
        return total

    def registration_index(self, name: str) -> int:
        """Position of a service in registration order."""
        return self._registry.index_of(name)

    def sort_score(self, name: str, sibling_count: int) -> int:
        """Score used to order a service among its siblings, highest first."""
        return self.weight_of(name) * sibling_count - self.registration_index(name)

    def sort_siblings(self, names: Sequence[str]) -> list[str]:
        """Sort one level of services by descending score."""
        sibling_count = len(names)
        return sorted(names, key=lambda name: self.sort_score(name, sibling_count), reverse=True)

    def visit_dependencies(
        self,
        visitor: Visitor,
        nodes: Sequence[str] | None = None,
        parent: str | None = None,
        depth: int = 0,
    ) -> None:
        """
        Walk the dependency forest depth-first.

        Starts from the top level services unless ``nodes`` is given, and
        calls ``visitor(node, parent, depth)`` for each node before its own
        requirements. A service required by several parents is visited once
        per parent.
        """
        if nodes is None:
            nodes = self.top_level_services()

        for node in self.sort_siblings(nodes):
            visitor(node, parent, depth)

            binding = self._registry.lookup(node)
            requires = list(binding.requires) if binding is not None else []
            self.visit_dependencies(visitor, requires, node, depth + 1)

    def simple_graph(self) -> str:
        """Render the dependency forest as indented lines, four spaces per level."""
        lines: list[str] = []

        def visit(node: str, parent: str | None, depth: int) -> None:
            lines.append(f"{INDENT * depth}{node}\n")

        self.visit_dependencies(visit)
        return "".join(lines)

    def _check_revision(self) -> None:
        if self._registry.revision != self._revision:
            logger.debug("Registry changed, dropping %d cached weight(s)", len(self._weights))
            self._weights.clear()
            self._revision = self._registry.revision
