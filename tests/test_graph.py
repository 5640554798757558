#!/usr/bin/env python3
"""
Unit tests for dependency weights and graph ordering.
"""

import unittest

from servicewire import CircularDependencyError, Container, DependencyGrapher


class Foo:
    pass


class Bar:
    pass


def container_with(*bindings: tuple[str, list[str]]) -> Container:
    """Register a plain service for each (name, requires) pair."""
    container = Container()
    for name, requires in bindings:
        container.register(name, Foo, requires=requires)
    return container


class TestTopLevelServices(unittest.TestCase):
    """Test finding the roots of the dependency forest."""

    def test_foo_bar_scenario(self):
        container = Container()
        container.register("_bar", Bar)
        container.register("_foo", Foo, requires=["_bar"])
        grapher = container.grapher()

        self.assertIsInstance(container.load("_foo")._bar, Bar)
        self.assertEqual(grapher.top_level_services(), ["_foo"])
        self.assertEqual(grapher.weight_of("_foo"), 2)
        self.assertEqual(grapher.weight_of("_bar"), 1)

    def test_independent_of_registration_order(self):
        forward = container_with(("a", ["b"]), ("b", ["c"]), ("c", []), ("d", []))
        backward = container_with(("d", []), ("c", []), ("b", ["c"]), ("a", ["b"]))

        self.assertEqual(set(forward.grapher().top_level_services()), {"a", "d"})
        self.assertEqual(set(backward.grapher().top_level_services()), {"a", "d"})

    def test_registered_services(self):
        container = container_with(("a", []), ("b", []))

        self.assertEqual(container.grapher().registered_services(), ["a", "b"])

    def test_pure_cycle_has_no_roots(self):
        container = container_with(("a", ["b"]), ("b", ["a"]))

        self.assertEqual(container.grapher().top_level_services(), [])


class TestWeights(unittest.TestCase):
    """Test dependency subtree weights."""

    def test_leaf_weighs_one(self):
        grapher = container_with(("a", [])).grapher()

        self.assertEqual(grapher.weight_of("a"), 1)

    def test_two_leaves(self):
        grapher = container_with(("a", ["b", "c"]), ("b", []), ("c", [])).grapher()

        self.assertEqual(grapher.weight_of("a"), 3)

    def test_unregistered_name_weighs_one(self):
        grapher = container_with(("a", ["config"])).grapher()

        self.assertEqual(grapher.weight_of("config"), 1)
        self.assertEqual(grapher.weight_of("a"), 2)

    def test_shared_dependencies_count_per_occurrence(self):
        grapher = container_with(
            ("a", ["b", "c"]), ("b", ["d"]), ("c", ["d"]), ("d", [])
        ).grapher()

        self.assertEqual(grapher.weight_of("a"), 5)

    def test_duplicate_requirement(self):
        grapher = container_with(("a", ["b", "b"]), ("b", [])).grapher()

        self.assertEqual(grapher.weight_of("a"), 3)

    def test_cycle(self):
        grapher = container_with(("a", ["b"]), ("b", ["c"]), ("c", ["a"])).grapher()

        with self.assertRaises(CircularDependencyError) as ctx:
            grapher.weight_of("a")

        self.assertEqual(ctx.exception.cycle, ["a", "b", "c", "a"])

    def test_cache_dropped_after_registration(self):
        """Test that weights follow bindings registered after the grapher was made."""
        container = container_with(("a", ["b"]))
        grapher = container.grapher()
        self.assertEqual(grapher.weight_of("a"), 2)

        container.register("b", Bar, requires=["c"])

        self.assertEqual(grapher.weight_of("a"), 3)


class TestOrdering(unittest.TestCase):
    """Test sort scores and registration order tie-breaks."""

    def test_registration_index(self):
        grapher = container_with(("a", []), ("b", [])).grapher()

        self.assertEqual(grapher.registration_index("a"), 0)
        self.assertEqual(grapher.registration_index("b"), 1)
        self.assertEqual(grapher.registration_index("missing"), 2)

    def test_sort_score(self):
        grapher = container_with(("a", ["b", "c"]), ("b", []), ("c", [])).grapher()

        self.assertEqual(grapher.sort_score("a", 2), 6)
        self.assertEqual(grapher.sort_score("c", 2), 0)

    def test_heavier_subtree_first(self):
        grapher = container_with(
            ("a", ["x"]), ("b", ["y", "z"]), ("x", []), ("y", []), ("z", [])
        ).grapher()

        self.assertEqual(grapher.sort_siblings(["a", "b"]), ["b", "a"])

    def test_registration_order_breaks_ties(self):
        grapher = container_with(("q", []), ("p", [])).grapher()

        self.assertEqual(grapher.sort_siblings(["p", "q"]), ["q", "p"])

    def test_score_recomputed_per_level(self):
        """Test that the sibling count of each level scales the weights."""
        grapher = container_with(
            ("b", []), ("c", []), ("d", []), ("e", []), ("f", []), ("a", ["b"])
        ).grapher()

        self.assertEqual(grapher.sort_siblings(["a", "b"]), ["b", "a"])
        self.assertEqual(grapher.sort_siblings(["a", "b", "c", "d", "e", "f"])[0], "a")


class TestTraversal(unittest.TestCase):
    """Test the depth-first walk and its text rendering."""

    def test_simple_graph(self):
        grapher = container_with(("A", ["B"]), ("B", [])).grapher()

        self.assertEqual(grapher.simple_graph(), "A\n    B\n")

    def test_simple_graph_ordering(self):
        grapher = container_with(
            ("a", ["x"]), ("b", ["y", "z"]), ("x", []), ("y", []), ("z", [])
        ).grapher()

        self.assertEqual(grapher.simple_graph(), "b\n    y\n    z\na\n    x\n")

    def test_unregistered_leaf_is_rendered(self):
        grapher = container_with(("a", ["settings"])).grapher()

        self.assertEqual(grapher.simple_graph(), "a\n    settings\n")

    def test_visitor_receives_parent_and_depth(self):
        visits = []
        grapher = container_with(("a", ["b"]), ("b", ["c"]), ("c", [])).grapher()

        grapher.visit_dependencies(lambda node, parent, depth: visits.append((node, parent, depth)))

        self.assertEqual(visits, [("a", None, 0), ("b", "a", 1), ("c", "b", 2)])

    def test_shared_dependency_visited_per_parent(self):
        visits = []
        grapher = container_with(("a", ["c"]), ("b", ["c"]), ("c", [])).grapher()

        grapher.visit_dependencies(lambda node, parent, depth: visits.append((node, parent)))

        self.assertEqual(visits, [("a", None), ("c", "a"), ("b", None), ("c", "b")])

    def test_empty_registry(self):
        self.assertEqual(Container().grapher().simple_graph(), "")

    def test_cycle_below_root(self):
        grapher = container_with(("root", ["a"]), ("a", ["b"]), ("b", ["a"])).grapher()

        with self.assertRaises(CircularDependencyError):
            grapher.simple_graph()

    def test_grapher_over_registry(self):
        container = container_with(("A", ["B"]), ("B", []))

        grapher = DependencyGrapher(container.registry)

        self.assertEqual(grapher.simple_graph(), "A\n    B\n")


if __name__ == "__main__":
    unittest.main()
