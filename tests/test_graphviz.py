#!/usr/bin/env python3
"""
Unit tests for GraphViz rendering of bindings.
"""

import unittest

from servicewire import Container, GraphVizFormatter


class Service:
    pass


class TestFormatBinding(unittest.TestCase):
    """Test rendering single bindings."""

    def setUp(self):
        self.container = Container()
        self.formatter = GraphVizFormatter(self.container.registry)

    def test_unregistered_name(self):
        self.assertEqual(
            self.formatter.format_binding("settings"),
            'settings [ shape="record", label="settings | (instance)" ]',
        )

    def test_plain_binding_uses_friendly_name(self):
        self.container.register("_repository", Service)

        self.assertEqual(
            self.formatter.format_binding("_repository"),
            'repository [ shape="record", label="repository" ]',
        )

    def test_requirements_become_edges(self):
        self.container.register("_bar", Service)
        self.container.register("_foo", Service, requires=["_bar", "_settings"])

        self.assertEqual(
            self.formatter.format_binding("_foo"),
            'foo [ shape="record", label="foo" ]; foo -> bar; foo -> _settings',
        )

    def test_listener_events_sorted(self):
        self.container.register("_view", Service, event_listener=["Saved", "Loaded"])

        self.assertEqual(
            self.formatter.format_binding("_view"),
            'view [ shape="record", label="view | \\> Loaded Saved" ]',
        )

    def test_listener_events_wrap_after_four(self):
        self.container.register("_view", Service, event_listener=["E", "D", "C", "B", "A"])

        self.assertEqual(
            self.formatter.format_binding("_view"),
            'view [ shape="record", label="view | \\> A B C D | \\> E" ]',
        )

    def test_source_events(self):
        self.container.register("_model", Service, event_source=["Saved"])

        self.assertEqual(
            self.formatter.format_binding("_model"),
            'model [ shape="record", label="model | Saved \\>" ]',
        )

    def test_source_events_wrap_after_four(self):
        self.container.register("_model", Service, event_source=["D", "C", "B", "A"])

        self.assertEqual(
            self.formatter.format_binding("_model"),
            'model [ shape="record", label="model | A B C D \\> | \\>" ]',
        )

    def test_listener_and_source(self):
        self.container.register(
            "_presenter", Service, event_listener=["Loaded"], event_source=["Saved"]
        )

        self.assertEqual(
            self.formatter.format_binding("_presenter"),
            'presenter [ shape="record", label="presenter | \\> Loaded | Saved \\>" ]',
        )


class TestRender(unittest.TestCase):
    """Test rendering the whole registry."""

    def test_render(self):
        container = Container()
        container.register("_bar", Service)
        container.register("_foo", Service, requires=["_bar"])

        expected = (
            "digraph {\n"
            '    graph [rankdir = "LR"];\n'
            '    bar [ shape="record", label="bar" ]\n'
            '    foo [ shape="record", label="foo" ]; foo -> bar\n'
            "}\n"
        )
        self.assertEqual(GraphVizFormatter(container.registry).render(), expected)

    def test_render_empty(self):
        formatter = GraphVizFormatter(Container().registry)

        self.assertEqual(formatter.render(), 'digraph {\n    graph [rankdir = "LR"];\n}\n')


if __name__ == "__main__":
    unittest.main()
