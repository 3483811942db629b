"""Root conftest — shared test configuration and sample Gephi documents."""

import os

import pytest

# Ensure tests never reach a real graph server
os.environ.setdefault("GRAPH_BASE_URL", "http://graphs.test/")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def two_node_document():
    """Smallest useful graph: a → b."""
    return {
        "nodes": [{"id": "a"}, {"id": "b"}],
        "edges": [{"id": "e1", "source": "a", "target": "b"}],
    }


@pytest.fixture
def bom_document():
    """A project with two components, shaped like the Gephi exporter output."""
    return {
        "nodes": [
            {
                "id": "project-1", "label": "webapp", "size": 15,
                "attributes": {"name": "webapp", "version": "3.0.0"},
            },
            {
                "id": "component-2", "label": "libfoo", "size": 10, "x": 1.5, "y": -2.0,
                "color": "#ff0000",
                "attributes": {"name": "libfoo", "version": "1.2", "license": "MIT"},
            },
            {
                "id": "component-3", "label": "libbar", "size": 10,
                "attributes": {"name": "libbar", "version": "0.9"},
            },
        ],
        "edges": [
            {"id": "dep-1", "source": "project-1", "target": "component-2", "title": "dependsOn"},
            {"id": "dep-2", "source": "project-1", "target": "component-3", "title": "dependsOn"},
        ],
    }
