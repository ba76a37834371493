"""Pytest configuration and fixtures for Lineage tests."""

import pytest

from lineage import DictLoader, Environment, TemplateDefinition
from lineage.environment import terminal

from .builders import calls_block, emit, sequence


@pytest.fixture(autouse=True)
def _plain_messages(monkeypatch):
    """Keep error messages free of ANSI codes so assertions can match text."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def env():
    """Create an Environment without templates."""
    return Environment(loader=DictLoader({}))


@pytest.fixture
def env_with_loader():
    """Create an Environment with a two-level layout and a partial."""
    loader = DictLoader(
        {
            "base.html": TemplateDefinition(
                body=sequence(
                    emit("<html><head>"),
                    calls_block("head"),
                    emit("</head><body>"),
                    calls_block("body"),
                    emit("</body></html>"),
                ),
                blocks={"head": emit(""), "body": emit("")},
            ),
            "child.html": TemplateDefinition(
                parent="base.html",
                body=emit("not rendered"),
                blocks={"body": emit("Hello World")},
            ),
            "partial.html": TemplateDefinition(body=emit("<p>Partial content</p>")),
        }
    )
    return Environment(loader=loader)
