"""Small builders for template definitions used across the tests.

Template bodies and blocks are plain ``(template, params)`` callables;
these helpers compose the common ones.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from lineage import DictLoader, Environment, Template, TemplateDefinition

Step = Callable[[Template, dict[str, Any]], None]


def emit(text: str) -> Step:
    """Write fixed text."""

    def run(template: Template, params: dict[str, Any]) -> None:
        template.write(text)

    return run


def emit_param(key: str) -> Step:
    """Write ``str(params[key])``."""

    def run(template: Template, params: dict[str, Any]) -> None:
        template.write(str(params[key]))

    return run


def calls_block(name: str) -> Step:
    """Render the most-derived implementation of ``name``."""

    def run(template: Template, params: dict[str, Any]) -> None:
        template.render_block(name, params)

    return run


def calls_parent(name: str) -> Step:
    """Render the overridden implementation of ``name``."""

    def run(template: Template, params: dict[str, Any]) -> None:
        template.render_block_parent(name, params)

    return run


def includes(name: str) -> Step:
    def run(template: Template, params: dict[str, Any]) -> None:
        template.include(name, params)

    return run


def records(into: list[Template]) -> Step:
    """Remember the template instance executing this step."""

    def run(template: Template, params: dict[str, Any]) -> None:
        into.append(template)

    return run


def sequence(*steps: Step) -> Step:
    """Run steps in order."""

    def run(template: Template, params: dict[str, Any]) -> None:
        for step in steps:
            step(template, params)

    return run


def make_env(templates: Mapping[str, TemplateDefinition], **kwargs: Any) -> Environment:
    """Build an Environment with in-memory definitions."""
    return Environment(loader=DictLoader(dict(templates)), **kwargs)


def extends_chain(length: int, block: str = "B", *, base_calls_parent: bool = False) -> Environment:
    """Chain ``t0 extends t1 extends ... t{length-1}``, every level overriding ``block``.

    Level ``i`` writes ``"{i},"`` in ``block`` and then calls the parent
    implementation; the base (``t{length-1}``) writes ``"{i}"`` and calls its
    parent only when ``base_calls_parent`` is set. The base body renders
    ``block`` once.
    """
    templates: dict[str, TemplateDefinition] = {}
    base = length - 1
    for level in range(length):
        if level < base:
            impl = sequence(emit(f"{level},"), calls_parent(block))
            templates[f"t{level}"] = TemplateDefinition(
                parent=f"t{level + 1}", blocks={block: impl}
            )
        else:
            impl = emit(str(level))
            if base_calls_parent:
                impl = sequence(impl, calls_parent(block))
            templates[f"t{level}"] = TemplateDefinition(
                body=calls_block(block), blocks={block: impl}
            )
    return make_env(templates)
