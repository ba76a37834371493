"""Compiled template definitions handed out by loaders.

Turning template source into render logic happens elsewhere. What reaches
Lineage is a ``TemplateDefinition``: a body callable, an ordered mapping of
block callables, the parent template (if any) and a content type.

Signatures:
    body(template, params) -> None
    block(template, params) -> None

Both write output through ``template.write()`` and may call
``template.render_block()``, ``template.render_block_parent()``,
``template.include()`` and ``template.include_block()``.

Example:
    >>> layout = TemplateDefinition(
    ...     body=lambda t, p: (t.write("<h1>"), t.render_block("title", p), t.write("</h1>")),
    ...     blocks={"title": lambda t, p: t.write("Home")},
    ... )

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from lineage._types import ContentType

if TYPE_CHECKING:
    from lineage.template.core import Template

RenderFunc = Callable[["Template", dict[str, Any]], None]
ParentSpec = str | Callable[["Template"], "str | None"] | None


def _empty_body(template: Template, params: dict[str, Any]) -> None:
    return None


@dataclass(frozen=True, slots=True)
class BlockDefinition:
    """One block declared by a template.

    Attributes:
        render: Block implementation
        content_type: Declared content type; None means the template's own
    """

    render: RenderFunc
    content_type: ContentType | None = None


@dataclass(frozen=True, slots=True)
class TemplateDefinition:
    """Render logic for one template name.

    Attributes:
        body: Main render function
        blocks: Block name → BlockDefinition (or bare render callable), in
            declaration order; this order is registration order
        parent: Parent template name, a callable computing it from the
            instance (dynamic layouts), or None
        content_type: Output type; None means the environment default
    """

    body: RenderFunc = _empty_body
    blocks: Mapping[str, BlockDefinition | RenderFunc] = field(default_factory=dict)
    parent: ParentSpec = None
    content_type: ContentType | None = None

    def iter_blocks(self) -> list[tuple[str, BlockDefinition]]:
        """Declared blocks as ``(name, BlockDefinition)`` pairs, in order."""
        return [
            (name, block if isinstance(block, BlockDefinition) else BlockDefinition(block))
            for name, block in self.blocks.items()
        ]
