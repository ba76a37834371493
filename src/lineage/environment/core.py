"""Lineage Environment — template factory, loader access and configuration.

The Environment is the external collaborator templates rely on: it
resolves names through its loader and instantiates fresh ``Template``
objects. It also offers the top-level ``render()`` entry point, which
opens a render context, renders the requested template (or a single
block of it) and returns the produced text.

Configuration:
    loader: Source of ``TemplateDefinition`` objects
    globals: Parameters available to every render (caller params win)
    default_content_type: Content type for definitions that declare none
    max_depth: Longest allowed chain of extends/includes from the root

"""

from __future__ import annotations

import logging
from typing import Any

from lineage._types import ContentType
from lineage.environment.exceptions import TemplateNotFoundError
from lineage.environment.loaders import Loader
from lineage.template.core import RENDER_BLOCK_KEY, Template

logger = logging.getLogger(__name__)


class Environment:
    """Factory and configuration for template instances.

    Example:
        >>> env = Environment(loader=DictLoader({"page": page}), globals={"site": "Docs"})
        >>> env.render("page", {"title": "Home"})
        >>> env.render("page", {"title": "Home"}, block="title")
    """

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        globals: dict[str, Any] | None = None,
        default_content_type: ContentType = ContentType.HTML,
        max_depth: int = 50,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.loader = loader
        self.globals: dict[str, Any] = dict(globals or {})
        self.default_content_type = default_content_type
        self.max_depth = max_depth

    def _require_loader(self, name: str) -> Loader:
        if self.loader is None:
            raise TemplateNotFoundError(f"Template '{name}' not found: no loader configured")
        return self.loader

    def resolve_relative_name(self, name: str, referrer_name: str) -> str:
        """Canonical name for ``name`` as written inside ``referrer_name``."""
        return self._require_loader(name).resolve_relative_name(name, referrer_name)

    def create_template(self, name: str) -> Template:
        """Instantiate a fresh, unlinked template for ``name``.

        Raises:
            TemplateNotFoundError: If the loader does not know ``name``
        """
        definition = self._require_loader(name).get_source(name)
        logger.debug("Instantiating template %r", name)
        return Template(self, name, definition)

    def render(
        self,
        name: str,
        params: dict[str, Any] | None = None,
        *,
        block: str | None = None,
    ) -> str:
        """Render template ``name`` and return the output.

        Args:
            name: Template to render
            params: Template parameters, layered over ``globals``
            block: Render only this block instead of the whole document

        Raises:
            TemplateNotFoundError: If a template in the chain is missing
            UndefinedBlockError: If a block is rendered that no template declares
        """
        from lineage.render_context import render_context

        ctx: dict[str, Any] = {}
        ctx.update(self.globals)
        if params:
            ctx.update(params)
        if block is not None:
            ctx[RENDER_BLOCK_KEY] = block

        template = self.create_template(name)
        template.set_parameters(ctx)
        with render_context(
            template_name=name, content_type=template.content_type
        ) as render_ctx:
            template.render()
            return render_ctx.sink.getvalue()
