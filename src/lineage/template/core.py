"""Lineage Template — one template instance taking part in a render.

A Template binds a ``TemplateDefinition`` to the state of a single render
step: parameters, accumulators, the block tables of its chain and a weak
link to the instance that created it.

Architecture:
    ```
    Template
    ├── _env_ref: WeakRef[Environment]     # Factory and loader
    ├── _definition: TemplateDefinition    # Body, blocks, parent
    ├── block_queue: BlockRegistry         # Shared across extends/includeblock
    ├── block_types: BlockTypes            # Shared with block_queue
    ├── global_scope                       # Shared across the whole render
    ├── local_scope                        # Private
    └── _referrer_ref: WeakRef[Template]   # Creator, for upward chain walks
    ```

Render Protocol:
    ```
    render()
    ├── initialize()        register blocks, detect parent, single-block mode
    ├── body(self, params)  output suspended when a parent follows
    └── try_render_parent() discard own output, render the parent instead
    ```

The topmost ancestor is the only template whose body output survives. Its
``render_block()`` calls resolve through the shared registry to the
most-derived implementation.

"""

from __future__ import annotations

import logging
import weakref
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

from lineage._types import ContentType, ReferenceType
from lineage.environment.exceptions import ErrorCode, TemplateRuntimeError, UndefinedBlockError
from lineage.template.blocks import BlockEntry, BlockRegistry, BlockRender
from lineage.template.content_types import BlockTypes
from lineage.template.references import is_document_root_chain, reference_path

if TYPE_CHECKING:
    from lineage.environment import Environment
    from lineage.template.definition import RenderFunc, TemplateDefinition

logger = logging.getLogger(__name__)

# Reserved parameter keys
LOCAL_SCOPE_KEY = "_local"
GLOBAL_SCOPE_KEY = "_global"
RENDER_BLOCK_KEY = "_render_block"


class Template:
    """Template instance for one render step.

    Created by ``Environment.create_template()`` or, for parents and
    includes, by ``create_template()`` on the referring instance. Each
    instance is initialized once, rendered once and then dropped.

    Attributes:
        params: Parameters visible to the body and blocks
        local_scope: Accumulator private to this instance
        global_scope: Accumulator shared with every instance this one creates
        block_queue: Block implementations of the chain, most-derived first
        block_types: Recorded content type per block name

    Example:
        >>> env = Environment(loader=DictLoader({"page": page_definition}))
        >>> env.render("page", {"title": "Home"})
        '<h1>Home</h1>'
    """

    __slots__ = (
        "__weakref__",
        "_content_type",
        "_definition",
        "_depth",
        "_env_ref",
        "_name",
        "_parent_name",
        "_reference_type",
        "_referrer_ref",
        "block_queue",
        "block_types",
        "global_scope",
        "local_scope",
        "params",
    )

    def __init__(
        self,
        env: Environment,
        name: str,
        definition: TemplateDefinition,
    ):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._name = name
        self._definition = definition
        self._content_type: ContentType = definition.content_type or env.default_content_type
        self.params: dict[str, Any] = {}
        self.local_scope = SimpleNamespace()
        self.global_scope = SimpleNamespace()
        self.block_queue = BlockRegistry()
        self.block_types = BlockTypes()
        self._referrer_ref: weakref.ref[Template] | None = None
        self._reference_type = ReferenceType.ROOT
        self._parent_name: str | None = None
        self._depth = 0

    @property
    def _env(self) -> Environment:
        """Get the Environment (dereferences weak reference)."""
        env = self._env_ref()
        if env is None:
            raise RuntimeError(f"Environment has been garbage collected (template: {self._name})")
        return env

    @property
    def name(self) -> str:
        return self._name

    @property
    def content_type(self) -> ContentType:
        return self._content_type

    @property
    def referrer_template(self) -> Template | None:
        """Instance that created this one; None for the render root."""
        return self._referrer_ref() if self._referrer_ref is not None else None

    @property
    def reference_type(self) -> ReferenceType:
        return self._reference_type

    def get_parent_name(self) -> str | None:
        """Name of the template this one extends, as declared (unresolved)."""
        parent = self._definition.parent
        if callable(parent):
            parent = parent(self)
        return parent or None

    def set_parameters(self, params: dict[str, Any]) -> Template:
        """Replace all parameters."""
        self.params = params
        return self

    def get_parameters(self) -> dict[str, Any]:
        return self.params

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        """Render this instance into the active render context's sink."""
        from lineage.render_context import get_render_context_required

        render_ctx = get_render_context_required()
        sink = render_ctx.sink
        depth = sink.depth
        render_ctx.enter(self._name)
        try:
            if self.initialize():
                self._definition.body(self, self.params)
        except BaseException:
            # Drop the buffer suspended for a pending parent
            while sink.depth > depth:
                sink.discard()
            raise
        finally:
            render_ctx.leave()
        self.try_render_parent(dict(self.params))

    def initialize(self) -> bool:
        """Prepare the instance before its body runs.

        Registers the declared blocks into the chain's registry and decides
        how output is produced:

        - with a parent, the sink is suspended; the body still runs but
          its output is dropped by ``try_render_parent()``
        - with a single-block request on the document's own chain, the
          block is rendered right away and the body is skipped

        Returns:
            True if the body should run
        """
        from lineage.render_context import get_render_context_required

        render_ctx = get_render_context_required()
        render_ctx.content_type = self._content_type

        self.params[LOCAL_SCOPE_KEY] = self.local_scope
        self.params[GLOBAL_SCOPE_KEY] = self.global_scope

        for block_name, block in self._definition.iter_blocks():
            content_type = block.content_type or self._content_type
            self.block_queue.push(
                BlockEntry(
                    name=block_name,
                    template_name=self._name,
                    content_type=content_type,
                    render=self._bind_block(block.render),
                )
            )
            self.check_block_content_type(content_type, block_name)
            logger.debug("Registered block %r from %s", block_name, self._name)

        self._parent_name = self.get_parent_name()
        if self._parent_name:
            render_ctx.sink.suspend()
            return True

        block_name = self.params.get(RENDER_BLOCK_KEY)
        if block_name and is_document_root_chain(self):
            logger.debug("Rendering only block %r from %s", block_name, self._name)
            self.render_block(block_name, self.params)
            return False
        return True

    def try_render_parent(self, params: dict[str, Any]) -> bool:
        """Hand output over to the parent template, if one was declared.

        Returns:
            True if the parent was rendered in place of this instance
        """
        if not self._parent_name:
            return False
        from lineage.render_context import get_render_context_required

        get_render_context_required().sink.discard()
        logger.debug("Delegating %s to parent %r", self._name, self._parent_name)
        self.create_template(self._parent_name, params, ReferenceType.EXTENDS).render()
        return True

    def _bind_block(self, func: RenderFunc) -> BlockRender:
        def render_bound(params: dict[str, Any]) -> None:
            func(self, params)

        return render_bound

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def create_template(
        self,
        name: str,
        params: dict[str, Any],
        reference_type: ReferenceType | str,
    ) -> Template:
        """Create the instance for a template this one extends or includes.

        ``name`` is resolved relative to this template through the loader.
        ``extends`` and ``includeblock`` children share this instance's
        block tables; ``include`` children get their own.

        Raises:
            TemplateRuntimeError: If the chain exceeds ``Environment.max_depth``
            TemplateNotFoundError: If the loader cannot find ``name``
        """
        reference_type = ReferenceType(reference_type)
        env = self._env
        name = env.resolve_relative_name(name, self._name)
        if self._depth + 1 > env.max_depth:
            raise TemplateRuntimeError(
                f"Maximum template depth exceeded ({env.max_depth}) "
                f"when creating '{name}' ({reference_type.value})",
                template_name=self._name,
                template_stack=reference_path(self),
                suggestion="Check for circular extends or includes: A → B → A",
                code=ErrorCode.MAX_DEPTH,
            )

        child = env.create_template(name)
        child.params = params
        child._referrer_ref = weakref.ref(self)
        child._reference_type = reference_type
        child._depth = self._depth + 1
        child.global_scope = self.global_scope
        if reference_type.shares_blocks:
            child.block_queue = self.block_queue
            child.block_types = self.block_types
        return child

    def include(self, name: str, params: dict[str, Any] | None = None) -> None:
        """Render another template in place, with its own blocks."""
        self.create_template(name, dict(params or {}), ReferenceType.INCLUDE).render()

    def include_block(self, name: str, params: dict[str, Any] | None = None) -> None:
        """Render another template in place, sharing this chain's blocks.

        The included template's blocks are registered after the ones already
        known, so they only fill in names nobody else in the chain declared.
        """
        self.create_template(name, dict(params or {}), ReferenceType.INCLUDEBLOCK).render()

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def render_block(self, name: str, params: dict[str, Any]) -> None:
        """Render the most-derived implementation of block ``name``.

        Raises:
            UndefinedBlockError: If no template in the chain declares it
        """
        stack = self.block_queue.get(name)
        if not stack:
            raise UndefinedBlockError(
                name,
                available_names=self.block_queue.names(),
                template_name=self._name,
                template_stack=self._template_stack(),
            )
        stack.reset()(params)

    def render_block_parent(self, name: str, params: dict[str, Any]) -> None:
        """Render the next less-derived implementation of block ``name``.

        Called from inside a block body to include the version it overrides.

        Raises:
            UndefinedBlockError: If the current implementation is the most-base one
        """
        stack = self.block_queue.get(name)
        entry = stack.advance() if stack else None
        if entry is None:
            raise UndefinedBlockError(
                name,
                parent=True,
                template_name=self._name,
                template_stack=self._template_stack(),
            )
        try:
            entry(params)
        finally:
            stack.rewind()

    def check_block_content_type(self, declared: ContentType, name: str) -> bool:
        """Record or verify the content type of block ``name`` for the chain."""
        return self.block_types.check(declared, name, self._name)

    def has_block(self, name: str) -> bool:
        return name in self.block_queue

    def list_blocks(self) -> list[str]:
        """Names of blocks registered in this chain so far."""
        return self.block_queue.names()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write(self, text: str) -> None:
        """Append text to the current output."""
        from lineage.render_context import get_render_context_required

        get_render_context_required().sink.write(text)

    def _template_stack(self) -> list[str] | None:
        from lineage.render_context import get_render_context

        render_ctx = get_render_context()
        return list(render_ctx.template_stack) if render_ctx else None

    def __repr__(self) -> str:
        return f"<Template {self._name} ({self._reference_type.value})>"
