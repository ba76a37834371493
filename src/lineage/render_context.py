"""Lineage RenderContext — per-render state held in a ContextVar.

Keeps state that belongs to one render pass out of the template
parameters: the output sink, the content type of the template currently
executing, and the stack of template names for error traces.

Thread Safety:
    ContextVars are thread-local by design. Each thread or asyncio task
    rendering a document sees its own RenderContext, so two renders never
    share an output sink.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from lineage._types import ContentType
from lineage.template.output import OutputSink


@dataclass
class RenderContext:
    """Per-render state isolated from template parameters.

    Attributes:
        template_name: Name of the template that started the render
        content_type: Content type of the template currently executing
        sink: Output destination shared by every template in the render
        template_stack: Names of templates currently executing, outermost
            first, for error traces
    """

    template_name: str | None = None
    content_type: ContentType = ContentType.HTML
    sink: OutputSink = field(default_factory=OutputSink)
    template_stack: list[str] = field(default_factory=list)

    # Saved content types, restored as templates finish
    _saved_types: list[ContentType] = field(default_factory=list)

    @property
    def current_template(self) -> str | None:
        """Name of the innermost executing template."""
        return self.template_stack[-1] if self.template_stack else None

    def enter(self, template_name: str) -> None:
        """Record that a template body starts executing."""
        self.template_stack.append(template_name)
        self._saved_types.append(self.content_type)

    def leave(self) -> None:
        """Undo the matching ``enter()`` and restore the caller's content type."""
        self.template_stack.pop()
        self.content_type = self._saved_types.pop()


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "lineage_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


def get_render_context_required() -> RenderContext:
    """Get current render context, raise if not in render.

    Raises:
        RuntimeError: If not in a render context
    """
    ctx = _render_context.get()
    if ctx is None:
        raise RuntimeError(
            "Not in a render context; render templates through Environment.render() "
            "or inside render_context()"
        )
    return ctx


@contextmanager
def render_context(
    template_name: str | None = None,
    content_type: ContentType = ContentType.HTML,
    sink: OutputSink | None = None,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Creates a new RenderContext, makes it current for the duration of the
    ``with`` block and restores the previous one on exit.

    Example:
        with render_context(template_name="page.html") as ctx:
            env.create_template("page.html").render()
            html = ctx.sink.getvalue()
    """
    ctx = RenderContext(
        template_name=template_name,
        content_type=content_type,
        sink=sink if sink is not None else OutputSink(),
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
