"""Lineage — template inheritance and block resolution for Python.

Given templates related by ``extends`` and ``include``, Lineage decides
which template produces the output, which implementation of a block wins
and how a block calls the implementation it overrides.

Quickstart:
    >>> from lineage import DictLoader, Environment, TemplateDefinition
    >>> def layout(t, p):
    ...     t.write("<title>")
    ...     t.render_block("title", p)
    ...     t.write("</title>")
    >>> def page_title(t, p):
    ...     t.write("Post, ")
    ...     t.render_block_parent("title", p)
    >>> env = Environment(loader=DictLoader({
    ...     "base": TemplateDefinition(body=layout, blocks={"title": lambda t, p: t.write("Site")}),
    ...     "post": TemplateDefinition(parent="base", blocks={"title": page_title}),
    ... }))
    >>> env.render("post")
    '<title>Post, Site</title>'

Architecture:
Environment (factory + loader) → Template (orchestrator) →
BlockRegistry (shared per chain) + BlockTypes (content-type guard)

Compiling template source into render functions is outside Lineage; a
loader hands out ``TemplateDefinition`` objects holding plain callables.

Thread-Safety:
Per-render state (output sink, template stack) lives in a ContextVar, so
concurrent renders in different threads or tasks are independent.

"""

from lineage._types import ContentType, ReferenceType
from lineage.environment import (
    ChoiceLoader,
    ContentTypeMismatchWarning,
    DictLoader,
    Environment,
    ErrorCode,
    FunctionLoader,
    Loader,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UndefinedBlockError,
)
from lineage.render_context import (
    RenderContext,
    get_render_context,
    get_render_context_required,
    render_context,
)
from lineage.template import (
    BlockDefinition,
    BlockRegistry,
    BlockTypes,
    OutputSink,
    Template,
    TemplateDefinition,
)

__version__ = "0.1.0"

__all__ = [
    "BlockDefinition",
    "BlockRegistry",
    "BlockTypes",
    "ChoiceLoader",
    "ContentType",
    "ContentTypeMismatchWarning",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FunctionLoader",
    "Loader",
    "OutputSink",
    "ReferenceType",
    "RenderContext",
    "Template",
    "TemplateDefinition",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "UndefinedBlockError",
    "__version__",
    "get_render_context",
    "get_render_context_required",
    "render_context",
]
