"""Exceptions and warnings for Lineage.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Loader could not resolve a template name
└── TemplateRuntimeError      # Render-time failure with template context
    └── UndefinedBlockError   # No block implementation at the requested position

ContentTypeMismatchWarning (UserWarning)
    Non-fatal: a block was redeclared with a different content type.

Example:
    ```
    L-RUN-001: Cannot include undefined block 'headr', did you mean 'header'?
      Location: page.html
    ```

"""

from __future__ import annotations

from collections.abc import Iterable
from difflib import get_close_matches
from enum import Enum

from lineage._types import ContentType
from lineage.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for Lineage errors.

    Format: L-{CATEGORY}-{NUMBER}
    Categories: RUN (runtime), TPL (template loading)
    """

    UNDEFINED_BLOCK = "L-RUN-001"
    RUNTIME_ERROR = "L-RUN-002"
    MAX_DEPTH = "L-RUN-003"
    CONTENT_TYPE_MISMATCH = "L-RUN-004"

    TEMPLATE_NOT_FOUND = "L-TPL-001"

    @property
    def category(self) -> str:
        """Error category ('runtime' or 'template')."""
        prefix = self.value.split("-")[1]
        return {"RUN": "runtime", "TPL": "template"}.get(prefix, "unknown")


def get_suggestion(candidates: Iterable[str], name: str) -> str | None:
    """Return the known name closest to ``name``, or None if nothing is close.

    Example:
        >>> get_suggestion(["header", "footer"], "headr")
        'header'
    """
    matches = get_close_matches(name, list(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None


def format_template_stack(stack: list[str] | None) -> str:
    """Format the chain of executing templates, outermost first."""
    if not stack:
        return ""
    lines = [terminal.dim_text("Template stack:")]
    lines.extend(f"  • {terminal.location(name)}" for name in stack)
    return "\n".join(lines)


class TemplateError(Exception):
    """Base exception for all Lineage template errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-glance diagnostic prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """Template name could not be resolved by the loader.

    Example:
        >>> env.create_template("layuot.html")
        TemplateNotFoundError: Template 'layuot.html' not found. Did you mean 'layout.html'?
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateRuntimeError(TemplateError):
    """Render-time error with template context.

    Attributes:
        message: Error description
        template_name: Template executing when the error occurred
        suggestion: Actionable fix suggestion
        template_stack: Names of executing templates, outermost first
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        suggestion: str | None = None,
        template_stack: list[str] | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.suggestion = suggestion
        self.template_stack = template_stack or []
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Location: {terminal.location(self.template_name)}")
        if len(self.template_stack) > 1:
            parts.append(format_template_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        parts = [
            terminal.format_error_header(self.code.value if self.code else None, self.message)
        ]
        if self.template_name:
            parts.append(f"  Location: {terminal.location(self.template_name)}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class UndefinedBlockError(TemplateRuntimeError):
    """No block implementation exists at the requested position.

    Raised by ``render_block()`` when no template in the chain declares the
    block, and by ``render_block_parent()`` when the current implementation
    is already the most-base one.

    If ``available_names`` is given (``render_block()`` only), a
    "did you mean" hint is added when one of them is close to ``block_name``.

    Attributes:
        block_name: Requested block name
        parent: True when raised for a parent-block call
        did_you_mean: Closest known block name, or None
    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_BLOCK

    def __init__(
        self,
        block_name: str,
        *,
        parent: bool = False,
        available_names: Iterable[str] | None = None,
        template_name: str | None = None,
        template_stack: list[str] | None = None,
    ):
        self.block_name = block_name
        self.parent = parent
        self.did_you_mean = (
            get_suggestion(available_names, block_name)
            if available_names and not parent
            else None
        )
        kind = "parent block" if parent else "block"
        message = f"Cannot include undefined {kind} '{terminal.block_name(block_name)}'"
        if self.did_you_mean:
            message += f", did you mean '{terminal.suggestion(self.did_you_mean)}'?"
        super().__init__(
            message,
            template_name=template_name,
            template_stack=template_stack,
            suggestion=None if parent else "Declare the block in this template or one it extends",
        )


class ContentTypeMismatchWarning(UserWarning):
    """A block name was redeclared in the chain with a different content type.

    Non-fatal: the first recorded content type stays authoritative and
    rendering continues.
    """

    code = ErrorCode.CONTENT_TYPE_MISMATCH

    def __init__(
        self,
        block_name: str,
        recorded: ContentType,
        declared: ContentType,
        template_name: str | None = None,
    ):
        self.block_name = block_name
        self.recorded = recorded
        self.declared = declared
        self.template_name = template_name
        message = f"Overridden block '{block_name}' in an incompatible context"
        if template_name:
            message += f" ({template_name})"
        super().__init__(f"{message}: {declared.value} declared, {recorded.value} recorded")
