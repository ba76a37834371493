"""Content-type guard for block declarations.

A block name must mean one kind of output across a whole chain: a
``title`` block declared in an HTML layout cannot be overridden by a
plain-text child without escaping going wrong. The first declaration
records the type; later ones are compared against it.

"""

from __future__ import annotations

import warnings

from lineage._types import ContentType
from lineage.environment.exceptions import ContentTypeMismatchWarning


class BlockTypes:
    """Block name → recorded content type, shared like ``BlockRegistry``."""

    __slots__ = ("_types",)

    def __init__(self) -> None:
        self._types: dict[str, ContentType] = {}

    def get(self, name: str) -> ContentType | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def check(
        self,
        declared: ContentType,
        name: str,
        template_name: str | None = None,
    ) -> bool:
        """Record or verify the content type of block ``name``.

        Returns False after warning when ``declared`` disagrees with the
        recorded type; the recorded type is kept.

        Warns:
            ContentTypeMismatchWarning: On a mismatching redeclaration
        """
        recorded = self._types.get(name)
        if recorded is None:
            self._types[name] = declared
            return True
        if recorded is not declared:
            warnings.warn(
                ContentTypeMismatchWarning(name, recorded, declared, template_name),
                stacklevel=3,
            )
            return False
        return True

    def __repr__(self) -> str:
        return f"<BlockTypes {{{', '.join(f'{k}: {v.value}' for k, v in self._types.items())}}}>"
