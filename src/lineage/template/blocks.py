"""Block registry shared across an inheritance chain.

Every chain (templates linked by ``extends`` or ``includeblock``) shares a
single ``BlockRegistry``. It maps a block name to a ``BlockStack``: the
implementations of that block in registration order. Descendants are
initialized before their ancestors, so the first entry is the
most-derived implementation and the last one is the most-base.

Cursor Protocol:
    Each stack carries an explicit integer cursor.

    - ``reset()`` puts it on the most-derived entry (``render_block``)
    - ``advance()`` moves one step toward the base (``render_block_parent``)
    - ``rewind()`` steps back after a parent call returns

    Rewinding after each parent call lets a block body call its parent's
    version any number of levels deep, while a later top-level
    ``render_block`` of the same name (e.g. inside a loop) starts again from
    the most-derived implementation.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from lineage._types import ContentType

BlockRender = Callable[[dict[str, Any]], None]


@dataclass(frozen=True, slots=True)
class BlockEntry:
    """One implementation of a block, bound to the template that declared it.

    Attributes:
        name: Block name
        template_name: Name of the declaring template (for introspection)
        content_type: Declared content type
        render: Callable taking the block parameters
    """

    name: str
    template_name: str
    content_type: ContentType
    render: BlockRender

    def __call__(self, params: dict[str, Any]) -> None:
        self.render(params)


class BlockStack:
    """Ordered implementations of one block name plus a read cursor."""

    __slots__ = ("_cursor", "_entries")

    def __init__(self) -> None:
        self._entries: list[BlockEntry] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BlockEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> BlockEntry:
        return self._entries[index]

    @property
    def cursor(self) -> int:
        return self._cursor

    def push(self, entry: BlockEntry) -> None:
        self._entries.append(entry)

    def reset(self) -> BlockEntry:
        """Move the cursor to the most-derived entry and return it."""
        self._cursor = 0
        return self._entries[0]

    def advance(self) -> BlockEntry | None:
        """Move the cursor one entry toward the base.

        Returns None, leaving the cursor where it was, when the cursor is
        already on the most-base entry.
        """
        if self._cursor + 1 >= len(self._entries):
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def rewind(self) -> None:
        """Step the cursor back toward the most-derived entry."""
        if self._cursor > 0:
            self._cursor -= 1

    def __repr__(self) -> str:
        owners = ", ".join(entry.template_name for entry in self._entries)
        return f"<BlockStack [{owners}] cursor={self._cursor}>"


class BlockRegistry:
    """Block name → ``BlockStack`` table for one inheritance chain.

    A registry is created per template instance and aliased (never copied)
    into every instance created through ``extends`` or ``includeblock``.
    Names keep first-registration order.
    """

    __slots__ = ("_stacks",)

    def __init__(self) -> None:
        self._stacks: dict[str, BlockStack] = {}

    def push(self, entry: BlockEntry) -> BlockStack:
        """Append ``entry`` to the stack of its name, creating the stack if needed."""
        stack = self._stacks.get(entry.name)
        if stack is None:
            stack = self._stacks[entry.name] = BlockStack()
        stack.push(entry)
        return stack

    def get(self, name: str) -> BlockStack | None:
        return self._stacks.get(name)

    def names(self) -> list[str]:
        """Names with at least one registered implementation."""
        return [name for name, stack in self._stacks.items() if stack]

    def __contains__(self, name: object) -> bool:
        stack = self._stacks.get(name) if isinstance(name, str) else None
        return bool(stack)

    def __len__(self) -> int:
        return len(self._stacks)

    def __repr__(self) -> str:
        return f"<BlockRegistry {self.names()}>"
