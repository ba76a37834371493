"""Output sink for rendered text.

StringBuilder pattern: chunks are appended to a list and joined once at
the end, O(n) in output size.

The sink keeps a stack of buffers. The bottom buffer holds the document;
``suspend()`` pushes a buffer whose content is thrown away by
``discard()``. An extending template suspends before its own body runs,
so nothing it writes outside blocks reaches the final output.

Example:
    >>> sink = OutputSink()
    >>> sink.write("<html>")
    >>> sink.suspend()
    >>> sink.write("ignored")
    >>> sink.discard()
    >>> sink.getvalue()
    '<html>'

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class OutputSink:
    """Append-only destination with scoped suspend-and-discard buffers."""

    __slots__ = ("_buffers",)

    def __init__(self) -> None:
        self._buffers: list[list[str]] = [[]]

    @property
    def depth(self) -> int:
        """Number of open nested buffers (0 when writing to the document)."""
        return len(self._buffers) - 1

    def write(self, text: str) -> None:
        if text:
            self._buffers[-1].append(text)

    def suspend(self) -> None:
        """Start capturing into a nested buffer."""
        self._buffers.append([])

    def discard(self) -> None:
        """Drop the innermost nested buffer and everything written to it."""
        if len(self._buffers) == 1:
            raise RuntimeError("Output sink has no suspended buffer to discard")
        self._buffers.pop()

    @contextmanager
    def capture(self) -> Iterator[list[str]]:
        """Collect output written inside the ``with`` block.

        Yields a list that receives the captured text as its single item
        once the block exits, e.g. ``with sink.capture() as out: ...``
        then ``out[0]``.
        """
        result: list[str] = []
        self.suspend()
        try:
            yield result
        finally:
            result.append("".join(self._buffers.pop()))

    def getvalue(self) -> str:
        """Return the document text (ignores still-open nested buffers)."""
        return "".join(self._buffers[0])
