"""Core enums shared across Lineage.

ContentType:
    Semantic output kind of a template or block. Fixed per template at
    construction; block declarations are checked against it chain-wide.

ReferenceType:
    How a template instance was created from its referrer. Decides whether
    the block registry is shared (``EXTENDS``, ``INCLUDEBLOCK``) or fresh
    (``ROOT``, ``INCLUDE``).

"""

from __future__ import annotations

from enum import Enum


class ContentType(Enum):
    """Semantic output type of a template or block."""

    HTML = "html"
    XHTML = "xhtml"
    XML = "xml"
    JS = "js"
    CSS = "css"
    ICAL = "ical"
    TEXT = "text"

    @property
    def is_xml(self) -> bool:
        """True for XML-flavoured markup (XHTML and XML)."""
        return self in (ContentType.XHTML, ContentType.XML)


class ReferenceType(Enum):
    """Relationship between a template instance and its referrer."""

    ROOT = "root"
    EXTENDS = "extends"
    INCLUDE = "include"
    INCLUDEBLOCK = "includeblock"

    @property
    def shares_blocks(self) -> bool:
        """Whether instances linked this way alias the referrer's block tables."""
        return self in (ReferenceType.EXTENDS, ReferenceType.INCLUDEBLOCK)
