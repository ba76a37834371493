"""Walking the referrer chain of a template instance.

Each instance keeps a weak link to the instance that created it plus the
kind of link (``ReferenceType``). Instances are created top-down (the
requested template first, its layout next) but the links point back up to
the creator, so walking them visits templates from the most recently
created to the render root.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from lineage._types import ReferenceType

if TYPE_CHECKING:
    from lineage.template.core import Template


def iter_referrers(template: Template) -> Iterator[tuple[Template, ReferenceType]]:
    """Yield ``(referrer, link)`` pairs from ``template`` up to the render root.

    ``link`` is the reference type connecting the previous instance to
    ``referrer``. Stops early if a referrer was already garbage collected.
    """
    current = template
    while True:
        referrer = current.referrer_template
        if referrer is None:
            return
        yield referrer, current.reference_type
        current = referrer


def reference_path(template: Template) -> list[str]:
    """Names of the templates from the render root down to ``template``.

    Example:
        >>> reference_path(layout)
        ['page.html', 'layout.html']
    """
    names = [template.name]
    names.extend(referrer.name for referrer, _link in iter_referrers(template))
    names.reverse()
    return names


def is_document_root_chain(template: Template) -> bool:
    """True if only ``extends`` links separate ``template`` from the render root.

    Such an instance belongs to the chain of the document being rendered.
    An instance reached through ``include`` or ``includeblock`` anywhere on
    the way up is embedded in another template's output instead, so a
    layout it extends renders in full even though its own link is ``extends``.
    """
    if template.reference_type not in (ReferenceType.ROOT, ReferenceType.EXTENDS):
        return False
    return all(link is ReferenceType.EXTENDS for _referrer, link in iter_referrers(template))
