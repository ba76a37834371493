"""Lineage Template package — template instances and the block machinery.

Re-exports the public symbols so that ``from lineage.template import
Template`` works without knowing the module layout.

"""

from lineage.template.blocks import BlockEntry, BlockRegistry, BlockStack
from lineage.template.content_types import BlockTypes
from lineage.template.core import Template
from lineage.template.definition import BlockDefinition, TemplateDefinition
from lineage.template.output import OutputSink
from lineage.template.references import is_document_root_chain, iter_referrers, reference_path

__all__ = [
    "BlockDefinition",
    "BlockEntry",
    "BlockRegistry",
    "BlockStack",
    "BlockTypes",
    "OutputSink",
    "Template",
    "TemplateDefinition",
    "is_document_root_chain",
    "iter_referrers",
    "reference_path",
]
