"""Environment, loaders and exceptions for Lineage."""

from lineage.environment.core import Environment
from lineage.environment.exceptions import (
    ContentTypeMismatchWarning,
    ErrorCode,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UndefinedBlockError,
)
from lineage.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FunctionLoader,
    Loader,
    resolve_relative_name,
)

__all__ = [
    "ChoiceLoader",
    "ContentTypeMismatchWarning",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FunctionLoader",
    "Loader",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "UndefinedBlockError",
    "resolve_relative_name",
]
