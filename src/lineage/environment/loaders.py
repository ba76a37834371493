"""Template loaders for Lineage environments.

Loaders map template names to ``TemplateDefinition`` objects and resolve
names written inside one template relative to that template.

Built-in Loaders:
- `DictLoader`: In-memory mapping (tests, embedded templates)
- `ChoiceLoader`: Try multiple loaders in order (theme fallback)
- `FunctionLoader`: Wrap a callable as a loader

Custom Loaders:
Implement the Loader protocol:
    ```python
    class RegistryLoader:
        def get_source(self, name: str) -> TemplateDefinition:
            try:
                return compiled_templates[name]
            except KeyError:
                raise TemplateNotFoundError(f"Template '{name}' not found") from None

        def resolve_relative_name(self, name: str, referrer_name: str) -> str:
            return name
    ```

"""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Mapping
from typing import Protocol, runtime_checkable

from lineage.environment.exceptions import TemplateNotFoundError, get_suggestion
from lineage.template.definition import TemplateDefinition


@runtime_checkable
class Loader(Protocol):
    """What an Environment needs from a loader."""

    def get_source(self, name: str) -> TemplateDefinition: ...

    def resolve_relative_name(self, name: str, referrer_name: str) -> str: ...


def resolve_relative_name(name: str, referrer_name: str) -> str:
    """Resolve ``./`` and ``../`` names against the referrer's directory.

    Other names are already canonical and are returned unchanged.

    Example:
        >>> resolve_relative_name("../layout.html", "blog/post.html")
        'layout.html'
        >>> resolve_relative_name("./sidebar.html", "blog/post.html")
        'blog/sidebar.html'
        >>> resolve_relative_name("layout.html", "blog/post.html")
        'layout.html'
    """
    if not name.startswith(("./", "../")):
        return name
    directory = posixpath.dirname(referrer_name)
    resolved = posixpath.normpath(posixpath.join(directory, name))
    if resolved.startswith("../") or resolved == "..":
        raise TemplateNotFoundError(
            f"Template '{name}' referenced from '{referrer_name}' resolves outside "
            f"the template root"
        )
    return resolved


class DictLoader:
    """Load template definitions from an in-memory mapping.

    Example:
            >>> loader = DictLoader({
            ...     "base.html": TemplateDefinition(body=base_body, blocks={"content": default}),
            ...     "page.html": TemplateDefinition(parent="base.html", blocks={"content": page}),
            ... })
            >>> env = Environment(loader=loader)
            >>> env.render("page.html")

    Raises:
        TemplateNotFoundError: If the name is not in the mapping
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, TemplateDefinition]):
        self._mapping = mapping

    def get_source(self, name: str) -> TemplateDefinition:
        if name not in self._mapping:
            available = sorted(self._mapping.keys())
            msg = f"Template '{name}' not found"
            match = get_suggestion(available, name)
            if match:
                msg += f". Did you mean '{match}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name]

    def resolve_relative_name(self, name: str, referrer_name: str) -> str:
        return resolve_relative_name(name, referrer_name)

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())


class ChoiceLoader:
    """Try multiple loaders in order, returning the first match.

    Relative names are resolved by the first loader.

    Example:
            >>> loader = ChoiceLoader([DictLoader(theme), DictLoader(defaults)])
            >>> env = Environment(loader=loader)

    Raises:
        TemplateNotFoundError: If no loader can find the template
    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: list[Loader]):
        if not loaders:
            raise ValueError("ChoiceLoader needs at least one loader")
        self._loaders = loaders

    def get_source(self, name: str) -> TemplateDefinition:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def resolve_relative_name(self, name: str, referrer_name: str) -> str:
        return self._loaders[0].resolve_relative_name(name, referrer_name)

    def list_templates(self) -> list[str]:
        """Merge template lists from all loaders (deduplicated, sorted)."""
        templates: set[str] = set()
        for loader in self._loaders:
            if hasattr(loader, "list_templates"):
                templates.update(loader.list_templates())
        return sorted(templates)


class FunctionLoader:
    """Wrap a callable returning a definition (or None) as a loader.

    Example:
            >>> loader = FunctionLoader(lambda name: compiled.get(name))
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[str], TemplateDefinition | None]):
        self._func = func

    def get_source(self, name: str) -> TemplateDefinition:
        definition = self._func(name)
        if definition is None:
            raise TemplateNotFoundError(f"Template '{name}' not found (FunctionLoader)")
        return definition

    def resolve_relative_name(self, name: str, referrer_name: str) -> str:
        return resolve_relative_name(name, referrer_name)
