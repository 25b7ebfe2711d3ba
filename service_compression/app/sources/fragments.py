"""
Configuration fragments.

A fragment is one node of a hierarchical configuration document. The
settings merge only needs three things from it: named attributes, a
named child scope, and the ordered entries of a scope.
"""

from typing import Any, List, Mapping, Optional, Protocol, Sequence, Tuple
from xml.etree.ElementTree import Element

from shared.errors import ConfigurationError


class Attributes(Protocol):
    """Anything that can look up a named attribute."""

    def attribute(self, name: str) -> Optional[str]:
        ...


class Fragment(Attributes, Protocol):
    """A configuration node with attributes, child scopes and entries."""

    def child_scope(self, name: str) -> Optional["Fragment"]:
        ...

    def children(self) -> Sequence[Tuple[str, Attributes]]:
        ...


def local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


class XmlFragment:
    """Fragment backed by an ElementTree element."""

    def __init__(self, element: Element):
        self.element = element

    def attribute(self, name: str) -> Optional[str]:
        return self.element.get(name)

    def child_scope(self, name: str) -> Optional["XmlFragment"]:
        for child in self._elements():
            if local_name(child.tag) == name:
                return XmlFragment(child)
        return None

    def children(self) -> List[Tuple[str, "XmlFragment"]]:
        return [(local_name(child.tag), XmlFragment(child)) for child in self._elements()]

    def _elements(self) -> List[Element]:
        # Comments and processing instructions carry a callable as their tag
        return [child for child in self.element if isinstance(child.tag, str)]

    def __repr__(self) -> str:
        return f"XmlFragment({local_name(self.element.tag)!r})"


class MappingFragment:
    """Fragment backed by plain mappings, e.g. parsed YAML or JSON.

    Scalar values are attributes. A list value is a scope whose items are
    single-key mappings::

        excludedPaths:
          - add: {path: "^/api/", type: regex}
          - delete: {path: .axd}

    A mapping value is a nested fragment; its mapping-valued keys are also
    its entries, in key order, so ``excludedMimeTypes: {add: {type: x}}``
    reads like the one-item list.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None,
                 entries: Optional[Sequence[Tuple[str, "MappingFragment"]]] = None):
        self.data = data or {}
        self.entries = list(entries or [])

    @classmethod
    def from_entries(cls, items: Sequence[Any]) -> "MappingFragment":
        """Build a scope fragment from a list of ``{name: attributes}`` items."""
        entries = []
        for index, item in enumerate(items):
            if not isinstance(item, Mapping) or len(item) != 1:
                raise ConfigurationError(
                    "Scope entries must be single-key mappings",
                    details={"index": index, "entry": repr(item)}
                )
            name, attributes = next(iter(item.items()))
            if attributes is None:
                attributes = {}
            if not isinstance(attributes, Mapping):
                raise ConfigurationError(
                    f"Attributes of entry '{name}' must be a mapping",
                    details={"index": index, "entry": repr(item)}
                )
            entries.append((str(name), cls(attributes)))
        return cls(entries=entries)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MappingFragment":
        """Build a nested fragment whose mapping-valued keys double as entries."""
        entries = [
            (str(name), cls(attributes or {}))
            for name, attributes in data.items()
            if attributes is None or isinstance(attributes, Mapping)
        ]
        return cls(data, entries=entries)

    def attribute(self, name: str) -> Optional[str]:
        value = self.data.get(name)
        if value is None or isinstance(value, (Mapping, list, tuple)):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def child_scope(self, name: str) -> Optional["MappingFragment"]:
        value = self.data.get(name)
        if isinstance(value, Mapping):
            return MappingFragment.from_mapping(value)
        if isinstance(value, (list, tuple)):
            return MappingFragment.from_entries(value)
        return None

    def children(self) -> List[Tuple[str, "MappingFragment"]]:
        return list(self.entries)

    def __repr__(self) -> str:
        return f"MappingFragment(keys={sorted(self.data)!r}, entries={len(self.entries)})"
