"""
Configuration sources backed by XML and YAML documents.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Union
from xml.etree import ElementTree

import yaml

from shared.errors import ConfigurationError
from shared.logging import get_logger
from .fragments import Fragment, MappingFragment, XmlFragment, local_name

logger = get_logger("compression.sources")


class ConfigurationSource(Protocol):
    """Hands out the fragment stored at a section path, if any."""

    def get_section(self, path: str) -> Optional[Fragment]:
        ...


def split_section_path(path: str) -> list:
    """Split ``a/b/c`` into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


class XmlConfigurationSource:
    """Resolve sections by descending element names below the document root."""

    def __init__(self, root: ElementTree.Element, origin: str = "<string>"):
        self.root = root
        self.origin = origin

    @classmethod
    def from_string(cls, text: str) -> "XmlConfigurationSource":
        try:
            return cls(ElementTree.fromstring(text))
        except ElementTree.ParseError as e:
            raise ConfigurationError(f"Malformed XML configuration: {e}", details={"origin": "<string>"}) from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "XmlConfigurationSource":
        try:
            tree = ElementTree.parse(str(path))
        except ElementTree.ParseError as e:
            raise ConfigurationError(f"Malformed XML configuration: {e}", details={"origin": str(path)}) from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}", details={"origin": str(path)}) from e
        return cls(tree.getroot(), origin=str(path))

    def get_section(self, path: str) -> Optional[XmlFragment]:
        node = self.root
        for segment in split_section_path(path):
            node = next(
                (child for child in node if isinstance(child.tag, str) and local_name(child.tag) == segment),
                None
            )
            if node is None:
                logger.debug("Section not found", origin=self.origin, section=path, missing=segment)
                return None
        return XmlFragment(node)


class MappingConfigurationSource:
    """Resolve sections by descending mapping keys."""

    def __init__(self, data: Mapping[str, Any], origin: str = "<mapping>"):
        self.data = data
        self.origin = origin

    @classmethod
    def from_yaml(cls, text: str, origin: str = "<string>") -> "MappingConfigurationSource":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML configuration: {e}", details={"origin": origin}) from e
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError("YAML configuration must be a mapping", details={"origin": origin})
        return cls(data, origin=origin)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "MappingConfigurationSource":
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}", details={"origin": str(path)}) from e
        return cls.from_yaml(text, origin=str(path))

    def get_section(self, path: str) -> Optional[MappingFragment]:
        node: Any = self.data
        for segment in split_section_path(path):
            if not isinstance(node, Mapping) or segment not in node:
                logger.debug("Section not found", origin=self.origin, section=path, missing=segment)
                return None
            node = node[segment]
        if not isinstance(node, Mapping):
            return None
        return MappingFragment(node)


def source_from_file(path: Union[str, Path], config_format: Optional[str] = None) -> ConfigurationSource:
    """Open a configuration document, picking the parser from ``config_format`` or the suffix."""
    fmt = (config_format or Path(path).suffix.lstrip(".")).lower()
    if fmt in ("xml", "config"):
        return XmlConfigurationSource.from_file(path)
    if fmt in ("yaml", "yml"):
        return MappingConfigurationSource.from_file(path)
    raise ConfigurationError(
        f"Unsupported configuration format '{fmt}'",
        details={"origin": str(path), "allowed": ["xml", "yaml"]}
    )
