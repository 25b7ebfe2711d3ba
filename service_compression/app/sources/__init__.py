"""
Configuration source adapters.

- fragments: The fragment protocol plus XML and mapping implementations.
- documents: Sources that resolve a section path inside an XML or YAML
  document.
"""

from .fragments import Attributes, Fragment, MappingFragment, XmlFragment
from .documents import (
    ConfigurationSource, MappingConfigurationSource, XmlConfigurationSource,
    source_from_file
)

__all__ = [
    "Attributes",
    "Fragment",
    "MappingFragment",
    "XmlFragment",
    "ConfigurationSource",
    "MappingConfigurationSource",
    "XmlConfigurationSource",
    "source_from_file",
]
