"""
Compression settings and exclusion matching.
"""

import re
from typing import FrozenSet, List, Optional, Set, Tuple

from shared.logging import get_logger
from service_compression.app.sources.fragments import Fragment
from .models import (
    Algorithm, CompressionLevel, PathExpressionType, PathRule,
    compile_pattern, decode_enum, decode_path_expression_type
)

DEFAULT_EXCLUDED_PATHS = (".axd",)


class CompressionSettings:
    """Preferred algorithm/level plus the MIME type and path exclusion rules.

    Build it during configuration loading with :meth:`merge`; afterwards
    it is only read. Matching never mutates it, so one instance can be
    shared by concurrent requests. To reload, build a new instance and
    swap the reference.
    """

    def __init__(self):
        self.logger = get_logger("compression.settings")
        self.preferred_algorithm = Algorithm.DEFAULT
        self.compression_level = CompressionLevel.DEFAULT
        self._excluded_mime_types: Set[str] = set()
        self._path_rules: List[PathRule] = [PathRule.literal(p) for p in DEFAULT_EXCLUDED_PATHS]

    @classmethod
    def default(cls) -> "CompressionSettings":
        """Settings used when no configuration is found."""
        return cls()

    @classmethod
    def from_fragment(cls, fragment: Optional[Fragment]) -> "CompressionSettings":
        settings = cls()
        settings.merge(fragment)
        return settings

    @classmethod
    def from_fragments(cls, *fragments: Optional[Fragment]) -> "CompressionSettings":
        """Merge fragments outermost scope first."""
        settings = cls()
        for fragment in fragments:
            settings.merge(fragment)
        return settings

    @property
    def excluded_mime_types(self) -> FrozenSet[str]:
        return frozenset(self._excluded_mime_types)

    @property
    def excluded_path_literals(self) -> FrozenSet[str]:
        return frozenset(r.source for r in self._path_rules if not r.is_pattern)

    @property
    def excluded_path_patterns(self) -> Tuple["re.Pattern[str]", ...]:
        return tuple(r.pattern for r in self._path_rules if r.is_pattern)

    @property
    def path_rules(self) -> Tuple[PathRule, ...]:
        return tuple(self._path_rules)

    def merge(self, fragment: Optional[Fragment]) -> None:
        """Fold a configuration fragment into these settings.

        Unknown algorithm or level values keep the current value. An
        unknown path expression type or a bad pattern raises
        ConfigurationError and aborts the merge.
        """
        if fragment is None:
            return

        algorithm = fragment.attribute("preferredAlgorithm")
        if algorithm is not None:
            result = decode_enum(Algorithm, algorithm)
            if result.recognized:
                self.preferred_algorithm = result.value
            else:
                self.logger.debug("Ignoring unknown preferredAlgorithm", value=algorithm)

        level = fragment.attribute("compressionLevel")
        if level is not None:
            result = decode_enum(CompressionLevel, level)
            if result.recognized:
                self.compression_level = result.value
            else:
                self.logger.debug("Ignoring unknown compressionLevel", value=level)

        self._merge_excluded_mime_types(fragment.child_scope("excludedMimeTypes"))
        self._merge_excluded_paths(fragment.child_scope("excludedPaths"))

    def is_excluded_mime_type(self, mime_type: Optional[str]) -> bool:
        """Check whether a MIME type bypasses compression.

        An unknown (None) type is always excluded. Values are compared
        exactly, so wildcards such as ``image/*`` only match a stored
        ``image/*``.
        """
        if mime_type is None:
            return True
        return mime_type.lower() in self._excluded_mime_types

    def is_excluded_path(self, path: str) -> bool:
        """Check whether a request path bypasses compression.

        Literals are compared against the lower-cased path, patterns are
        searched in the raw path. ``path`` must not be None.
        """
        lowered = path.lower()
        return any(rule.matches(path, lowered) for rule in self._path_rules)

    def _merge_excluded_mime_types(self, scope: Optional[Fragment]) -> None:
        if scope is None:
            return

        for name, entry in scope.children():
            mime_type = entry.attribute("type")
            if name not in ("add", "delete") or mime_type is None:
                continue
            mime_type = mime_type.lower()
            if name == "add":
                self._excluded_mime_types.add(mime_type)
            else:
                self._excluded_mime_types.discard(mime_type)
            self.logger.debug("Excluded MIME type updated", action=name, mime_type=mime_type)

    def _merge_excluded_paths(self, scope: Optional[Fragment]) -> None:
        if scope is None:
            return

        for name, entry in scope.children():
            # Decoded before the entry name is looked at; a bad type fails any entry
            kind = decode_path_expression_type(entry.attribute("type"))
            path = entry.attribute("path")
            if name not in ("add", "delete") or path is None:
                continue

            if name == "add":
                self._add_path_rule(kind, path)
            else:
                self._delete_path_rule(kind, path)
            self.logger.debug("Excluded path updated", action=name, kind=kind.value, path=path)

    def _add_path_rule(self, kind: PathExpressionType, path: str) -> None:
        if kind == PathExpressionType.REGEX:
            self._path_rules.append(PathRule.regex(path))
            return

        rule = PathRule.literal(path)
        if rule not in self._path_rules:
            self._path_rules.append(rule)

    def _delete_path_rule(self, kind: PathExpressionType, path: str) -> None:
        if kind == PathExpressionType.REGEX:
            # Malformed patterns fail on delete as they do on add
            source = compile_pattern(path).pattern
            target = next((r for r in self._path_rules if r.is_pattern and r.source == source), None)
        else:
            target = PathRule.literal(path)

        if target is not None and target in self._path_rules:
            self._path_rules.remove(target)

    def __repr__(self) -> str:
        return (
            f"CompressionSettings(preferred_algorithm={self.preferred_algorithm.value!r}, "
            f"compression_level={self.compression_level.value!r}, "
            f"excluded_mime_types={sorted(self._excluded_mime_types)!r}, "
            f"path_rules={[(r.kind.value, r.source) for r in self._path_rules]!r})"
        )
