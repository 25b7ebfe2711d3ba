"""
Rule data models for the compression exclusion engine.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Type, TypeVar

from shared.errors import ConfigurationError


class Algorithm(str, Enum):
    """Compression algorithms a request may prefer."""
    GZIP = "gzip"
    DEFLATE = "deflate"
    DEFAULT = "default"


class CompressionLevel(str, Enum):
    """Compression levels a request may prefer."""
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"
    DEFAULT = "default"


class PathExpressionType(str, Enum):
    """How an excluded path entry is interpreted."""
    STRING = "string"
    REGEX = "regex"


E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class DecodeResult(Generic[E]):
    """Outcome of decoding configuration text against an enum.

    ``value`` is only meaningful when ``recognized`` is true.
    """
    recognized: bool
    value: Optional[E] = None

    @classmethod
    def decoded(cls, value: E) -> "DecodeResult[E]":
        return cls(recognized=True, value=value)

    @classmethod
    def unrecognized(cls) -> "DecodeResult[E]":
        return cls(recognized=False)


def decode_enum(enum_cls: Type[E], text: Optional[str]) -> DecodeResult[E]:
    """Decode ``text`` case-insensitively against the values of ``enum_cls``."""
    if text is None:
        return DecodeResult.unrecognized()

    wanted = text.strip().lower()
    for member in enum_cls:
        if member.value == wanted:
            return DecodeResult.decoded(member)

    return DecodeResult.unrecognized()


def decode_path_expression_type(text: Optional[str]) -> PathExpressionType:
    """Decode the ``type`` attribute of an excluded path entry.

    Absent or empty means ``string``. Anything else that is not a known
    kind is a hard configuration error.
    """
    if text is None or not text.strip():
        return PathExpressionType.STRING

    result = decode_enum(PathExpressionType, text)
    if not result.recognized:
        raise ConfigurationError(
            f"Unknown path expression type '{text}'",
            details={"type": text, "allowed": [t.value for t in PathExpressionType]}
        )
    return result.value


def compile_pattern(source: str) -> "re.Pattern[str]":
    """Compile an excluded path pattern, reporting bad syntax as configuration."""
    try:
        return re.compile(source)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid path pattern '{source}': {e}",
            details={"path": source}
        ) from e


@dataclass(frozen=True)
class PathRule:
    """A single excluded path rule.

    Literal rules hold the lower-cased path in ``source``; pattern rules
    hold the pattern text as written plus its compiled form.
    """
    kind: PathExpressionType
    source: str
    pattern: Optional["re.Pattern[str]"] = None

    @classmethod
    def literal(cls, path: str) -> "PathRule":
        return cls(kind=PathExpressionType.STRING, source=path.lower())

    @classmethod
    def regex(cls, source: str) -> "PathRule":
        return cls(kind=PathExpressionType.REGEX, source=source, pattern=compile_pattern(source))

    @property
    def is_pattern(self) -> bool:
        return self.kind == PathExpressionType.REGEX

    def matches(self, path: str, lowered: str) -> bool:
        """Check the raw path against a pattern, or its lower-cased form against a literal."""
        if self.is_pattern:
            return self.pattern.search(path) is not None
        return self.source == lowered
