"""
Exclusion rules package.

Defines the rule model and the settings object that decides whether a
response bypasses compression, together with the preferred algorithm
and level.

Modules of interest:
- models: Enums, the explicit enum decoder, and the tagged path rule.
- settings: CompressionSettings with merge and matching.
"""

from .models import (
    Algorithm, CompressionLevel, DecodeResult, PathExpressionType, PathRule,
    decode_enum, decode_path_expression_type
)
from .settings import CompressionSettings

__all__ = [
    "Algorithm",
    "CompressionLevel",
    "CompressionSettings",
    "DecodeResult",
    "PathExpressionType",
    "PathRule",
    "decode_enum",
    "decode_path_expression_type",
]
