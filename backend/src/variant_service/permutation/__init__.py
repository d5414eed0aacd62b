"""
Permutation engine: deterministic seed-keyed shuffles.
"""

from variant_service.permutation.engine import (
    PERMUTATION_VERSION,
    Mulberry32,
    shuffle,
    string_hash,
)

__all__ = [
    "PERMUTATION_VERSION",
    "Mulberry32",
    "shuffle",
    "string_hash",
]
