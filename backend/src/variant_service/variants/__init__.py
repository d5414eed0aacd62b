"""
Seeded compilation of printable rows from a canonical evaluation.
"""

from variant_service.variants.compiler import (
    alternative_seed,
    compile_row,
    compile_variants,
    question_seed,
)
from variant_service.variants.data_models import VariantRow

__all__ = [
    "VariantRow",
    "alternative_seed",
    "compile_row",
    "compile_variants",
    "question_seed",
]
