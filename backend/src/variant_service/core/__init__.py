"""
Core shared types and utilities for the variant service.

This module provides the canonical evaluation model, the error hierarchy
and the letter helpers used by every other subpackage.
"""

from variant_service.core.data_models import (
    Alternative,
    ContentBlock,
    Evaluation,
    Item,
    MultipleChoiceItem,
    OpenResponseItem,
    Student,
    TrueFalseItem,
)
from variant_service.core.exceptions import (
    DataIntegrityError,
    ScanPayloadError,
    ValidationError,
)
from variant_service.core.utils import index_to_letter, letter_to_index, row_label

__all__ = [
    "Alternative",
    "ContentBlock",
    "DataIntegrityError",
    "Evaluation",
    "Item",
    "MultipleChoiceItem",
    "OpenResponseItem",
    "ScanPayloadError",
    "Student",
    "TrueFalseItem",
    "ValidationError",
    "index_to_letter",
    "letter_to_index",
    "row_label",
]
