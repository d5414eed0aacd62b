"""
Answer key derivation and export.
"""

from variant_service.answer_key.builder import (
    answer_key_table,
    build_answer_key,
    write_answer_key_csv,
)
from variant_service.answer_key.data_models import AnswerKey

__all__ = [
    "AnswerKey",
    "answer_key_table",
    "build_answer_key",
    "write_answer_key_csv",
]
