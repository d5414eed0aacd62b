"""
Answer key derivation from compiled rows.

The key is read from each row's already-shuffled alternatives, never from
canonical order. A key entry that is missing or wrong would invalidate the
score of every student who sat that row, so an item without exactly one
correct alternative is a hard error here.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from variant_service.answer_key.data_models import AnswerKey
from variant_service.core.constants import MISSING_KEY_CELL
from variant_service.core.data_models import MultipleChoiceItem
from variant_service.core.exceptions import DataIntegrityError
from variant_service.core.utils import index_to_letter
from variant_service.variants.data_models import VariantRow

logger = logging.getLogger(__name__)


def correct_letter(row_label: str, item: MultipleChoiceItem) -> str:
    """
    Letter of the single correct alternative in printed order.

    Raises:
        DataIntegrityError: If zero or several alternatives are correct.
    """
    correct_positions = [
        idx for idx, alt in enumerate(item.alternatives) if alt.is_correct
    ]
    if len(correct_positions) != 1:
        raise DataIntegrityError(row_label, item.id, len(correct_positions))
    return index_to_letter(correct_positions[0])


def build_answer_key(rows: Sequence[VariantRow]) -> AnswerKey:
    """
    Build the answer key for a set of compiled rows.

    Only multiple-choice items are keyed; true/false and open-response items
    contribute no entry.

    Args:
        rows: Compiled rows.

    Returns:
        AnswerKey whose row labels equal the labels of ``rows``.

    Raises:
        DataIntegrityError: If any multiple-choice item in any row does not
            have exactly one correct alternative.
    """
    key: dict[str, dict[int, str]] = {}
    for row in rows:
        answers: dict[int, str] = {}
        for item in row.items:
            if isinstance(item, MultipleChoiceItem):
                answers[item.order] = correct_letter(row.label, item)
        key[row.label] = answers

    logger.debug("Built answer key for rows %s", sorted(key))
    return AnswerKey(rows=key)


def answer_key_table(answer_key: AnswerKey) -> pd.DataFrame:
    """
    Tabulate a key: one line per question number, one column per row.

    Questions a row has no entry for are filled with MISSING_KEY_CELL.
    """
    data = {
        f"Row {label}": [
            answer_key.letter(label, q) or MISSING_KEY_CELL
            for q in answer_key.question_numbers
        ]
        for label in answer_key.row_labels
    }
    df = pd.DataFrame(data, index=answer_key.question_numbers)
    df.index.name = "question"
    return df


def write_answer_key_csv(answer_key: AnswerKey, path: str | Path) -> None:
    answer_key_table(answer_key).to_csv(path)
