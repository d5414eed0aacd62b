"""
Precondition checks run before any variant or document is produced.

These never repair data. A violated precondition raises ValidationError and
the caller decides how to tell the user (e.g. "finish marking a correct
answer before printing").
"""

from collections import Counter

from variant_service.core.constants import MAX_ROWS, MIN_ROWS
from variant_service.core.data_models import (
    Evaluation,
    MultipleChoiceItem,
    OpenResponseItem,
)
from variant_service.core.exceptions import ValidationError


def validate_row_count(row_count: int) -> None:
    if not (MIN_ROWS <= row_count <= MAX_ROWS):
        raise ValidationError(
            f"row_count must be in [{MIN_ROWS}, {MAX_ROWS}], got {row_count}"
        )


def validate_evaluation(evaluation: Evaluation) -> None:
    """
    Check that an evaluation can be compiled into rows and keyed.

    Raises:
        ValidationError: If the evaluation has no items, repeats an item
            order, repeats an alternative id within an item, or has a
            multiple-choice item without exactly one correct alternative.
    """
    items = evaluation.items
    if not items:
        raise ValidationError(f"Evaluation {evaluation.id} has no items")

    order_counts = Counter(item.order for item in items)
    repeated = sorted(order for order, n in order_counts.items() if n > 1)
    if repeated:
        raise ValidationError(
            f"Evaluation {evaluation.id} repeats item orders {repeated}"
        )

    for item in items:
        if isinstance(item, OpenResponseItem):
            continue

        alt_ids = [alt.id for alt in item.alternatives]
        if len(set(alt_ids)) != len(alt_ids):
            raise ValidationError(
                f"Item {item.id} (question {item.order}) repeats alternative ids"
            )

        if isinstance(item, MultipleChoiceItem):
            n_correct = len(item.correct_alternatives)
            if n_correct != 1:
                raise ValidationError(
                    f"Item {item.id} (question {item.order}) has {n_correct} "
                    "correct alternatives, expected exactly 1"
                )
