"""
Mapping between on-paper answers and canonical alternative identity.

A student marks letters against their row's printed order. Grading needs
the canonical alternative id instead, which is only recoverable through
the same row the student received.
"""

from collections.abc import Mapping

from variant_service.core.data_models import OpenResponseItem
from variant_service.core.exceptions import ValidationError
from variant_service.core.utils import alternative_letter, letter_to_index
from variant_service.reconciliation.data_models import ItemResponse
from variant_service.variants.data_models import VariantRow


def reconcile_responses(
    row: VariantRow, selections: Mapping[int, str]
) -> list[ItemResponse]:
    """
    Translate marked letters into canonical alternative ids.

    Args:
        row: The row the student sat, rebuilt from (seed, label).
        selections: Question number (as printed) -> marked letter, either
            case.

    Returns:
        One ItemResponse per answerable item, in printed order.

    Raises:
        ValidationError: If a question number does not exist in the row,
            an answerable question is unanswered, or a letter does not
            name one of the question's alternatives.
    """
    answerable = [
        item for item in row.items if not isinstance(item, OpenResponseItem)
    ]
    known = {item.order for item in answerable}
    unknown = sorted(set(selections) - known)
    if unknown:
        raise ValidationError(
            f"Row {row.label} has no answerable questions {unknown}"
        )

    responses: list[ItemResponse] = []
    for item in answerable:
        letter = selections.get(item.order)
        if not letter:
            raise ValidationError(
                f"Missing answer for question {item.order}"
            )
        try:
            position = letter_to_index(letter)
        except ValueError as e:
            raise ValidationError(
                f"Invalid answer '{letter}' for question {item.order}"
            ) from e
        if position >= len(item.alternatives):
            raise ValidationError(
                f"Invalid answer '{letter}' for question {item.order}"
            )
        responses.append(
            ItemResponse(
                item_id=item.id,
                selected_alternative_id=item.alternatives[position].id,
            )
        )

    return responses


def letters_for_responses(
    row: VariantRow, responses: Mapping[str, str]
) -> dict[int, str]:
    """
    Inverse of ``reconcile_responses``, used to prefill manual entry.

    Args:
        row: The row the student sat.
        responses: item id -> selected alternative id.

    Returns:
        Question number -> lowercase letter. Ids that do not appear in the
        row are skipped.
    """
    letters: dict[int, str] = {}
    for item in row.items:
        if isinstance(item, OpenResponseItem) or item.id not in responses:
            continue
        selected = responses[item.id]
        for position, alt in enumerate(item.alternatives):
            if alt.id == selected:
                letters[item.order] = alternative_letter(position)
                break
    return letters


def score_responses(row: VariantRow, responses: list[ItemResponse]) -> float:
    """Sum of scores of items answered with their correct alternative."""
    selected = {r.item_id: r.selected_alternative_id for r in responses}
    total = 0.0
    for item in row.items:
        if isinstance(item, OpenResponseItem):
            continue
        correct_ids = {alt.id for alt in item.correct_alternatives}
        if selected.get(item.id) in correct_ids:
            total += item.score
    return total
