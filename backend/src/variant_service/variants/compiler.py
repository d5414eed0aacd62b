"""
Variant compiler: derive N printable rows from one canonical evaluation.

Each row is keyed by (seed, label):
- question order is shuffled with seed "{seed}-{label}"
- the alternatives of each choice item are shuffled with seed
  "{seed}-{label}-{item.id}"

Rows are independent of each other yet each one is reproducible from the
same inputs. Canonical data is deep-copied and never mutated.
"""

import logging

from variant_service.core.data_models import (
    ContentBlock,
    Evaluation,
    Item,
    MultipleChoiceItem,
    TrueFalseItem,
)
from variant_service.core.utils import row_labels
from variant_service.core.validation import (
    validate_evaluation,
    validate_row_count,
)
from variant_service.permutation import shuffle
from variant_service.variants.data_models import VariantRow

logger = logging.getLogger(__name__)


def question_seed(seed: str, label: str) -> str:
    return f"{seed}-{label}"


def alternative_seed(seed: str, label: str, item_id: str) -> str:
    return f"{seed}-{label}-{item_id}"


def _first_block_with_items(block_items: list[list[Item]]) -> int | None:
    """Index of the first block that holds any item. Not assumed to be 0."""
    for idx, items in enumerate(block_items):
        if items:
            return idx
    return None


def _arrange_alternatives(
    item: Item, seed: str, label: str, randomize: bool
) -> Item:
    if not isinstance(item, MultipleChoiceItem | TrueFalseItem):
        return item

    alternatives = item.ordered_alternatives
    if not randomize:
        return item.model_copy(update={"alternatives": alternatives})

    shuffled = shuffle(alternatives, alternative_seed(seed, label, item.id))
    renumbered = [
        alt.model_copy(update={"order": position})
        for position, alt in enumerate(shuffled, start=1)
    ]
    return item.model_copy(update={"alternatives": renumbered})


def compile_row(evaluation: Evaluation, seed: str, label: str) -> VariantRow:
    """
    Compile a single row without validating the evaluation.

    Grading uses this to rebuild the exact row a student received from the
    stored (seed, label). ``compile_variants`` is the validated entry point
    for printing.

    Args:
        evaluation: Canonical evaluation.
        seed: Base seed.
        label: Row label.

    Returns:
        The derived VariantRow.
    """
    working = evaluation.model_copy(deep=True)
    blocks = working.ordered_blocks
    block_items: list[list[Item]] = [block.ordered_items for block in blocks]

    if working.randomize_questions:
        flat = [item for items in block_items for item in items]
        target = _first_block_with_items(block_items)
        if target is not None:
            shuffled = shuffle(flat, question_seed(seed, label))
            renumbered = [
                item.model_copy(update={"order": position})
                for position, item in enumerate(shuffled, start=1)
            ]
            # One continuous numbered sequence, held by a single block
            block_items = [
                renumbered if idx == target else []
                for idx in range(len(blocks))
            ]

    block_items = [
        [
            _arrange_alternatives(
                item, seed, label, working.randomize_alternatives
            )
            for item in items
        ]
        for items in block_items
    ]

    derived_blocks: list[ContentBlock] = [
        block.model_copy(update={"items": items})
        for block, items in zip(blocks, block_items, strict=True)
    ]

    return VariantRow(
        label=label,
        seed=seed,
        evaluation_id=evaluation.id,
        blocks=derived_blocks,
    )


def compile_variants(
    evaluation: Evaluation, seed: str, row_count: int
) -> list[VariantRow]:
    """
    Compile ``row_count`` rows labelled 'A', 'B', ... from an evaluation.

    Args:
        evaluation: Canonical evaluation.
        seed: Base seed, conventionally the evaluation id.
        row_count: Number of rows, in [1, 26].

    Returns:
        List of VariantRow in label order.

    Raises:
        ValidationError: If row_count is out of range or the evaluation
            cannot be printed (no items, bad correct-answer marking).
    """
    validate_row_count(row_count)
    validate_evaluation(evaluation)

    rows = [
        compile_row(evaluation, seed, label)
        for label in row_labels(row_count)
    ]
    logger.debug(
        "Compiled %d rows for evaluation %s (questions=%s, alternatives=%s)",
        len(rows),
        evaluation.id,
        evaluation.randomize_questions,
        evaluation.randomize_alternatives,
    )
    return rows
