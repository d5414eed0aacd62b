"""
Data structures for compiled variant rows.

A VariantRow is derived data: it is recomputed from canonical data, a seed
and a row label, and is never canonical truth.
"""

from pydantic import BaseModel, ConfigDict

from variant_service.core.data_models import ContentBlock, Item


class VariantRow(BaseModel):
    """
    One independently randomized, printable copy of an evaluation.

    Attributes:
        label: Row letter, 'A' for the first row.
        seed: Base seed the row was compiled from.
        evaluation_id: Id of the canonical evaluation.
        blocks: Blocks in canonical block order. Items inside carry their
            derived order; alternatives are listed in printed order.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    seed: str
    evaluation_id: str
    blocks: list[ContentBlock]

    @property
    def items(self) -> list[Item]:
        """Items in printed (derived) order."""
        return sorted(
            (item for block in self.blocks for item in block.items),
            key=lambda item: item.order,
        )

    def item_at(self, question_number: int) -> Item | None:
        for item in self.items:
            if item.order == question_number:
                return item
        return None
