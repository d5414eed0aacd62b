"""
Canonical data model of an evaluation.

This module defines:
- Alternative: one option of a choice item
- Item: a tagged union of MultipleChoiceItem, TrueFalseItem and
  OpenResponseItem, each carrying only its own valid fields
- ContentBlock / Evaluation: the authored aggregate
- Student: a roster entry used for row allocation

Canonical records are frozen. Derived variants are built with
``model_copy`` and never write back to canonical data.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Alternative(BaseModel):
    """
    One option of a multiple-choice or true/false item.

    Attributes:
        id: Stable identifier, never changed by shuffling.
        text: Option text as printed.
        is_correct: Whether this is the keyed answer.
        order: 1-based position. Canonical on authored data, derived on
            the copies held by a VariantRow.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    text: str
    is_correct: bool = False
    order: int = Field(ge=1)


class _BaseItem(BaseModel):
    # Fields of another item type are rejected, not dropped
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    order: int = Field(ge=1)
    score: float = Field(default=0.0, ge=0.0)


class _ChoiceItem(_BaseItem):
    alternatives: list[Alternative]

    @property
    def ordered_alternatives(self) -> list[Alternative]:
        """Alternatives sorted by their order field."""
        return sorted(self.alternatives, key=lambda alt: alt.order)

    @property
    def correct_alternatives(self) -> list[Alternative]:
        return [alt for alt in self.alternatives if alt.is_correct]


class MultipleChoiceItem(_ChoiceItem):
    item_type: Literal["multiple_choice"] = "multiple_choice"
    alternatives: list[Alternative] = Field(min_length=2, max_length=26)


class TrueFalseItem(_ChoiceItem):
    item_type: Literal["true_false"] = "true_false"
    alternatives: list[Alternative] = Field(min_length=2, max_length=2)


class OpenResponseItem(_BaseItem):
    item_type: Literal["open_response"] = "open_response"


Item = Annotated[
    MultipleChoiceItem | TrueFalseItem | OpenResponseItem,
    Field(discriminator="item_type"),
]
ChoiceItem = MultipleChoiceItem | TrueFalseItem


class ContentBlock(BaseModel):
    """A section of an evaluation holding an ordered list of items."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    order: int = Field(ge=1)
    items: list[Item] = Field(default_factory=list)

    @property
    def ordered_items(self) -> list[Item]:
        return sorted(self.items, key=lambda item: item.order)


class Evaluation(BaseModel):
    """
    A gradable instrument composed of ordered content blocks and items.

    Attributes:
        id: Evaluation identifier, conventionally also the base seed.
        title: Display title.
        blocks: Content blocks in any order; ``order`` decides layout.
        randomize_questions: Shuffle question order per row.
        randomize_alternatives: Shuffle alternative order per row.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    blocks: list[ContentBlock] = Field(default_factory=list)
    randomize_questions: bool = False
    randomize_alternatives: bool = False

    @property
    def ordered_blocks(self) -> list[ContentBlock]:
        return sorted(self.blocks, key=lambda block: block.order)

    @property
    def items(self) -> list[Item]:
        """All items in canonical order: blocks by order, then items by order."""
        return [
            item for block in self.ordered_blocks for item in block.ordered_items
        ]

    @property
    def total_score(self) -> float:
        return sum(item.score for item in self.items)


class Student(BaseModel):
    """A roster entry. Students are allocated to rows per course."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    course_name: str
