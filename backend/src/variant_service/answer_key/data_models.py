from pydantic import BaseModel, ConfigDict


class AnswerKey(BaseModel):
    """
    Per-row mapping from question number to the letter of the correct
    alternative.

    Attributes:
        rows: row label -> (derived question number -> letter 'A', 'B', ...).
            Every compiled row has an entry, possibly empty.
    """

    model_config = ConfigDict(frozen=True)

    rows: dict[str, dict[int, str]]

    @property
    def row_labels(self) -> list[str]:
        return sorted(self.rows)

    @property
    def question_numbers(self) -> list[int]:
        """Union of keyed question numbers across all rows."""
        return sorted({q for answers in self.rows.values() for q in answers})

    def letter(self, row_label: str, question_number: int) -> str | None:
        return self.rows.get(row_label, {}).get(question_number)
