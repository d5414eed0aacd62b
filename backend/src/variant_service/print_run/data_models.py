from pydantic import BaseModel, ConfigDict

from variant_service.allocation.data_models import StudentRowAssignment
from variant_service.answer_key.data_models import AnswerKey
from variant_service.variants.data_models import VariantRow


class PrintRun(BaseModel):
    """Everything the printable renderer needs for one print action."""

    model_config = ConfigDict(frozen=True)

    evaluation_id: str
    seed: str
    rows: list[VariantRow]
    answer_key: AnswerKey
    total_score: float

    @property
    def row_count(self) -> int:
        return len(self.rows)


class AnswerSheetRun(PrintRun):
    """A print run with one answer sheet per student."""

    assignments: list[StudentRowAssignment]
