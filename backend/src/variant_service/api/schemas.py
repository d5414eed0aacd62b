from datetime import datetime

from pydantic import BaseModel, Field

from variant_service.allocation.data_models import StudentRowAssignment
from variant_service.answer_key.data_models import AnswerKey
from variant_service.core.data_models import Evaluation, Student
from variant_service.reconciliation.data_models import ItemResponse
from variant_service.variants.data_models import VariantRow

# --- Request schemas ---


class VariantsRequest(BaseModel):
    evaluation: Evaluation
    seed: str
    row_count: int = Field(default=1, ge=1)


class AnswerSheetsRequest(BaseModel):
    evaluation: Evaluation
    students: list[Student]
    seed: str
    row_count: int = Field(default=2, ge=1)
    replace: bool = False


class ReconcileRequest(BaseModel):
    evaluation: Evaluation
    scan_payload: str
    selections: dict[int, str]


# --- Response schemas ---


class AssignmentSchema(BaseModel):
    student_id: str
    evaluation_id: str
    row_label: str
    seed: str
    scan_payload: str

    @classmethod
    def from_domain(cls, assignment: StudentRowAssignment) -> "AssignmentSchema":
        return cls(
            student_id=assignment.student_id,
            evaluation_id=assignment.evaluation_id,
            row_label=assignment.row_label,
            seed=assignment.seed,
            scan_payload=assignment.scan_payload,
        )


class VariantsResponse(BaseModel):
    evaluation_id: str
    seed: str
    rows: list[VariantRow]
    answer_key: AnswerKey
    total_score: float


class AnswerSheetsResponse(BaseModel):
    evaluation_id: str
    seed: str
    rows: list[VariantRow]
    answer_key: AnswerKey
    assignments: list[AssignmentSchema]
    frozen_at: datetime


class AssignmentListResponse(BaseModel):
    evaluation_id: str
    assignments: list[AssignmentSchema]


class ReconcileResponse(BaseModel):
    evaluation_id: str
    student_id: str
    row_label: str
    responses: list[ItemResponse]
    score: float
    total_score: float


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
