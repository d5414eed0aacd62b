from fastapi import APIRouter, Depends

from variant_service.allocation import ScanPayload
from variant_service.api.config import ApiSettings
from variant_service.api.dependencies import (
    get_app_settings,
    get_repository,
    get_version,
)
from variant_service.api.errors import DataSizeExceededError
from variant_service.api.schemas import (
    AnswerSheetsRequest,
    AnswerSheetsResponse,
    AssignmentListResponse,
    AssignmentSchema,
    HealthResponse,
    ReconcileRequest,
    ReconcileResponse,
    VariantsRequest,
    VariantsResponse,
)
from variant_service.core.data_models import Evaluation
from variant_service.core.exceptions import ValidationError
from variant_service.print_run import (
    confirm_answer_sheets,
    find_key_drift,
    prepare_answer_sheets,
    prepare_print_run,
    rebuild_row_for_sheet,
)
from variant_service.reconciliation import reconcile_responses, score_responses
from variant_service.storage import AssignmentRepository, FrozenAnswerKey

router = APIRouter(prefix="/api/v1")


def _check_limits(
    settings: ApiSettings,
    evaluation: Evaluation,
    seed: str,
    row_count: int,
    n_students: int = 0,
) -> None:
    if len(seed.strip()) < settings.min_seed_length:
        raise ValidationError(
            f"seed must have at least {settings.min_seed_length} characters"
        )
    if row_count > settings.max_rows:
        raise DataSizeExceededError(
            f"row_count={row_count} exceeds max={settings.max_rows}"
        )
    n_items = len(evaluation.items)
    if n_items > settings.max_items:
        raise DataSizeExceededError(
            f"n_items={n_items} exceeds max={settings.max_items}"
        )
    if n_students > settings.max_students:
        raise DataSizeExceededError(
            f"n_students={n_students} exceeds max={settings.max_students}"
        )


@router.post("/variants")
async def compile_variants(
    request: VariantsRequest,
    settings: ApiSettings = Depends(get_app_settings),
) -> VariantsResponse:
    _check_limits(settings, request.evaluation, request.seed, request.row_count)
    run = prepare_print_run(request.evaluation, request.seed, request.row_count)
    return VariantsResponse(
        evaluation_id=run.evaluation_id,
        seed=run.seed,
        rows=run.rows,
        answer_key=run.answer_key,
        total_score=run.total_score,
    )


@router.post("/answer-sheets", status_code=201)
async def create_answer_sheets(
    request: AnswerSheetsRequest,
    settings: ApiSettings = Depends(get_app_settings),
    repository: AssignmentRepository = Depends(get_repository),
) -> AnswerSheetsResponse:
    _check_limits(
        settings,
        request.evaluation,
        request.seed,
        request.row_count,
        n_students=len(request.students),
    )
    run = prepare_answer_sheets(
        request.evaluation, request.students, request.seed, request.row_count
    )
    frozen = confirm_answer_sheets(run, repository, replace=request.replace)
    return AnswerSheetsResponse(
        evaluation_id=run.evaluation_id,
        seed=run.seed,
        rows=run.rows,
        answer_key=run.answer_key,
        assignments=[AssignmentSchema.from_domain(a) for a in run.assignments],
        frozen_at=frozen.created_at,
    )


@router.get("/evaluations/{evaluation_id}/assignments")
async def list_assignments(
    evaluation_id: str,
    repository: AssignmentRepository = Depends(get_repository),
) -> AssignmentListResponse:
    assignments = repository.list_assignments(evaluation_id)
    return AssignmentListResponse(
        evaluation_id=evaluation_id,
        assignments=[AssignmentSchema.from_domain(a) for a in assignments],
    )


@router.get("/evaluations/{evaluation_id}/answer-key")
async def get_answer_key(
    evaluation_id: str,
    seed: str | None = None,
    repository: AssignmentRepository = Depends(get_repository),
) -> FrozenAnswerKey:
    return repository.get_answer_key(evaluation_id, seed)


@router.post("/responses/reconcile")
async def reconcile(
    request: ReconcileRequest,
    repository: AssignmentRepository = Depends(get_repository),
) -> ReconcileResponse:
    payload = ScanPayload.parse(request.scan_payload)
    row = rebuild_row_for_sheet(request.evaluation, payload, repository)
    frozen = repository.get_answer_key(payload.evaluation_id, row.seed)
    drift = find_key_drift(row, frozen)
    if drift:
        raise ValidationError(
            f"Questions {drift} changed after row {row.label} was printed; "
            "grade against the frozen answer key"
        )

    responses = reconcile_responses(row, request.selections)
    return ReconcileResponse(
        evaluation_id=payload.evaluation_id,
        student_id=payload.student_id,
        row_label=row.label,
        responses=responses,
        score=score_responses(row, responses),
        total_score=request.evaluation.total_score,
    )


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)
