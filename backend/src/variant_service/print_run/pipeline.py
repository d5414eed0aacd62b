"""
Orchestration of a print action: compile, key, allocate, then persist.

Everything is computed in memory before anything is written, so a
validation or integrity error never leaves a half-saved print run.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from variant_service.allocation import ScanPayload, allocate
from variant_service.answer_key import build_answer_key
from variant_service.core.data_models import Evaluation, Student
from variant_service.core.exceptions import (
    AnswerKeyConflictError,
    AnswerKeyNotFoundError,
    ScanPayloadError,
)
from variant_service.print_run.data_models import AnswerSheetRun, PrintRun
from variant_service.storage import AssignmentRepository, FrozenAnswerKey
from variant_service.variants import VariantRow, compile_row, compile_variants

logger = logging.getLogger(__name__)


def prepare_print_run(
    evaluation: Evaluation, seed: str, row_count: int
) -> PrintRun:
    rows = compile_variants(evaluation, seed, row_count)
    return PrintRun(
        evaluation_id=evaluation.id,
        seed=seed,
        rows=rows,
        answer_key=build_answer_key(rows),
        total_score=evaluation.total_score,
    )


def prepare_answer_sheets(
    evaluation: Evaluation,
    students: Sequence[Student],
    seed: str,
    row_count: int,
) -> AnswerSheetRun:
    run = prepare_print_run(evaluation, seed, row_count)
    assignments = allocate(students, row_count, seed, evaluation.id)
    return AnswerSheetRun(
        evaluation_id=run.evaluation_id,
        seed=run.seed,
        rows=run.rows,
        answer_key=run.answer_key,
        total_score=run.total_score,
        assignments=assignments,
    )


def _check_frozen_key(
    run: AnswerSheetRun, repository: AssignmentRepository
) -> None:
    try:
        existing = repository.get_answer_key(run.evaluation_id, run.seed)
    except AnswerKeyNotFoundError:
        return
    if existing.answer_key != run.answer_key:
        raise AnswerKeyConflictError(run.evaluation_id, run.seed)


def confirm_answer_sheets(
    run: AnswerSheetRun,
    repository: AssignmentRepository,
    replace: bool = False,
) -> FrozenAnswerKey:
    """
    Persist the assignments and freeze the answer key of a run.

    Args:
        run: A prepared answer-sheet run.
        repository: Persistence boundary.
        replace: Overwrite conflicting assignments and a conflicting frozen
            key from an earlier run.

    Returns:
        The frozen answer key that grading will read.

    Raises:
        AnswerKeyConflictError: If a different key is already frozen for
            this (evaluation, seed) and ``replace`` is False. Nothing is
            written in that case.
        DuplicateAssignmentError: If a student already holds a different
            row for this evaluation and ``replace`` is False.
    """
    if not replace:
        _check_frozen_key(run, repository)

    written = repository.save_assignments(run.assignments, replace=replace)
    frozen = repository.save_answer_key(
        FrozenAnswerKey(
            evaluation_id=run.evaluation_id,
            seed=run.seed,
            row_count=run.row_count,
            answer_key=run.answer_key,
            created_at=datetime.now(UTC),
        ),
        replace=replace,
    )
    logger.info(
        "Confirmed print run for evaluation %s: %d rows, %d new assignments",
        run.evaluation_id,
        run.row_count,
        written,
    )
    return frozen


def rebuild_row_for_sheet(
    evaluation: Evaluation,
    payload: ScanPayload,
    repository: AssignmentRepository,
) -> VariantRow:
    """
    Rebuild the exact row printed on a student's sheet.

    The seed comes from the stored assignment, not from the sheet.

    Raises:
        ScanPayloadError: If the sheet belongs to another evaluation or its
            row disagrees with the stored assignment.
        AssignmentNotFoundError: If the student was never allocated.
    """
    payload.require_evaluation(evaluation.id)
    assignment = repository.get_assignment(
        payload.evaluation_id, payload.student_id
    )
    if assignment.row_label != payload.row_label:
        raise ScanPayloadError(
            f"Sheet shows row {payload.row_label} but student "
            f"{payload.student_id} was assigned row {assignment.row_label}"
        )
    return compile_row(evaluation, assignment.seed, assignment.row_label)


def find_key_drift(row: VariantRow, frozen: FrozenAnswerKey) -> list[int]:
    """
    Question numbers whose live key differs from the key frozen at print.

    A non-empty result means canonical data was edited after the sheets
    were printed; grading against the live row would disagree with what
    the student saw on paper.
    """
    live = build_answer_key([row]).rows[row.label]
    printed = frozen.answer_key.rows.get(row.label, {})
    return sorted(
        q for q in set(live) | set(printed) if live.get(q) != printed.get(q)
    )
