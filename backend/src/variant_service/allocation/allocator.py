"""
Distribution of a roster across compiled rows.

Students are grouped by course. Each course is cut into ``row_count``
contiguous slices of near-equal size; earlier slices take the remainder, so
with two rows the first ceil(n/2) students of a course get row 'A'.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
import pandas as pd

from variant_service.allocation.data_models import StudentRowAssignment
from variant_service.core.data_models import Student
from variant_service.core.exceptions import ValidationError
from variant_service.core.utils import row_labels
from variant_service.core.validation import validate_row_count

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = ("student_id", "display_name", "course_name")


def group_by_course(students: Sequence[Student]) -> dict[str, list[Student]]:
    """Group students by course, keeping first-appearance order."""
    groups: dict[str, list[Student]] = {}
    for student in students:
        groups.setdefault(student.course_name, []).append(student)
    return groups


def allocate(
    students: Sequence[Student],
    row_count: int,
    seed: str,
    evaluation_id: str,
) -> list[StudentRowAssignment]:
    """
    Assign every student to exactly one row.

    There is no duplicate guard here: persisting the result twice is the
    storage layer's concern.

    Args:
        students: Roster, in display order.
        row_count: Number of compiled rows, in [1, 26].
        seed: Base seed the rows were compiled from.
        evaluation_id: Evaluation being printed.

    Returns:
        One StudentRowAssignment per student, course by course.

    Raises:
        ValidationError: If row_count is out of range.
        ScanPayloadError: If an id cannot be encoded in a scan payload.
    """
    validate_row_count(row_count)
    labels = row_labels(row_count)

    assignments: list[StudentRowAssignment] = []
    for course, group in group_by_course(students).items():
        slices = np.array_split(np.arange(len(group)), row_count)
        for label, positions in zip(labels, slices, strict=True):
            for position in positions:
                assignments.append(
                    StudentRowAssignment(
                        student_id=group[int(position)].id,
                        evaluation_id=evaluation_id,
                        row_label=label,
                        seed=seed,
                    )
                )
        logger.debug(
            "Course %s: %s",
            course,
            {label: len(s) for label, s in zip(labels, slices, strict=True)},
        )

    return assignments


def load_roster_csv(path: Path) -> list[Student]:
    """Load a roster CSV with columns student_id, display_name, course_name.

    Raises:
        ValidationError: If a column is missing or a student id repeats.
    """
    df = pd.read_csv(path, dtype=str).fillna("")

    missing = [col for col in ROSTER_COLUMNS if col not in df.columns]
    if missing:
        raise ValidationError(f"Roster CSV is missing columns {missing}")

    duplicated = sorted(set(df.loc[df["student_id"].duplicated(), "student_id"]))
    if duplicated:
        raise ValidationError(f"Roster CSV repeats student ids {duplicated}")

    return [
        Student(
            id=record["student_id"],
            display_name=record["display_name"],
            course_name=record["course_name"],
        )
        for record in df.to_dict(orient="records")
    ]


def assignments_to_frame(
    assignments: Sequence[StudentRowAssignment],
) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "student_id": a.student_id,
                "evaluation_id": a.evaluation_id,
                "row_label": a.row_label,
                "seed": a.seed,
                "scan_payload": a.scan_payload,
            }
            for a in assignments
        ],
        columns=[
            "student_id",
            "evaluation_id",
            "row_label",
            "seed",
            "scan_payload",
        ],
    )
