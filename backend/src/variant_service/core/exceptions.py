"""
Exception hierarchy for the variant service.

The core never catches these; they propagate to the caller (the API layer
or a script), which owns the user-facing message.
"""


class VariantServiceError(Exception):
    """Base class for all variant service errors."""


class ValidationError(VariantServiceError):
    """Raised when input is malformed and no document may be produced."""


class ScanPayloadError(ValidationError):
    """Raised when a scan payload is malformed or belongs elsewhere."""


class DataIntegrityError(VariantServiceError):
    """Raised when an item does not have exactly one correct alternative."""

    def __init__(
        self, row_label: str, item_id: str, n_correct: int
    ) -> None:
        self.row_label = row_label
        self.item_id = item_id
        self.n_correct = n_correct
        super().__init__(
            f"Row {row_label}: item {item_id} has {n_correct} correct "
            "alternatives, expected exactly 1"
        )


class DuplicateAssignmentError(VariantServiceError):
    def __init__(self, evaluation_id: str, student_id: str) -> None:
        self.evaluation_id = evaluation_id
        self.student_id = student_id
        super().__init__(
            f"Student {student_id} already has a different row assigned "
            f"for evaluation {evaluation_id}"
        )


class AssignmentNotFoundError(VariantServiceError):
    def __init__(self, evaluation_id: str, student_id: str) -> None:
        self.evaluation_id = evaluation_id
        self.student_id = student_id
        super().__init__(
            f"No row assignment for student {student_id} "
            f"in evaluation {evaluation_id}"
        )


class AnswerKeyNotFoundError(VariantServiceError):
    def __init__(self, evaluation_id: str) -> None:
        self.evaluation_id = evaluation_id
        super().__init__(f"No frozen answer key for evaluation {evaluation_id}")


class AnswerKeyConflictError(VariantServiceError):
    def __init__(self, evaluation_id: str, seed: str) -> None:
        self.evaluation_id = evaluation_id
        self.seed = seed
        super().__init__(
            f"A different answer key is already frozen for evaluation "
            f"{evaluation_id} with seed '{seed}'"
        )
