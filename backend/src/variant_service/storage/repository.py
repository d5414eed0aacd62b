"""
Persistence boundary for row assignments and frozen answer keys.

Assignments are unique on (evaluation_id, student_id). Saving an identical
record again is a no-op, so a double-submitted print action does not
create duplicates. Saving a different row or seed for the same student is
a conflict unless the caller explicitly replaces it.

Frozen answer keys follow the same rule on (evaluation_id, seed): a key
that changed since it was frozen is never overwritten silently.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence

from variant_service.allocation.data_models import StudentRowAssignment
from variant_service.core.exceptions import (
    AnswerKeyConflictError,
    AnswerKeyNotFoundError,
    AssignmentNotFoundError,
    DuplicateAssignmentError,
)
from variant_service.storage.data_models import FrozenAnswerKey

logger = logging.getLogger(__name__)


class AssignmentRepository(ABC):
    @abstractmethod
    def save_assignments(
        self,
        assignments: Sequence[StudentRowAssignment],
        replace: bool = False,
    ) -> int:
        """Persist assignments. Returns the number of records written."""

    @abstractmethod
    def get_assignment(
        self, evaluation_id: str, student_id: str
    ) -> StudentRowAssignment:
        """Raises AssignmentNotFoundError if absent."""

    @abstractmethod
    def list_assignments(
        self, evaluation_id: str
    ) -> list[StudentRowAssignment]: ...

    @abstractmethod
    def save_answer_key(
        self, frozen: FrozenAnswerKey, replace: bool = False
    ) -> FrozenAnswerKey:
        """Freeze a key and return the stored one.

        Saving the same key again keeps the first record. A different key
        for the same (evaluation_id, seed) raises AnswerKeyConflictError
        unless ``replace`` is set.
        """

    @abstractmethod
    def get_answer_key(
        self, evaluation_id: str, seed: str | None = None
    ) -> FrozenAnswerKey:
        """Frozen key for a seed, or the latest one when seed is None.

        Raises AnswerKeyNotFoundError if absent.
        """


class InMemoryAssignmentRepository(AssignmentRepository):
    def __init__(self) -> None:
        self._assignments: dict[tuple[str, str], StudentRowAssignment] = {}
        self._answer_keys: dict[tuple[str, str], FrozenAnswerKey] = {}
        self._latest_seed: dict[str, str] = {}
        self._lock = threading.Lock()

    def save_assignments(
        self,
        assignments: Sequence[StudentRowAssignment],
        replace: bool = False,
    ) -> int:
        with self._lock:
            # Check the whole batch before writing any of it
            to_write: dict[tuple[str, str], StudentRowAssignment] = {}
            for assignment in assignments:
                key = (assignment.evaluation_id, assignment.student_id)
                existing = to_write.get(key, self._assignments.get(key))
                if existing == assignment:
                    continue
                if existing is not None and not replace:
                    raise DuplicateAssignmentError(*key)
                to_write[key] = assignment

            self._assignments.update(to_write)

        logger.info(
            "Saved %d of %d assignments", len(to_write), len(assignments)
        )
        return len(to_write)

    def get_assignment(
        self, evaluation_id: str, student_id: str
    ) -> StudentRowAssignment:
        with self._lock:
            assignment = self._assignments.get((evaluation_id, student_id))
        if assignment is None:
            raise AssignmentNotFoundError(evaluation_id, student_id)
        return assignment

    def list_assignments(
        self, evaluation_id: str
    ) -> list[StudentRowAssignment]:
        with self._lock:
            return [
                a
                for (eval_id, _), a in self._assignments.items()
                if eval_id == evaluation_id
            ]

    def save_answer_key(
        self, frozen: FrozenAnswerKey, replace: bool = False
    ) -> FrozenAnswerKey:
        key = (frozen.evaluation_id, frozen.seed)
        with self._lock:
            existing = self._answer_keys.get(key)
            if existing is not None and not replace:
                if existing.answer_key != frozen.answer_key:
                    raise AnswerKeyConflictError(*key)
                frozen = existing
            self._answer_keys[key] = frozen
            self._latest_seed[frozen.evaluation_id] = frozen.seed
        return frozen

    def get_answer_key(
        self, evaluation_id: str, seed: str | None = None
    ) -> FrozenAnswerKey:
        with self._lock:
            if seed is None:
                seed = self._latest_seed.get(evaluation_id)
            frozen = (
                self._answer_keys.get((evaluation_id, seed))
                if seed is not None
                else None
            )
        if frozen is None:
            raise AnswerKeyNotFoundError(evaluation_id)
        return frozen
