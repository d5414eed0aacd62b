from variant_service.storage.data_models import FrozenAnswerKey
from variant_service.storage.repository import (
    AssignmentRepository,
    InMemoryAssignmentRepository,
)

__all__ = [
    "AssignmentRepository",
    "FrozenAnswerKey",
    "InMemoryAssignmentRepository",
]
