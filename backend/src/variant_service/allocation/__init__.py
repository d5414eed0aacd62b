"""
Row allocation of a roster and scan payloads for answer sheets.
"""

from variant_service.allocation.allocator import (
    allocate,
    assignments_to_frame,
    group_by_course,
    load_roster_csv,
)
from variant_service.allocation.data_models import (
    ScanPayload,
    StudentRowAssignment,
)

__all__ = [
    "ScanPayload",
    "StudentRowAssignment",
    "allocate",
    "assignments_to_frame",
    "group_by_course",
    "load_roster_csv",
]
