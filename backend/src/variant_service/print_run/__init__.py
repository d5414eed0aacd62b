"""
Print-run orchestration: compile rows, derive the key, allocate a roster,
and persist the result through the storage boundary.
"""

from variant_service.print_run.config import (
    PrintConfig,
    apply_overrides,
    get_preset,
    load_print_config,
)
from variant_service.print_run.data_models import AnswerSheetRun, PrintRun
from variant_service.print_run.pipeline import (
    confirm_answer_sheets,
    find_key_drift,
    prepare_answer_sheets,
    prepare_print_run,
    rebuild_row_for_sheet,
)

__all__ = [
    "AnswerSheetRun",
    "PrintConfig",
    "PrintRun",
    "apply_overrides",
    "confirm_answer_sheets",
    "find_key_drift",
    "get_preset",
    "load_print_config",
    "prepare_answer_sheets",
    "prepare_print_run",
    "rebuild_row_for_sheet",
]
