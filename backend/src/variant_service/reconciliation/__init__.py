"""
Reconciliation of on-paper answers with canonical question identity.

Bubble detection on scanned images is not part of this package; it starts
from letters already read off a sheet.
"""

from variant_service.reconciliation.data_models import ItemResponse
from variant_service.reconciliation.reconciler import (
    letters_for_responses,
    reconcile_responses,
    score_responses,
)

__all__ = [
    "ItemResponse",
    "letters_for_responses",
    "reconcile_responses",
    "score_responses",
]
