# =============================================================================
# Record Reconciler
# =============================================================================
"""
Matching and plan computation shared by the restore, randomize and cleanup
drivers. Everything in this package is pure: no API calls, no printing.
"""

from cmsops.reconcile.batch import BatchFailure, BatchResult
from cmsops.reconcile.models import Collection, CollectionRecord, FieldDescriptor

__all__ = [
    "BatchFailure",
    "BatchResult",
    "Collection",
    "CollectionRecord",
    "FieldDescriptor",
]
