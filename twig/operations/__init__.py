"""Operations module for high-level Twig operations.

This module contains the business logic for:
- Checkout and reset
- Status computation
- Merge algorithms
"""

from twig.operations.checkout import CheckoutEngine
from twig.operations.status import StatusReport, compute_status
from twig.operations.merge import MergeEngine, MergeResult, MergeConflict

__all__ = [
    'CheckoutEngine',
    'StatusReport', 'compute_status',
    'MergeEngine', 'MergeResult', 'MergeConflict',
]
