"""
Purchases app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    PurchasesServiceError,
    PurchaseNotFoundError,
    BatchNotFoundError,
    InvalidQuantityError,
    InvalidBatchError,
    ResourceUnavailableError,
    InsufficientStockError,
    QuotaExceededError,
    InsufficientCreditError,
    PurchaseAlreadyProcessedError,
    InvalidApprovedQuantityError,
    InvalidReviewActionError,
    NotPurchaseOwnerError,
    ReturnNotAllowedError,
)

from .quota import (
    committed_quantity,
    quantity_in_cart,
    compute_max_quantity,
    max_quantity_allowed,
    validate_add_to_cart,
    purchase_stats,
)

from .purchase_creation import (
    generate_batch_id,
    create_purchase,
    create_batch_purchase,
)

from .purchase_review import (
    review_purchase,
    review_batch,
)

from .returns import (
    return_purchase,
    mark_returned,
    unmark_returned,
)

from .queries import (
    MIXED_STATUS,
    list_team_purchases,
    list_purchases,
    get_purchase,
    group_into_batches,
    get_batch,
    purchase_summary,
)


__all__ = [
    # Exceptions
    'PurchasesServiceError',
    'PurchaseNotFoundError',
    'BatchNotFoundError',
    'InvalidQuantityError',
    'InvalidBatchError',
    'ResourceUnavailableError',
    'InsufficientStockError',
    'QuotaExceededError',
    'InsufficientCreditError',
    'PurchaseAlreadyProcessedError',
    'InvalidApprovedQuantityError',
    'InvalidReviewActionError',
    'NotPurchaseOwnerError',
    'ReturnNotAllowedError',

    # Quota
    'committed_quantity',
    'quantity_in_cart',
    'compute_max_quantity',
    'max_quantity_allowed',
    'validate_add_to_cart',
    'purchase_stats',

    # Creation
    'generate_batch_id',
    'create_purchase',
    'create_batch_purchase',

    # Review
    'review_purchase',
    'review_batch',

    # Returns
    'return_purchase',
    'mark_returned',
    'unmark_returned',

    # Queries
    'MIXED_STATUS',
    'list_team_purchases',
    'list_purchases',
    'get_purchase',
    'group_into_batches',
    'get_batch',
    'purchase_summary',
]
