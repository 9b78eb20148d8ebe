"""Services for purchase business logic."""

from .exceptions import (
    PurchaseServiceError,
    PurchaseValidationError,
    BranchNotFoundError,
    PurchaseNotFoundError,
    PointsCalculationError,
    PurchasePersistenceError,
    PurchaseItemsPersistenceError,
)
from .purchase_creation import (
    create_purchase,
    validate_purchase_input,
    calculate_total_amount,
    apportion_points,
)
from .purchase_queries import (
    get_beneficiary_purchases,
    get_all_purchases,
    get_purchase_by_id,
)

__all__ = [
    # Exceptions
    'PurchaseServiceError',
    'PurchaseValidationError',
    'BranchNotFoundError',
    'PurchaseNotFoundError',
    'PointsCalculationError',
    'PurchasePersistenceError',
    'PurchaseItemsPersistenceError',
    # Purchase Creation
    'create_purchase',
    'validate_purchase_input',
    'calculate_total_amount',
    'apportion_points',
    # Purchase Queries
    'get_beneficiary_purchases',
    'get_all_purchases',
    'get_purchase_by_id',
]
