"""
Domain-specific exceptions for purchases services.

Each exception carries the error ``code`` reported to callers. They never
leave the service layer: the public service functions convert them into
``{'success': False, 'error': ..., 'error_code': ...}`` results.
"""


class PurchaseServiceError(Exception):
    """Base exception for purchases services."""

    code = 'unexpected_error'
    default_message = 'An unexpected error occurred'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class PurchaseValidationError(PurchaseServiceError):
    """Raised when purchase input is malformed. Nothing was written."""

    code = 'validation_error'
    default_message = 'Invalid purchase data'


class BranchNotFoundError(PurchaseServiceError):
    """Raised when the purchase branch does not exist."""

    code = 'not_found'
    default_message = 'Branch not found'


class PurchaseNotFoundError(PurchaseServiceError):
    """Raised when a purchase does not exist."""

    code = 'not_found'
    default_message = 'Purchase not found'


class PointsCalculationError(PurchaseServiceError):
    """Raised when the points evaluator fails. No purchase was written."""

    code = 'dependency_error'
    default_message = 'Failed to calculate points'


class PurchasePersistenceError(PurchaseServiceError):
    """Raised when the purchase header cannot be inserted."""

    code = 'persistence_error'
    default_message = 'Failed to create purchase'


class PurchaseItemsPersistenceError(PurchasePersistenceError):
    """
    Raised when line items cannot be inserted after the header.

    Unless the insert ran inside a transaction, the header stays committed
    without items; ``purchase_id`` identifies it.
    """

    default_message = 'Failed to create purchase items'

    def __init__(self, message=None, purchase_id=None):
        super().__init__(message)
        self.purchase_id = purchase_id
