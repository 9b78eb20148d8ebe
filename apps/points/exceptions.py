"""Domain-specific exceptions for points evaluation."""


class PointsServiceError(Exception):
    """Base exception for points services."""
    pass


class PointsEvaluationError(PointsServiceError):
    """Raised when a rule cannot be applied (bad config, bad amount)."""
    pass


class EvaluatorConfigurationError(PointsServiceError):
    """Raised when POINTS_EVALUATOR_CLASS does not name a PointsEvaluator."""
    pass
