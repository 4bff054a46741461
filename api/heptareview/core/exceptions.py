"""
Custom exceptions for the application.
"""


class HeptaReviewException(Exception):
    """Base exception for all HeptaReview application exceptions."""
    pass


class ValidationError(HeptaReviewException):
    """Raised when validation fails."""
    pass


class NotFoundError(HeptaReviewException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(HeptaReviewException):
    """Raised when there's a conflict (e.g., duplicate entry)."""
    pass
