"""
Custom exceptions for Reorderly.

Every error raised by the training pipeline carries a machine-readable
code and a details dict so the CLI and the dashboard can show the same
message.
"""

from typing import Any, Dict, Optional


class ReorderlyException(Exception):
    """Base exception for all Reorderly errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class EmptyDatasetException(ReorderlyException):
    """Raised when an operation needs products but none are available."""

    def __init__(self, message: str = "No products available."):
        super().__init__(
            message=message,
            error_code="EMPTY_DATASET",
            details={"hint": "Regenerate products first"},
        )


class TrainingInProgressException(ReorderlyException):
    """Raised when a training cycle is triggered while another one runs."""

    def __init__(self):
        super().__init__(
            message="Training is already in progress",
            error_code="TRAINING_IN_PROGRESS",
        )


class TrainingFailedException(ReorderlyException):
    """Raised when fitting or scoring the model fails."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["error_type"] = type(original_error).__name__
            details["error_message"] = str(original_error)[:500]
        super().__init__(
            message=message,
            error_code="TRAINING_FAILED",
            details=details,
        )


class ModelReleasedException(ReorderlyException):
    """Raised when a released model handle is used again."""

    def __init__(self):
        super().__init__(
            message="Model has been released and can no longer be used",
            error_code="MODEL_RELEASED",
            details={"hint": "Train a new model"},
        )
