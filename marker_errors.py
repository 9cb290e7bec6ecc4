# marker_errors.py
"""
Exception types raised by the marker pipeline.

Every error may carry the marker that was already persisted when it was
raised. A raised error always means ingestion is incomplete, even when
`error.marker` holds a stored marker with an identity.
"""


class MarkerError(Exception):
    """Base exception for all marker pipeline errors."""

    def __init__(self, message, details=None, marker=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.marker = marker

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(MarkerError):
    """The submission was rejected before anything was written."""

    def __init__(self, message, missing_fields=None):
        super().__init__(message, details={"missing_fields": list(missing_fields or [])})
        self.missing_fields = list(missing_fields or [])


class StorageError(MarkerError):
    """A write against the store failed. `stage` names the failing step."""

    def __init__(self, stage, cause=None, marker=None):
        message = f"failed to {stage}"
        super().__init__(message, details=str(cause) if cause else None, marker=marker)
        self.stage = stage


class InvalidReferenceError(MarkerError):
    """A media id could not be parsed into an ObjectId."""

    def __init__(self, media_id, cause=None, marker=None):
        super().__init__(f"invalid mediaId format: {media_id!r}", details=str(cause) if cause else None, marker=marker)
        self.media_id = media_id


class DeadlineExceededError(MarkerError, TimeoutError):
    """The per-call deadline elapsed while `stage` was running."""

    def __init__(self, stage, cause=None, marker=None):
        super().__init__(f"deadline exceeded during {stage}", details=str(cause) if cause else None, marker=marker)
        self.stage = stage
