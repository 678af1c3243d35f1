"""Shared error taxonomy.

Validation, not-found and authorization failures reuse DRF's own exception
classes (``ValidationError``, ``NotFound``, ``PermissionDenied``); the classes
below cover the workflow-specific cases. All of them are rendered by
``common.api.handlers.envelope_exception_handler``.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class InvalidTransition(APIException):
    """A status change that the transition table does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status transition."
    default_code = "invalid_transition"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid status transition from {current} to {requested}")


class Conflict(APIException):
    """Duplicate creation or a concurrent operation holds the resource."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class DependencyFailure(APIException):
    """The database could not perform the requested operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "A storage dependency failed."
    default_code = "dependency_failure"


class DeadlineExceeded(APIException):
    """The caller-supplied deadline passed before the operation finished."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Deadline exceeded."
    default_code = "deadline_exceeded"
