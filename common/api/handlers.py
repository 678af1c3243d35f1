"""DRF exception handler producing the error envelope.

Every handled API error is rendered as::

    {"status": "error", "message": "...", "code": "...", "errors": {...}}

``errors`` is only present for field-level validation failures.
"""

import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Pick a human-readable message from a (possibly nested) DRF detail."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        for key, value in detail.items():
            msg = _first_message(value)
            if key == "non_field_errors":
                return msg
            return f"{key}: {msg}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def _first_code(codes):
    if isinstance(codes, dict):
        return _first_code(next(iter(codes.values()), "error"))
    if isinstance(codes, (list, tuple)):
        return _first_code(codes[0]) if codes else "error"
    return str(codes)


def envelope_exception_handler(exc, context):
    """Wrap DRF's default error response in the uniform envelope."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = getattr(exc, "detail", response.data)
    body = {
        "status": "error",
        "message": _first_message(detail),
    }
    get_codes = getattr(exc, "get_codes", None)
    if get_codes is not None:
        body["code"] = _first_code(get_codes())
    if isinstance(detail, dict) and "detail" not in detail:
        body["errors"] = response.data

    view = context.get("view")
    logger.info(
        "API error %s in %s: %s",
        response.status_code,
        view.__class__.__name__ if view else "unknown view",
        body["message"],
    )
    response.data = body
    return response
