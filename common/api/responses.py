"""Helpers for the uniform ``{status, message?, data?}`` response envelope."""

from rest_framework import status as http_status
from rest_framework.response import Response

_MISSING = object()


def ok(data=_MISSING, message=None, status=http_status.HTTP_200_OK, **extra):
    """Return a success envelope; ``extra`` keys (e.g. ``count``) are merged in.

    ``data`` is omitted only when not passed at all; ``ok(None)`` renders
    ``"data": null``.
    """
    body = {"status": "ok"}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not _MISSING:
        body["data"] = data
    return Response(body, status=status)


def ok_list(items, status=http_status.HTTP_200_OK):
    """Success envelope for collections, carrying ``count`` next to ``data``."""
    items = list(items)
    return Response({"status": "ok", "count": len(items), "data": items}, status=status)
