"""Inventory reconciler.

Turns a paid outlet purchase into stock decrements. ``create_pending`` records
what a payment owes (one adjustment per payment id); ``apply_by_payment``
performs the decrements at most once.

Every decrement is a guarded conditional update (``stock >= quantity``), so
stock can never go negative whichever path applies it:

* transactional path: all lines in one ``transaction.atomic()`` block; the
  first guard failure rolls everything back and the adjustment is ``failed``.
* best-effort path, used when the backend has no transactions or the atomic
  block fails for a storage reason: each line is decremented on its own and
  its outcome is stored on the line, so a retry only touches lines that have
  not landed yet.

A caller must win a claim (``pending``/``failed`` -> ``applying``) before
touching stock. A claim older than ``INVENTORY_APPLY_LEASE_SECONDS`` is
considered abandoned and may be taken over.
"""

import logging
import time
from datetime import timedelta

from django.conf import settings
from django.db import DatabaseError, IntegrityError, connection, transaction
from django.db.models import F, Q, Sum
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from common.exceptions import Conflict, DeadlineExceeded

from .models import ClothingItem, InventoryAdjustment, InventoryAdjustmentLine

logger = logging.getLogger(__name__)

S = InventoryAdjustment.Status

ITEM_NOT_FOUND = "Item not found"
DEADLINE_REASON = "Deadline exceeded"


class _GuardViolation(Exception):
    """Raised inside the atomic block to roll back all decrements."""

    def __init__(self, line, reason):
        super().__init__(reason)
        self.line = line
        self.reason = reason


def transactions_supported() -> bool:
    return connection.features.supports_transactions


# ----------------------------- creation -----------------------------

def _normalize_items(items):
    if not isinstance(items, (list, tuple)) or not items:
        raise ValidationError({"items": ["items must be a non-empty list."]})
    normalized = []
    for index, entry in enumerate(items):
        item_id = entry.get("item_id") if isinstance(entry, dict) else None
        quantity = entry.get("quantity") if isinstance(entry, dict) else None
        if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id < 1:
            raise ValidationError({"items": [f"items[{index}].itemId must be a positive integer."]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": [f"items[{index}].quantity must be a positive integer."]})
        normalized.append((item_id, quantity))
    return normalized


def create_pending(payment_id, items, source=InventoryAdjustment.Source.OUTLET.value):
    """
    Record the decrements owed for ``payment_id``.

    Returns ``(adjustment, created)``. A second call for the same payment id
    returns the existing adjustment unchanged with ``created=False``.
    """
    payment_id = (payment_id or "").strip() if isinstance(payment_id, str) else ""
    if not payment_id:
        raise ValidationError({"paymentId": ["This field is required."]})
    if source not in InventoryAdjustment.Source.values:
        raise ValidationError({"source": [f'"{source}" is not a valid choice.']})
    lines = _normalize_items(items)

    existing = InventoryAdjustment.objects.filter(payment_id=payment_id).first()
    if existing is not None:
        return existing, False

    try:
        with transaction.atomic():
            adjustment = InventoryAdjustment.objects.create(payment_id=payment_id, source=source)
            InventoryAdjustmentLine.objects.bulk_create(
                [
                    InventoryAdjustmentLine(adjustment=adjustment, item_id=item_id, quantity=quantity)
                    for item_id, quantity in lines
                ]
            )
    except IntegrityError:
        # Lost a race against a concurrent create for the same payment.
        existing = InventoryAdjustment.objects.filter(payment_id=payment_id).first()
        if existing is None:
            raise
        return existing, False

    logger.info("Inventory adjustment created: payment=%s lines=%d", payment_id, len(lines))
    return adjustment, True


def get_adjustment(payment_id) -> InventoryAdjustment:
    adjustment = InventoryAdjustment.objects.filter(payment_id=payment_id).first()
    if adjustment is None:
        raise NotFound("Adjustment not found.")
    return adjustment


# ----------------------------- decrements -----------------------------

def guarded_decrement(item_id, quantity) -> bool:
    """Decrement stock only if it covers ``quantity``. True when it landed."""
    updated = ClothingItem.objects.filter(pk=item_id, stock__gte=quantity).update(
        stock=F("stock") - quantity,
        updated_at=timezone.now(),
    )
    return updated == 1


def _failure_reason(item_id, quantity) -> str:
    available = ClothingItem.objects.filter(pk=item_id).values_list("stock", flat=True).first()
    if available is None:
        return ITEM_NOT_FOUND
    return f"Insufficient stock: requested {quantity}, available {available}"


def _failure(line, reason) -> dict:
    return {"itemId": line.item_id, "reason": reason, "requested": line.quantity}


def _open_lines(adjustment):
    return InventoryAdjustmentLine.objects.filter(adjustment=adjustment, decremented=False).order_by("id")


def _mark_decremented(line):
    line.decremented = True
    line.decremented_at = timezone.now()
    line.failure_reason = ""
    line.save(update_fields=["decremented", "decremented_at", "failure_reason"])


def _deadline_passed(deadline) -> bool:
    return deadline is not None and time.monotonic() >= deadline


def _finish(adjustment, status):
    adjustment.status = status
    adjustment.applied_at = timezone.now() if status == S.APPLIED else None
    adjustment.claimed_at = None
    adjustment.save(update_fields=["status", "applied_at", "claimed_at", "updated_at"])


def _apply_in_transaction(adjustment, deadline):
    """All-or-nothing application. Returns the list of failed lines."""
    try:
        with transaction.atomic():
            for line in _open_lines(adjustment):
                if _deadline_passed(deadline):
                    raise DeadlineExceeded()
                if not guarded_decrement(line.item_id, line.quantity):
                    raise _GuardViolation(line, _failure_reason(line.item_id, line.quantity))
                _mark_decremented(line)
            _finish(adjustment, S.APPLIED)
    except _GuardViolation as violation:
        logger.warning(
            "Inventory adjustment rolled back: payment=%s item=%s reason=%s",
            adjustment.payment_id,
            violation.line.item_id,
            violation.reason,
        )
        _open_lines(adjustment).update(failure_reason="")
        InventoryAdjustmentLine.objects.filter(pk=violation.line.pk).update(failure_reason=violation.reason)
        _finish(adjustment, S.FAILED)
        return [_failure(violation.line, violation.reason)]
    return []


def _apply_best_effort(adjustment, deadline):
    """Line-by-line application. Returns the list of failed lines."""
    failed = []
    for line in _open_lines(adjustment):
        if _deadline_passed(deadline):
            reason = DEADLINE_REASON
        else:
            try:
                if guarded_decrement(line.item_id, line.quantity):
                    _mark_decremented(line)
                    continue
                reason = _failure_reason(line.item_id, line.quantity)
            except DatabaseError as exc:
                logger.exception(
                    "Inventory decrement errored: payment=%s item=%s",
                    adjustment.payment_id,
                    line.item_id,
                )
                reason = str(exc) or exc.__class__.__name__
        line.failure_reason = reason[:255]
        line.save(update_fields=["failure_reason"])
        failed.append(_failure(line, reason))
        logger.warning(
            "Inventory line not applied: payment=%s item=%s reason=%s",
            adjustment.payment_id,
            line.item_id,
            reason,
        )
    _finish(adjustment, S.FAILED if failed else S.APPLIED)
    return failed


# ----------------------------- claim -----------------------------

def _claim(adjustment) -> bool:
    """Take the application claim. False if another caller holds it."""
    now = timezone.now()
    stale_before = now - timedelta(seconds=settings.INVENTORY_APPLY_LEASE_SECONDS)
    claimable = (
        Q(status__in=[S.PENDING, S.FAILED])
        | Q(status=S.APPLYING, claimed_at__lt=stale_before)
        | Q(status=S.APPLYING, claimed_at__isnull=True)
    )
    won = InventoryAdjustment.objects.filter(claimable, pk=adjustment.pk).update(
        status=S.APPLYING,
        claimed_at=now,
        updated_at=now,
    )
    if won:
        adjustment.status = S.APPLYING
        adjustment.claimed_at = now
    return bool(won)


def _release(adjustment, previous_status):
    InventoryAdjustment.objects.filter(pk=adjustment.pk, status=S.APPLYING).update(
        status=previous_status,
        claimed_at=None,
        updated_at=timezone.now(),
    )
    adjustment.refresh_from_db()


# ----------------------------- apply -----------------------------

def summarize(adjustment, failed=None, attempted=True) -> dict:
    decremented = (
        InventoryAdjustmentLine.objects.filter(adjustment=adjustment, decremented=True)
        .aggregate(total=Sum("quantity"))["total"]
        or 0
    )
    return {
        "paymentId": adjustment.payment_id,
        "status": adjustment.status,
        "appliedAt": adjustment.applied_at,
        "inventory": {
            "attempted": attempted,
            "decremented": decremented,
            "failed": failed or [],
        },
    }


def apply_by_payment(payment_id, timeout=None) -> dict:
    """
    Apply the adjustment for ``payment_id`` at most once.

    ``timeout`` (seconds) bounds the work; when it runs out the transactional
    path aborts with ``DeadlineExceeded`` and nothing is applied, while the
    best-effort path records the remaining lines as failed.
    """
    adjustment = get_adjustment(payment_id)
    if adjustment.status == S.APPLIED:
        return summarize(adjustment, attempted=False)

    previous_status = S.PENDING if adjustment.status == S.APPLYING else adjustment.status
    if not _claim(adjustment):
        adjustment.refresh_from_db()
        if adjustment.status == S.APPLIED:
            return summarize(adjustment, attempted=False)
        raise Conflict("Adjustment is already being applied.")

    deadline = time.monotonic() + timeout if timeout else None
    try:
        if transactions_supported():
            try:
                failed = _apply_in_transaction(adjustment, deadline)
            except DatabaseError:
                logger.warning(
                    "Transaction failed for payment=%s; falling back to line-by-line apply",
                    payment_id,
                    exc_info=True,
                )
                failed = _apply_best_effort(adjustment, deadline)
        else:
            failed = _apply_best_effort(adjustment, deadline)
    except Exception:
        _release(adjustment, previous_status)
        raise

    logger.info(
        "Inventory adjustment %s: payment=%s failed_lines=%d",
        adjustment.status,
        payment_id,
        len(failed),
    )
    return summarize(adjustment, failed)
