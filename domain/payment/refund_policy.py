"""
Refund eligibility rules for the cancel-order flow.
"""
from __future__ import annotations

from typing import Optional

from domain.common.exceptions import IneligibleStateException
from shared.codes.payment_codes import REFUNDABLE_INTENT_STATUS


def ensure_refundable(intent_id: str, status: str, charge_id: Optional[str]) -> str:
    """Return the charge to refund, or raise IneligibleStateException.

    Only a succeeded intent with a linked charge can be refunded. The status
    check runs first so a non-succeeded intent always reports its status.
    """
    if status != REFUNDABLE_INTENT_STATUS:
        raise IneligibleStateException(
            f"Cannot refund payment with status: {status}. Only succeeded payments can be refunded.",
            payment_intent_id=intent_id,
            status=status,
        )
    if not charge_id:
        raise IneligibleStateException(
            "No charge found to refund",
            payment_intent_id=intent_id,
            status=status,
        )
    return charge_id
