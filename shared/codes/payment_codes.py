"""
Payment specific codes and Stripe status vocabulary.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    # Local state checks (2xxxx range shared with business errors)
    INELIGIBLE_STATE = 21000

    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000


# Stripe PaymentIntent statuses (as reported, never remapped in responses)
STRIPE_INTENT_STATUSES = frozenset({
    "requires_payment_method",
    "requires_confirmation",
    "requires_action",
    "processing",
    "requires_capture",
    "canceled",
    "succeeded",
})

# Only fully settled intents carry a refundable charge
REFUNDABLE_INTENT_STATUS = "succeeded"
