"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

from core.settings import PaymentSettings, payment_settings
from application.ports.payment_gateway import PaymentGateway


def build_payment_gateway(
    provider: Optional[str] = None,
    settings: Optional[PaymentSettings] = None,
) -> PaymentGateway:
    """Construct the processor client from configuration (once per process)."""
    cfg = settings or payment_settings
    name = (provider or cfg.default_provider).lower()
    if name == "stripe":
        from .stripe_client import StripeGateway
        return StripeGateway(cfg.stripe.secret_key, api_version=cfg.stripe.api_version)
    raise ValueError(f"Unsupported payment provider: {name}")
