"""
Payment-related settings using pydantic-settings v2 with nested env keys.

This module is isolated so core.config.Settings stays free of processor
credentials. Both ``STRIPE_SECRET_KEY`` and ``STRIPE__SECRET_KEY`` are read.
"""
from __future__ import annotations

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, BaseModel, Field, model_validator


class StripeSettings(BaseModel):
    secret_key: Optional[str] = None
    # None keeps the account's default API version
    api_version: Optional[str] = None


class PaymentSettings(BaseSettings):
    default_provider: str = Field(
        default="stripe",
        validation_alias=AliasChoices("PAYMENT__DEFAULT_PROVIDER", "default_provider"),
    )
    stripe: StripeSettings = Field(default_factory=StripeSettings)
    # flat variable used by most Stripe deployments
    stripe_secret_key: Optional[str] = Field(default=None, validation_alias="STRIPE_SECRET_KEY")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @model_validator(mode="after")
    def _merge_flat_secret_key(self):
        if not self.stripe.secret_key and self.stripe_secret_key:
            self.stripe.secret_key = self.stripe_secret_key
        return self


payment_settings = PaymentSettings()
