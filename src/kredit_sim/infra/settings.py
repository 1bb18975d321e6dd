"""Settings read from the environment.

DATABASE_URL                        SQLAlchemy URL (required by the PostgreSQL adapters)
KREDIT_SIM_PROMO_VARIANT           INTEREST_SUPPRESSED (default) | REGIONAL_OVERRIDE
KREDIT_SIM_FALLBACK_INTEREST_RATE   annual rate used when no interest row matches (default 0)
KREDIT_SIM_REGIONAL_SURCHARGE       added to the price before regional insurance (default 2000000)
"""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation

from kredit_sim.domain.rates import (
    DEFAULT_FALLBACK_INTEREST_RATE,
    REGIONAL_INSURANCE_SURCHARGE,
    PricingPolicy,
    PromoVariant,
)


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def promo_variant() -> PromoVariant:
    value = os.getenv("KREDIT_SIM_PROMO_VARIANT", PromoVariant.INTEREST_SUPPRESSED.value)

    try:
        return PromoVariant(value.strip().upper())
    except ValueError:
        raise RuntimeError(
            f"KREDIT_SIM_PROMO_VARIANT must be one of {[v.value for v in PromoVariant]}, got {value!r}"
        )


def _decimal_env(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)

    if value is None or not value.strip():
        return default

    try:
        parsed = Decimal(value.strip())
    except InvalidOperation:
        raise RuntimeError(f"{name} must be a decimal number, got {value!r}")

    if parsed < 0:
        raise RuntimeError(f"{name} must be >= 0, got {value!r}")

    return parsed


def fallback_interest_rate() -> Decimal:
    return _decimal_env("KREDIT_SIM_FALLBACK_INTEREST_RATE", DEFAULT_FALLBACK_INTEREST_RATE)


def regional_insurance_surcharge() -> Decimal:
    return _decimal_env("KREDIT_SIM_REGIONAL_SURCHARGE", REGIONAL_INSURANCE_SURCHARGE)


def pricing_policy() -> PricingPolicy:
    return PricingPolicy(
        promo_variant=promo_variant(),
        fallback_interest_rate=fallback_interest_rate(),
        regional_insurance_surcharge=regional_insurance_surcharge(),
    )
