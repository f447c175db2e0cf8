"""Calculator settings loaded from the environment."""

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from netpay.utils.amount_parser import MAX_AMOUNT, parse_amount


@dataclass(frozen=True)
class CalculatorSettings:
    """Rates and amounts used by the salary formulas.

    Defaults mirror the approximations the calculator has always used; they
    are not statutory values.
    """

    employment_net_ratio: Decimal = Decimal("0.71")
    youth_net_ratio: Decimal = Decimal("0.75")
    income_tax_rate: Decimal = Decimal("0.19")
    full_contribution: Decimal = Decimal("1600")
    relief_contribution: Decimal = Decimal("380")
    loading_delay: float = 1.2


# Environment variable -> settings field
ENV_VARS = {
    "NETPAY_EMPLOYMENT_NET_RATIO": "employment_net_ratio",
    "NETPAY_YOUTH_NET_RATIO": "youth_net_ratio",
    "NETPAY_INCOME_TAX_RATE": "income_tax_rate",
    "NETPAY_FULL_CONTRIBUTION": "full_contribution",
    "NETPAY_RELIEF_CONTRIBUTION": "relief_contribution",
    "NETPAY_LOADING_DELAY": "loading_delay",
}

# Upper bound for the "calculating" pause, in seconds
MAX_LOADING_DELAY = 60


def load_settings(environ: Optional[Mapping[str, str]] = None) -> CalculatorSettings:
    """Create calculator settings.

    Args:
        environ: Mapping to read NETPAY_* variables from. If None, uses
            os.environ. Unset or blank variables keep their defaults.

    Returns:
        CalculatorSettings instance

    Raises:
        ValueError: If a variable is set to something that is not a
            non-negative number within range
    """
    if environ is None:
        environ = os.environ

    overrides = {}
    for env_name, field_name in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is None or not raw.strip():
            continue
        try:
            value = parse_amount(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_name}: {e}")
        if value < 0:
            raise ValueError(f"Invalid value for {env_name}: must not be negative")
        if field_name == "loading_delay":
            if value > MAX_LOADING_DELAY:
                raise ValueError(
                    f"Invalid value for {env_name}: must be at most {MAX_LOADING_DELAY} seconds"
                )
            overrides[field_name] = float(value)
        elif value > MAX_AMOUNT:
            raise ValueError(f"Invalid value for {env_name}: must be at most {MAX_AMOUNT}")
        else:
            overrides[field_name] = value

    return CalculatorSettings(**overrides)
