"""Domain model entities for netpay.

These are pure data classes describing a single salary calculation. A request
is built once per submission, evaluated into one result per display mode, and
then thrown away; nothing here is persisted.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from netpay.domain.errors import (
    InvalidInputError,
    unknown_contract_type,
    unknown_display_mode,
)


class ContractType(Enum):
    """Employment contract kinds, each with its own net formula."""

    EMPLOYMENT = "uop"
    BUSINESS = "b2b"
    YOUTH = "uz"

    @classmethod
    def parse(cls, value: "str | ContractType") -> "ContractType":
        """Resolve a contract type from its value ("b2b") or name ("BUSINESS")."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() == member.value or text.upper() == member.name:
                return member
        raise InvalidInputError(unknown_contract_type(value))


class DisplayMode(Enum):
    """Alternative presentations of the same B2B computation."""

    REAL_CASH = "real"
    INVOICE_NET = "invoice"
    IGNORING_COSTS = "zero"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self][0]

    @property
    def caption(self) -> str:
        """Qualifier shown next to the net figure."""
        return _MODE_LABELS[self][1]

    @classmethod
    def parse(cls, value: "str | DisplayMode") -> "DisplayMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() == member.value or text.upper() == member.name:
                return member
        raise InvalidInputError(unknown_display_mode(value))


_MODE_LABELS = {
    DisplayMode.REAL_CASH: ("Real Cash", "On Hand"),
    DisplayMode.INVOICE_NET: ("Invoice Net", "Transfer"),
    DisplayMode.IGNORING_COSTS: ("Ignoring Costs", "No Costs"),
}


@dataclass(frozen=True)
class CalculationRequest:
    """Inputs collected when the user submits the amount form.

    ``business_costs`` and ``relief_eligible`` only matter for B2B.
    """

    contract_type: ContractType
    gross_amount: Decimal
    business_costs: Decimal = Decimal(0)
    relief_eligible: bool = False


@dataclass(frozen=True)
class DeductionBreakdown:
    """Unrounded B2B deduction figures for one display mode."""

    fixed_contribution: Decimal
    taxable_base: Decimal
    income_tax: Decimal


@dataclass(frozen=True)
class CalculationResult:
    """Net salary estimate for one display mode."""

    contract_type: ContractType
    display_mode: DisplayMode
    gross_amount: Decimal
    net_amount: Decimal
    deductions_total: Decimal
    breakdown: Optional[DeductionBreakdown] = None


@dataclass(frozen=True)
class ContractCard:
    """Entry on the contract selection screen."""

    key: str
    title: str
    subtitle: str
    contract_type: ContractType


CONTRACT_CARDS = (
    ContractCard(
        key="b2b",
        title="B2B",
        subtitle="Ideal for contractors & freelancers working with diverse clients.",
        contract_type=ContractType.BUSINESS,
    ),
    ContractCard(
        key="b2b-small-zus",
        title="B2B (Small ZUS)",
        subtitle="Discounted ZUS for first 24 months of your project.",
        contract_type=ContractType.BUSINESS,
    ),
    ContractCard(
        key="uop",
        title="UoP",
        subtitle="Standard full-time roles with standard employment rights.",
        contract_type=ContractType.EMPLOYMENT,
    ),
    ContractCard(
        key="uop-student",
        title="UoP (Student)",
        subtitle="Best for students under 26 & part-time contributors.",
        contract_type=ContractType.YOUTH,
    ),
)


def find_card(key: str) -> ContractCard:
    """Look up a contract card by key."""
    for card in CONTRACT_CARDS:
        if card.key == key:
            return card
    raise InvalidInputError(unknown_contract_type(key))
