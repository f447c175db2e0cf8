"""Net salary calculation domain service."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Optional, Sequence

from netpay.config import CalculatorSettings
from netpay.domain.entities import (
    CalculationRequest,
    CalculationResult,
    ContractType,
    DeductionBreakdown,
    DisplayMode,
)
from netpay.domain.errors import (
    InvalidInputError,
    gross_amount_too_large,
    invalid_gross_amount,
    missing_gross_amount,
    negative_gross_amount,
)
from netpay.utils.amount_parser import MAX_AMOUNT, parse_amount, parse_amount_or_zero

logger = logging.getLogger(__name__)

HALF = Decimal("0.5")


def round_whole(amount: Decimal) -> Decimal:
    """Round to the nearest whole unit, halves toward positive infinity."""
    return (amount + HALF).to_integral_value(rounding=ROUND_FLOOR)


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class SalaryCalculator:
    """Service for estimating net salary from a calculation request."""

    def __init__(self, settings: Optional[CalculatorSettings] = None):
        """Initialize salary calculator.

        Args:
            settings: Rates to use. Defaults to CalculatorSettings().
        """
        self.settings = settings or CalculatorSettings()

    def evaluate(self, request: CalculationRequest) -> list[CalculationResult]:
        """Evaluate a request into one result per display mode.

        Employment and youth contracts produce a single result; B2B produces
        REAL_CASH, INVOICE_NET and IGNORING_COSTS, in that order, so the
        caller can switch between them without evaluating again.

        Args:
            request: Calculation request

        Returns:
            List of calculation results

        Raises:
            InvalidInputError: If the gross amount is missing, not a finite
                number, negative, or above MAX_AMOUNT
        """
        gross = self.validate_gross(request.gross_amount)
        costs = self.normalize_costs(request.business_costs)
        contract_type = ContractType.parse(request.contract_type)

        if contract_type is ContractType.BUSINESS:
            results = self._evaluate_business(gross, costs, request.relief_eligible)
        else:
            ratio = (
                self.settings.employment_net_ratio
                if contract_type is ContractType.EMPLOYMENT
                else self.settings.youth_net_ratio
            )
            net = gross * ratio
            results = [
                CalculationResult(
                    contract_type=contract_type,
                    display_mode=DisplayMode.REAL_CASH,
                    gross_amount=gross,
                    net_amount=round_whole(net),
                    deductions_total=round_whole(gross - net),
                )
            ]

        logger.debug(
            "Evaluated %s gross=%s costs=%s relief=%s -> %s",
            contract_type.value,
            gross,
            costs,
            request.relief_eligible,
            ", ".join(f"{r.display_mode.value}={r.net_amount}" for r in results),
        )
        return results

    def fixed_contribution(self, relief_eligible: bool) -> Decimal:
        """Return the flat monthly B2B contribution."""
        if relief_eligible:
            return self.settings.relief_contribution
        return self.settings.full_contribution

    def income_tax(self, taxable_base: Decimal) -> Decimal:
        """Return flat income tax, treating a negative base as zero."""
        return max(Decimal(0), taxable_base) * self.settings.income_tax_rate

    def _evaluate_business(
        self, gross: Decimal, costs: Decimal, relief_eligible: bool
    ) -> list[CalculationResult]:
        fixed = self.fixed_contribution(relief_eligible)

        # Costs lower the taxable base but have not left the account yet
        invoice_base = gross - fixed - costs
        invoice_tax = self.income_tax(invoice_base)
        invoice_net = gross - fixed - invoice_tax
        invoice_breakdown = DeductionBreakdown(
            fixed_contribution=fixed,
            taxable_base=invoice_base,
            income_tax=invoice_tax,
        )

        zero_base = gross - fixed
        zero_tax = self.income_tax(zero_base)
        zero_net = gross - fixed - zero_tax

        def result(mode, net, breakdown):
            return CalculationResult(
                contract_type=ContractType.BUSINESS,
                display_mode=mode,
                gross_amount=gross,
                net_amount=round_whole(net),
                deductions_total=round_whole(
                    breakdown.fixed_contribution + breakdown.income_tax
                ),
                breakdown=breakdown,
            )

        return [
            result(DisplayMode.REAL_CASH, invoice_net - costs, invoice_breakdown),
            result(DisplayMode.INVOICE_NET, invoice_net, invoice_breakdown),
            result(
                DisplayMode.IGNORING_COSTS,
                zero_net,
                DeductionBreakdown(
                    fixed_contribution=fixed,
                    taxable_base=zero_base,
                    income_tax=zero_tax,
                ),
            ),
        ]

    @staticmethod
    def validate_gross(value) -> Decimal:
        """Return the gross amount as a finite, non-negative Decimal.

        Raises:
            InvalidInputError: If the value is missing, not numeric, not
                finite, negative or above MAX_AMOUNT
        """
        if value is None:
            raise InvalidInputError(missing_gross_amount())
        try:
            gross = _to_decimal(value)
        except (InvalidOperation, ValueError):
            raise InvalidInputError(invalid_gross_amount(value))
        if not gross.is_finite():
            raise InvalidInputError(invalid_gross_amount(value))
        if gross < 0:
            raise InvalidInputError(negative_gross_amount(gross))
        if gross > MAX_AMOUNT:
            raise InvalidInputError(gross_amount_too_large(gross, MAX_AMOUNT))
        return gross

    @staticmethod
    def normalize_costs(value) -> Decimal:
        """Return business costs, with anything unusable coerced to zero."""
        if value is None:
            return Decimal(0)
        try:
            costs = _to_decimal(value)
        except (InvalidOperation, ValueError):
            return Decimal(0)
        if not costs.is_finite() or costs < 0 or costs > MAX_AMOUNT:
            return Decimal(0)
        return costs


_default_calculator = SalaryCalculator()


def evaluate(
    request: CalculationRequest, settings: Optional[CalculatorSettings] = None
) -> list[CalculationResult]:
    """Evaluate a request with the given settings (or the defaults)."""
    if settings is None:
        return _default_calculator.evaluate(request)
    return SalaryCalculator(settings).evaluate(request)


def build_request(
    contract_type: "ContractType | str",
    gross_text: Optional[str],
    costs_text: Optional[str] = None,
    relief_eligible: bool = False,
) -> CalculationRequest:
    """Build a request from raw form input.

    Gross is parsed strictly; costs fall back to zero when blank or
    unparseable.

    Raises:
        InvalidInputError: If the contract type is unknown or the gross
            amount is missing, not a finite number, negative or too large
    """
    contract = ContractType.parse(contract_type)

    if gross_text is None or not str(gross_text).strip():
        raise InvalidInputError(missing_gross_amount())
    try:
        gross = parse_amount(gross_text)
    except ValueError:
        raise InvalidInputError(invalid_gross_amount(gross_text))
    SalaryCalculator.validate_gross(gross)

    return CalculationRequest(
        contract_type=contract,
        gross_amount=gross,
        business_costs=parse_amount_or_zero(costs_text),
        relief_eligible=bool(relief_eligible),
    )


def select_result(
    results: Sequence[CalculationResult], mode: "DisplayMode | str"
) -> CalculationResult:
    """Pick the result for a display mode.

    Single-result evaluations (UoP, UZ) have a fixed mode; their only result
    is returned whatever mode is asked for.
    """
    if not results:
        raise ValueError("No calculation results to select from")
    mode = DisplayMode.parse(mode)
    for result in results:
        if result.display_mode is mode:
            return result
    return results[0]


def offers_mode_switch(request: CalculationRequest) -> bool:
    """Return True if the display modes can differ for this request."""
    return (
        ContractType.parse(request.contract_type) is ContractType.BUSINESS
        and SalaryCalculator.normalize_costs(request.business_costs) > 0
    )
