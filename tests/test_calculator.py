"""Tests for the salary calculator."""

from decimal import Decimal

import pytest

from netpay.config import CalculatorSettings
from netpay.domain.calculator import (
    SalaryCalculator,
    build_request,
    evaluate,
    offers_mode_switch,
    round_whole,
    select_result,
)
from netpay.domain.entities import CalculationRequest, ContractType, DisplayMode
from netpay.domain.errors import DomainError, InvalidInputError


def _request(contract_type, gross, costs=0, relief=False):
    return CalculationRequest(
        contract_type=contract_type,
        gross_amount=Decimal(gross),
        business_costs=Decimal(costs),
        relief_eligible=relief,
    )


def _by_mode(results):
    return {result.display_mode: result for result in results}


class TestFlatContracts:
    """Tests for UoP and UZ flat multipliers."""

    def test_employment_contract(self, calculator):
        results = calculator.evaluate(_request(ContractType.EMPLOYMENT, 12500))
        assert len(results) == 1
        assert results[0].net_amount == Decimal(8875)
        assert results[0].deductions_total == Decimal(3625)
        assert results[0].gross_amount == Decimal(12500)
        assert results[0].breakdown is None

    def test_youth_contract(self, calculator):
        results = calculator.evaluate(_request(ContractType.YOUTH, 6500))
        assert len(results) == 1
        assert results[0].net_amount == Decimal(4875)
        assert results[0].deductions_total == Decimal(1625)

    @pytest.mark.parametrize(
        "gross", ["0", "1", "999.99", "4300", "7777.77", "12500", "31415.92"]
    )
    def test_flat_multipliers(self, calculator, gross):
        gross = Decimal(gross)
        uop = calculator.evaluate(_request(ContractType.EMPLOYMENT, gross))[0]
        uz = calculator.evaluate(_request(ContractType.YOUTH, gross))[0]
        assert uop.net_amount == round_whole(gross * Decimal("0.71"))
        assert uz.net_amount == round_whole(gross * Decimal("0.75"))

    def test_flat_contract_ignores_costs_and_relief(self, calculator):
        plain = calculator.evaluate(_request(ContractType.EMPLOYMENT, 12500))
        extras = calculator.evaluate(
            _request(ContractType.EMPLOYMENT, 12500, costs=3000, relief=True)
        )
        assert plain == extras

    def test_flat_contract_mode_is_fixed(self, calculator):
        result = calculator.evaluate(_request(ContractType.YOUTH, 6500))[0]
        assert result.display_mode is DisplayMode.REAL_CASH


class TestBusinessContract:
    """Tests for the B2B formula and its display modes."""

    def test_without_costs_all_modes_coincide(self, calculator):
        results = calculator.evaluate(_request(ContractType.BUSINESS, 18000))
        assert [r.display_mode for r in results] == [
            DisplayMode.REAL_CASH,
            DisplayMode.INVOICE_NET,
            DisplayMode.IGNORING_COSTS,
        ]
        for result in results:
            assert result.net_amount == Decimal(13284)
            assert result.deductions_total == Decimal(4716)
            assert result.breakdown.fixed_contribution == Decimal(1600)
            assert result.breakdown.taxable_base == Decimal(16400)
            assert result.breakdown.income_tax == Decimal(3116)

    def test_with_costs(self, calculator):
        modes = _by_mode(
            calculator.evaluate(_request(ContractType.BUSINESS, 18000, costs=2000))
        )

        invoice = modes[DisplayMode.INVOICE_NET]
        assert invoice.breakdown.taxable_base == Decimal(14400)
        assert invoice.breakdown.income_tax == Decimal(2736)
        assert invoice.net_amount == Decimal(13664)
        assert invoice.deductions_total == Decimal(4336)

        real = modes[DisplayMode.REAL_CASH]
        assert real.net_amount == Decimal(11664)
        # Costs are not counted as deductions, even in real cash mode
        assert real.deductions_total == Decimal(4336)
        assert real.breakdown == invoice.breakdown

        ignoring = modes[DisplayMode.IGNORING_COSTS]
        assert ignoring.breakdown.taxable_base == Decimal(16400)
        assert ignoring.breakdown.income_tax == Decimal(3116)
        assert ignoring.net_amount == Decimal(13284)
        assert ignoring.deductions_total == Decimal(4716)

    def test_ignoring_costs_can_be_below_invoice_net(self, calculator):
        modes = _by_mode(
            calculator.evaluate(_request(ContractType.BUSINESS, 18000, costs=2000))
        )
        assert modes[DisplayMode.IGNORING_COSTS].net_amount < modes[DisplayMode.INVOICE_NET].net_amount

    @pytest.mark.parametrize("gross", ["0", "500", "1000", "9000", "18000", "45000.50"])
    @pytest.mark.parametrize("relief", [True, False])
    def test_zero_costs_modes_identical(self, calculator, gross, relief):
        results = calculator.evaluate(
            _request(ContractType.BUSINESS, Decimal(gross), relief=relief)
        )
        assert len({r.net_amount for r in results}) == 1
        assert len({r.deductions_total for r in results}) == 1

    @pytest.mark.parametrize("gross,costs", [(18000, 2000), (9000, 500), (30000, 12000), (5000, 100)])
    def test_real_cash_is_lowest_with_costs(self, calculator, gross, costs):
        modes = _by_mode(
            calculator.evaluate(_request(ContractType.BUSINESS, gross, costs=costs))
        )
        real = modes[DisplayMode.REAL_CASH].net_amount
        assert real < modes[DisplayMode.INVOICE_NET].net_amount
        assert real < modes[DisplayMode.IGNORING_COSTS].net_amount

    def test_relief_uses_reduced_contribution(self, calculator):
        results = calculator.evaluate(_request(ContractType.BUSINESS, 1000, relief=True))
        for result in results:
            assert result.breakdown.fixed_contribution == Decimal(380)
            assert result.breakdown.taxable_base == Decimal(620)
            assert result.breakdown.income_tax == Decimal("117.8")
            assert result.net_amount == Decimal(502)
            assert result.deductions_total == Decimal(498)

    def test_fixed_contribution(self, calculator):
        assert calculator.fixed_contribution(True) == Decimal(380)
        assert calculator.fixed_contribution(False) == Decimal(1600)

    def test_taxable_base_floored_at_zero(self, calculator):
        assert calculator.income_tax(Decimal(-600)) == Decimal(0)
        assert calculator.income_tax(Decimal(100)) == Decimal(19)

    def test_negative_net_is_not_clamped(self, calculator):
        results = calculator.evaluate(_request(ContractType.BUSINESS, 1000))
        for result in results:
            assert result.breakdown.taxable_base == Decimal(-600)
            assert result.breakdown.income_tax == Decimal(0)
            assert result.net_amount == Decimal(-600)
            assert result.deductions_total == Decimal(1600)

    def test_costs_exceeding_gross(self, calculator):
        modes = _by_mode(
            calculator.evaluate(_request(ContractType.BUSINESS, 5000, costs=6000))
        )
        assert modes[DisplayMode.INVOICE_NET].breakdown.income_tax == Decimal(0)
        assert modes[DisplayMode.INVOICE_NET].net_amount == Decimal(3400)
        assert modes[DisplayMode.REAL_CASH].net_amount == Decimal(-2600)

    def test_rounding_is_applied_only_to_presented_figures(self, calculator):
        # Base 3000.5 - 1600 - 166 = 1234.5, tax 234.555
        modes = _by_mode(
            calculator.evaluate(
                _request(ContractType.BUSINESS, Decimal("3000.5"), costs=Decimal("166"))
            )
        )
        invoice = modes[DisplayMode.INVOICE_NET]
        assert invoice.breakdown.taxable_base == Decimal("1234.5")
        assert invoice.breakdown.income_tax == Decimal("234.555")
        # 3000.5 - 1600 - 234.555 = 1165.945
        assert invoice.net_amount == Decimal(1166)
        # 1165.945 - 166 = 999.945
        assert modes[DisplayMode.REAL_CASH].net_amount == Decimal(1000)
        # 1600 + 234.555 = 1834.555
        assert invoice.deductions_total == Decimal(1835)


class TestValidation:
    """Tests for input validation and lenient cost handling."""

    @pytest.mark.parametrize(
        "gross",
        [Decimal(-100), Decimal("-0.01"), Decimal("NaN"), Decimal("Infinity"), float("nan"), "abc", None],
    )
    def test_invalid_gross_rejected(self, calculator, gross):
        request = CalculationRequest(
            contract_type=ContractType.EMPLOYMENT, gross_amount=gross
        )
        with pytest.raises(InvalidInputError):
            calculator.evaluate(request)

    @pytest.mark.parametrize("gross", ["1e999999999", "1e5000", "1000000000000.01"])
    def test_huge_gross_rejected(self, calculator, gross):
        with pytest.raises(InvalidInputError, match="too large"):
            calculator.evaluate(build_request("uop", gross))
        request = CalculationRequest(
            contract_type=ContractType.BUSINESS, gross_amount=Decimal(gross)
        )
        with pytest.raises(InvalidInputError, match="too large"):
            calculator.evaluate(request)

    def test_largest_gross_accepted(self, calculator):
        results = calculator.evaluate(build_request("b2b", "1000000000000", "999999999999"))
        assert len(results) == 3
        assert results[1].net_amount == Decimal(999999998400)

    def test_huge_costs_treated_as_zero(self, calculator):
        request = CalculationRequest(
            contract_type=ContractType.BUSINESS,
            gross_amount=Decimal(18000),
            business_costs=Decimal("1e999999999"),
        )
        for result in calculator.evaluate(request):
            assert result.net_amount == Decimal(13284)

    def test_invalid_input_error_is_domain_error(self):
        assert issubclass(InvalidInputError, DomainError)
        assert issubclass(InvalidInputError, ValueError)

    def test_negative_gross_rejected_for_business(self, calculator):
        with pytest.raises(InvalidInputError, match="must not be negative"):
            calculator.evaluate(_request(ContractType.BUSINESS, -100))

    def test_numeric_gross_accepted(self, calculator):
        request = CalculationRequest(contract_type=ContractType.EMPLOYMENT, gross_amount=12500)
        assert calculator.evaluate(request)[0].net_amount == Decimal(8875)

    @pytest.mark.parametrize(
        "costs", [Decimal(-5), Decimal("NaN"), Decimal("-Infinity"), "abc", None]
    )
    def test_unusable_costs_treated_as_zero(self, calculator, costs):
        request = CalculationRequest(
            contract_type=ContractType.BUSINESS,
            gross_amount=Decimal(18000),
            business_costs=costs,
        )
        for result in calculator.evaluate(request):
            assert result.net_amount == Decimal(13284)

    def test_evaluate_is_idempotent(self, calculator):
        request = _request(ContractType.BUSINESS, 18000, costs=2000, relief=True)
        assert calculator.evaluate(request) == calculator.evaluate(request)


class TestModuleFunctions:
    """Tests for evaluate, build_request and result selection helpers."""

    def test_evaluate_with_defaults(self):
        results = evaluate(_request(ContractType.EMPLOYMENT, 12500))
        assert results[0].net_amount == Decimal(8875)

    def test_evaluate_with_custom_settings(self):
        settings = CalculatorSettings(full_contribution=Decimal(1000))
        results = evaluate(_request(ContractType.BUSINESS, 18000), settings)
        # 18000 - 1000 = 17000 base, tax 3230
        assert results[0].net_amount == Decimal(13770)

    def test_build_request_parses_text(self):
        request = build_request("b2b", "18 000", "2000,50", True)
        assert request == CalculationRequest(
            contract_type=ContractType.BUSINESS,
            gross_amount=Decimal(18000),
            business_costs=Decimal("2000.50"),
            relief_eligible=True,
        )

    @pytest.mark.parametrize("costs", [None, "", "   ", "abc", "-300", "NaN"])
    def test_build_request_lenient_costs(self, costs):
        request = build_request(ContractType.BUSINESS, "18000", costs)
        assert request.business_costs == Decimal(0)

    @pytest.mark.parametrize("gross", [None, "", "  ", "abc", "-100", "Infinity"])
    def test_build_request_strict_gross(self, gross):
        with pytest.raises(InvalidInputError):
            build_request(ContractType.EMPLOYMENT, gross)

    def test_build_request_unknown_contract(self):
        with pytest.raises(InvalidInputError, match="Unknown contract type"):
            build_request("umowa", "12500")

    def test_select_result(self, calculator):
        results = calculator.evaluate(_request(ContractType.BUSINESS, 18000, costs=2000))
        assert select_result(results, DisplayMode.INVOICE_NET).net_amount == Decimal(13664)
        assert select_result(results, "zero").net_amount == Decimal(13284)
        assert select_result(results, "real").net_amount == Decimal(11664)

    def test_select_result_falls_back_for_fixed_mode(self, calculator):
        results = calculator.evaluate(_request(ContractType.EMPLOYMENT, 12500))
        assert select_result(results, DisplayMode.IGNORING_COSTS) is results[0]

    def test_select_result_empty(self):
        with pytest.raises(ValueError):
            select_result([], DisplayMode.REAL_CASH)

    def test_offers_mode_switch(self):
        assert offers_mode_switch(_request(ContractType.BUSINESS, 18000, costs=2000))
        assert not offers_mode_switch(_request(ContractType.BUSINESS, 18000))
        assert not offers_mode_switch(_request(ContractType.EMPLOYMENT, 18000, costs=2000))


@pytest.mark.parametrize(
    "value,expected",
    [
        ("502.2", 502),
        ("2.5", 3),
        ("-2.5", -2),
        ("-0.5", 0),
        ("8875.00", 8875),
        ("1165.945", 1166),
        ("-600", -600),
    ],
)
def test_round_whole(value, expected):
    assert round_whole(Decimal(value)) == Decimal(expected)
