"""Rendering helpers for calculation results."""

from decimal import Decimal, ROUND_HALF_UP

import click

from netpay.domain.entities import CalculationResult, ContractType


def format_amount(amount) -> str:
    """Format an amount the way pl-PL renders it, e.g. "12 500 PLN".

    Groups of three digits are separated by spaces only from five digits on
    ("8875", "12 500"). Fractions are shown with a decimal comma when present.
    """
    amount = Decimal(amount)
    sign = "-" if amount < 0 else ""
    whole, cents = f"{abs(amount).quantize(Decimal('0.01'), ROUND_HALF_UP):.2f}".split(".")
    if len(whole) > 4:
        whole = f"{int(whole):,}".replace(",", " ")
    text = sign + whole
    if cents != "00":
        text += f",{cents}"
    return f"{text} PLN"


def format_rate(rate) -> str:
    """Format a rate such as 0.19 as "19%"."""
    percent = (Decimal(rate) * 100).normalize()
    return f"{percent:f}%"


def echo_result(
    result: CalculationResult,
    show_caption: bool = False,
    show_breakdown: bool = False,
    tax_rate=None,
) -> None:
    """Print one calculation result."""
    label = "Estimated Net"
    if show_caption:
        label += f" ({result.display_mode.caption})"

    click.echo(f"  {label + ':':<28}{format_amount(result.net_amount):>16}")
    click.echo(f"  {'Gross Income:':<28}{format_amount(result.gross_amount):>16}")
    click.echo(f"  {'Taxes & ZUS:':<28}{'~' + format_amount(result.deductions_total):>16}")

    if show_breakdown and result.breakdown is not None:
        breakdown = result.breakdown
        tax_label = "Income tax"
        if tax_rate is not None:
            tax_label += f" ({format_rate(tax_rate)})"
        click.echo(f"    {'ZUS contribution:':<26}{format_amount(breakdown.fixed_contribution):>16}")
        click.echo(f"    {'Taxable base:':<26}{format_amount(breakdown.taxable_base):>16}")
        click.echo(f"    {tax_label + ':':<26}{format_amount(breakdown.income_tax):>16}")


def contract_title(contract_type: ContractType) -> str:
    """Short display name of a contract type."""
    return {
        ContractType.EMPLOYMENT: "UoP",
        ContractType.BUSINESS: "B2B",
        ContractType.YOUTH: "UZ",
    }[contract_type]
