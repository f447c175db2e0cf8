"""Calculate command."""

import click

from netpay.cli.error_handling import handle_domain_error
from netpay.cli.formatting import contract_title, echo_result
from netpay.domain.calculator import build_request, offers_mode_switch, select_result
from netpay.domain.entities import ContractType, DisplayMode
from netpay.domain.errors import DomainError

MODE_CHOICES = [mode.value for mode in DisplayMode] + ["all"]


@click.command("calculate")
@click.option(
    "--contract",
    required=True,
    type=click.Choice([c.value for c in ContractType], case_sensitive=False),
    help="Contract type: uop (employment), b2b (business), uz (youth/student)",
)
@click.option("--gross", required=True, help="Gross monthly amount (e.g., 12500 or '12 500,00')")
@click.option("--costs", help="Monthly business costs, B2B only (defaults to 0)")
@click.option("--relief", is_flag=True, help="Apply 'Ulga na start' reduced ZUS, B2B only")
@click.option(
    "--mode",
    type=click.Choice(MODE_CHOICES, case_sensitive=False),
    help="Display mode for B2B: real, invoice, zero or all (default: all when costs are given)",
)
@click.pass_context
def calculate(ctx, contract: str, gross: str, costs: str | None, relief: bool, mode: str | None):
    """Estimate net salary for a contract type.

    Examples:
        netpay calculate --contract uop --gross 12500
        netpay calculate --contract b2b --gross 18000 --costs 2000
        netpay calculate --contract b2b --gross 9000 --relief --mode invoice
    """
    calculator = ctx.obj["calculator"]

    try:
        request = build_request(contract, gross, costs, relief)
        results = calculator.evaluate(request)
    except DomainError as e:
        handle_domain_error(ctx, e)

    switchable = offers_mode_switch(request)
    if mode is None:
        mode = "all" if switchable else DisplayMode.REAL_CASH.value

    is_business = request.contract_type is ContractType.BUSINESS
    title = contract_title(request.contract_type)
    if is_business:
        zus = "reduced ZUS" if request.relief_eligible else "full ZUS"
        title += f", {zus}"
    click.echo(f"Contract: {title}")

    if mode == "all" and is_business:
        for result in results:
            click.echo()
            click.echo(f"[{result.display_mode.label}]")
            echo_result(
                result,
                show_caption=True,
                show_breakdown=True,
                tax_rate=calculator.settings.income_tax_rate,
            )
        return

    if mode == "all":
        mode = DisplayMode.REAL_CASH.value
    echo_result(
        select_result(results, mode),
        show_caption=switchable,
        show_breakdown=is_business,
        tax_rate=calculator.settings.income_tax_rate,
    )


def register_commands(cli):
    """Register calculate command with main CLI."""
    cli.add_command(calculate)
