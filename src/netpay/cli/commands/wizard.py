"""Interactive calculator wizard."""

import time

import click

from netpay.cli.formatting import echo_result
from netpay.domain.entities import CONTRACT_CARDS, ContractType, DisplayMode
from netpay.domain.wizard import WizardSession, WizardStep

BACK = "back"

# Result screen actions
MODE_KEYS = {
    "r": DisplayMode.REAL_CASH,
    "i": DisplayMode.INVOICE_NET,
    "z": DisplayMode.IGNORING_COSTS,
}
EDIT, NEW, QUIT = "e", "n", "q"


def _selection_step(session: WizardSession) -> None:
    click.echo()
    click.echo("Select Your Contract Type")
    for number, card in enumerate(CONTRACT_CARDS, start=1):
        click.echo(f"  {number}. {card.title:<16} {card.subtitle}")
    choice = click.prompt(
        "Contract", type=click.IntRange(1, len(CONTRACT_CARDS))
    )
    session.select_contract(CONTRACT_CARDS[choice - 1])


def _input_step(session: WizardSession) -> None:
    click.echo()
    click.echo(f"(type '{BACK}' to change the contract type)")
    gross = click.prompt(
        "Gross Salary (PLN)",
        default=session.gross_text or "",
        show_default=bool(session.gross_text),
    )
    if gross.strip().lower() == BACK:
        session.back_to_selection()
        return
    session.set_gross(gross)

    if session.contract_type is ContractType.BUSINESS:
        costs = click.prompt(
            "Business Costs (Net, PLN)",
            default=session.costs_text or "",
            show_default=bool(session.costs_text),
        )
        session.set_costs(costs)
        session.set_relief(
            click.confirm(
                "Ulga na start (Relief)? First 6 months of business activity",
                default=session.relief_eligible,
            )
        )

    if not session.can_submit:
        click.echo("Error: Enter a valid, non-negative gross amount.", err=True)
        return
    session.submit()


def _loading_step(session: WizardSession, delay: float) -> None:
    click.echo()
    click.echo("Crunching the numbers...")
    if delay > 0:
        time.sleep(delay)
    session.finish_loading()


def _result_step(session: WizardSession, tax_rate) -> bool:
    """Show the result and apply the chosen action; False means quit."""
    switchable = session.offers_mode_switch
    click.echo()
    if switchable:
        click.echo(
            "  ".join(
                f"[{mode.label}]" if mode is session.view_mode else mode.label
                for mode in DisplayMode
            )
        )
    echo_result(
        session.current_result,
        show_caption=switchable,
        show_breakdown=True,
        tax_rate=tax_rate,
    )

    actions = {EDIT: "edit amount", NEW: "new calculation", QUIT: "quit"}
    if switchable:
        actions = {
            **{key: mode.label.lower() for key, mode in MODE_KEYS.items()},
            **actions,
        }
    click.echo("  " + ", ".join(f"{key}) {text}" for key, text in actions.items()))
    action = click.prompt(
        "Action",
        type=click.Choice(list(actions), case_sensitive=False),
        default=QUIT,
        show_choices=False,
    ).lower()

    if action in MODE_KEYS:
        session.set_view_mode(MODE_KEYS[action])
    elif action == EDIT:
        session.edit_amount()
    elif action == NEW:
        session.reset()
    else:
        return False
    return True


@click.command("wizard")
@click.option("--no-delay", is_flag=True, help="Skip the artificial 'calculating' pause")
@click.pass_context
def wizard(ctx, no_delay: bool):
    """Walk through contract selection, amounts and the net result.

    Examples:
        netpay wizard
        netpay wizard --no-delay
    """
    calculator = ctx.obj["calculator"]
    delay = 0 if no_delay else calculator.settings.loading_delay
    session = WizardSession(calculator)

    while True:
        if session.step is WizardStep.SELECTION:
            _selection_step(session)
        elif session.step is WizardStep.INPUT:
            _input_step(session)
        elif session.step is WizardStep.LOADING:
            _loading_step(session, delay)
        elif not _result_step(session, calculator.settings.income_tax_rate):
            break


def register_commands(cli):
    """Register wizard command with main CLI."""
    cli.add_command(wizard)
