"""Contract listing command."""

import click

from netpay.domain.entities import CONTRACT_CARDS


@click.command("contracts")
def list_contracts():
    """List the contract types the calculator understands."""
    click.echo(f"{'Key':<16} {'Type':<6} {'Title':<18} Description")
    click.echo("-" * 90)
    for card in CONTRACT_CARDS:
        click.echo(
            f"{card.key:<16} {card.contract_type.value:<6} {card.title:<18} {card.subtitle}"
        )


def register_commands(cli):
    """Register contracts command with main CLI."""
    cli.add_command(list_contracts)
