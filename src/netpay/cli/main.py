"""Main CLI entry point."""

import logging

import click

from netpay.cli.error_handling import exit_with_error
from netpay.config import load_settings
from netpay.domain.calculator import SalaryCalculator

# Import and register all commands at module level
from netpay.cli.commands import calculate, contracts, wizard


@click.group()
@click.option(
    "--verbose",
    is_flag=True,
    help="Log calculation details to stderr (or set NETPAY_VERBOSE=1)",
    envvar="NETPAY_VERBOSE",
)
@click.pass_context
def cli(ctx, verbose: bool):
    """netpay - Polish net salary estimator.

    Approximates take-home pay for UoP, UZ and B2B contracts. Rates can be
    adjusted with NETPAY_* environment variables. Figures are estimates,
    not tax advice.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Settings are only needed when a command actually runs (not for --help)
    if ctx.invoked_subcommand is not None:
        try:
            settings = load_settings()
        except ValueError as e:
            exit_with_error(ctx, str(e))
        ctx.obj["settings"] = settings
        ctx.obj["calculator"] = SalaryCalculator(settings)


# Register all commands
calculate.register_commands(cli)
contracts.register_commands(cli)
wizard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
