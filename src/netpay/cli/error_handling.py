"""CLI error reporting."""

import click

from netpay.domain.errors import DomainError


def exit_with_error(ctx: click.Context, message: str) -> None:
    """Print an error line to stderr and stop with exit status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Report a rejected calculation input or a bad setting."""
    exit_with_error(ctx, str(error))
