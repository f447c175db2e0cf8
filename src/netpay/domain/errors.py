"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class InvalidInputError(DomainError):
    """Calculation input rejected before any computation took place."""


class WizardStateError(DomainError):
    """Wizard action not allowed in the current step."""


def missing_gross_amount() -> str:
    """Return message for an empty gross amount."""
    return "Gross amount is required"


def invalid_gross_amount(raw: object) -> str:
    """Return message for a gross amount that is not a finite number."""
    return f"Gross amount '{raw}' is not a valid number"


def negative_gross_amount(amount: object) -> str:
    """Return message for a negative gross amount."""
    return f"Gross amount must not be negative (got {amount})"


def unknown_contract_type(raw: object) -> str:
    """Return message for an unrecognised contract type."""
    return f"Unknown contract type '{raw}' (expected one of: uop, b2b, uz)"


def unknown_display_mode(raw: object) -> str:
    """Return message for an unrecognised display mode."""
    return f"Unknown display mode '{raw}' (expected one of: real, invoice, zero)"


def illegal_transition(action: str, step_name: str) -> str:
    """Return message when a wizard action is not allowed in the current step."""
    return f"Cannot {action} while the wizard is at the {step_name} step"


def gross_amount_too_large(amount: object, limit: object) -> str:
    """Return message for a gross amount above the supported range."""
    return f"Gross amount {amount} is too large (maximum {limit})"
