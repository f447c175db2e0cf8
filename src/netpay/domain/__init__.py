"""Domain layer for netpay application."""

from netpay.domain.calculator import SalaryCalculator, evaluate, build_request
from netpay.domain.wizard import WizardSession, WizardStep

__all__ = [
    "SalaryCalculator",
    "evaluate",
    "build_request",
    "WizardSession",
    "WizardStep",
]
