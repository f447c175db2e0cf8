"""Shared pytest fixtures for netpay tests."""

import pytest

from netpay.config import CalculatorSettings
from netpay.domain.calculator import SalaryCalculator
from netpay.domain.wizard import WizardSession


@pytest.fixture
def settings():
    """Default calculator settings."""
    return CalculatorSettings()


@pytest.fixture
def calculator(settings):
    """Create a SalaryCalculator with default settings."""
    return SalaryCalculator(settings)


@pytest.fixture
def session(calculator):
    """Create a fresh WizardSession."""
    return WizardSession(calculator)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep NETPAY_* variables from the developer's shell out of tests."""
    for name in (
        "NETPAY_EMPLOYMENT_NET_RATIO",
        "NETPAY_YOUTH_NET_RATIO",
        "NETPAY_INCOME_TAX_RATE",
        "NETPAY_FULL_CONTRIBUTION",
        "NETPAY_RELIEF_CONTRIBUTION",
        "NETPAY_LOADING_DELAY",
        "NETPAY_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
