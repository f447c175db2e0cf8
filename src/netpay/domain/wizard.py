"""Wizard session state for the staged calculator flow.

The session holds everything the user has typed so far and the results of
the last submission. It never computes salaries itself; ``submit`` hands a
request to the SalaryCalculator and keeps the returned results.
"""

import logging
from enum import Enum
from typing import Optional

from netpay.domain.calculator import (
    SalaryCalculator,
    build_request,
    offers_mode_switch,
    select_result,
)
from netpay.domain.entities import (
    CalculationRequest,
    CalculationResult,
    ContractCard,
    ContractType,
    DisplayMode,
)
from netpay.domain.errors import InvalidInputError, WizardStateError, illegal_transition

logger = logging.getLogger(__name__)


class WizardStep(Enum):
    """Stages of the calculator flow."""

    SELECTION = 1
    INPUT = 2
    LOADING = 3
    RESULT = 4


class WizardSession:
    """Mutable state of one user's pass through the wizard."""

    def __init__(self, calculator: Optional[SalaryCalculator] = None):
        """Initialize a wizard session at the selection step.

        Args:
            calculator: Calculator used on submit. Defaults to SalaryCalculator().
        """
        self.calculator = calculator or SalaryCalculator()
        self._clear()

    def _clear(self) -> None:
        self.step = WizardStep.SELECTION
        self.contract_type: Optional[ContractType] = None
        self.gross_text = ""
        self.costs_text = ""
        self.relief_eligible = False
        self.view_mode = DisplayMode.REAL_CASH
        self.request: Optional[CalculationRequest] = None
        self.results: list[CalculationResult] = []

    def _require(self, step: WizardStep, action: str) -> None:
        if self.step is not step:
            raise WizardStateError(illegal_transition(action, self.step.name.lower()))

    def _move(self, step: WizardStep) -> None:
        logger.debug("Wizard %s -> %s", self.step.name, step.name)
        self.step = step

    def select_contract(self, choice: "ContractType | ContractCard | str") -> None:
        """Choose a contract type (or card) and move to the input step.

        Picking the "B2B (Small ZUS)" card does not switch on relief; relief
        stays a separate input.
        """
        self._require(WizardStep.SELECTION, "select a contract")
        if isinstance(choice, ContractCard):
            choice = choice.contract_type
        self.contract_type = ContractType.parse(choice)
        self._move(WizardStep.INPUT)

    def back_to_selection(self) -> None:
        """Return to contract selection, keeping the entered amounts."""
        self._require(WizardStep.INPUT, "change the contract type")
        self._move(WizardStep.SELECTION)

    def set_gross(self, text: str) -> None:
        self._require(WizardStep.INPUT, "enter the gross amount")
        self.gross_text = text or ""

    def set_costs(self, text: str) -> None:
        self._require(WizardStep.INPUT, "enter business costs")
        self.costs_text = text or ""

    def set_relief(self, eligible: bool) -> None:
        self._require(WizardStep.INPUT, "change relief")
        self.relief_eligible = bool(eligible)

    def toggle_relief(self) -> None:
        self.set_relief(not self.relief_eligible)

    @property
    def can_submit(self) -> bool:
        """True when the current input would be accepted by submit."""
        if self.step is not WizardStep.INPUT or self.contract_type is None:
            return False
        try:
            build_request(self.contract_type, self.gross_text)
        except InvalidInputError:
            return False
        return True

    def submit(self) -> list[CalculationResult]:
        """Evaluate the entered values and move to the loading step.

        Returns:
            Results for every display mode

        Raises:
            InvalidInputError: If the gross amount is not acceptable; the
                session stays at the input step
        """
        self._require(WizardStep.INPUT, "submit")
        if self.contract_type is None:
            raise WizardStateError(illegal_transition("submit", "unselected contract"))

        relief = self.relief_eligible and self.contract_type is ContractType.BUSINESS
        costs = self.costs_text if self.contract_type is ContractType.BUSINESS else None
        request = build_request(self.contract_type, self.gross_text, costs, relief)

        self.request = request
        self.results = self.calculator.evaluate(request)
        self.view_mode = DisplayMode.REAL_CASH
        self._move(WizardStep.LOADING)
        return self.results

    def finish_loading(self) -> None:
        self._require(WizardStep.LOADING, "show the result")
        self._move(WizardStep.RESULT)

    @property
    def offers_mode_switch(self) -> bool:
        return self.request is not None and offers_mode_switch(self.request)

    def set_view_mode(self, mode: "DisplayMode | str") -> None:
        """Switch the displayed mode without evaluating again."""
        self._require(WizardStep.RESULT, "switch display mode")
        self.view_mode = DisplayMode.parse(mode)

    @property
    def current_result(self) -> Optional[CalculationResult]:
        if self.step is not WizardStep.RESULT or not self.results:
            return None
        return select_result(self.results, self.view_mode)

    def edit_amount(self) -> None:
        """Go back to the input step, discarding results but keeping inputs."""
        self._require(WizardStep.RESULT, "edit the amount")
        self.request = None
        self.results = []
        self._move(WizardStep.INPUT)

    def reset(self) -> None:
        """Start over from contract selection with a clean session."""
        logger.debug("Wizard reset from %s", self.step.name)
        self._clear()
