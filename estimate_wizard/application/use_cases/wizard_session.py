from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from estimate_wizard.application.exceptions import ContentFetchError, CostParseError
from estimate_wizard.application.ports.content_source import ContentSourcePort
from estimate_wizard.application.ports.selection_store import SelectionStorePort
from estimate_wizard.application.use_cases.contact_form import validate_contact
from estimate_wizard.application.use_cases.estimate import EstimateAggregator
from estimate_wizard.application.use_cases.lead_submission import LeadSubmissionOrchestrator
from estimate_wizard.application.use_cases.navigation import NavigationResult, WizardNavigator
from estimate_wizard.application.utils.formatting import slugify_category_id
from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.domain.entities.content import (
    CalculatorData,
    Category,
    EmailTemplate,
    HomeContent,
    ResultsContent,
)
from estimate_wizard.domain.entities.estimate import EstimateBreakdown
from estimate_wizard.domain.entities.selection_state import SelectionSnapshot
from estimate_wizard.domain.entities.submission_state import SubmissionOutcome


class Screen(str, Enum):
    home = "home"
    category = "category"
    form = "form"
    results = "results"
    error = "error"


@dataclass(frozen=True)
class ScreenError:
    kind: str  # "not_found", "network", "malformed", "fetch_failed", "cost_parse"
    message: str


@dataclass(frozen=True)
class ResultsView:
    content: ResultsContent
    breakdown: EstimateBreakdown
    submission: SubmissionOutcome


class WizardSession:
    """
    One visitor's pass through the calculator: home, category questions,
    contact form, results. Owns the selection store and the submission
    orchestrator for the lifetime of the session.
    """

    def __init__(
        self,
        content: ContentSourcePort,
        store: SelectionStorePort,
        orchestrator: LeadSubmissionOrchestrator,
        aggregator: EstimateAggregator | None = None,
    ) -> None:
        self._content = content
        self._store = store
        self._orchestrator = orchestrator
        self._aggregator = aggregator or EstimateAggregator()
        self._logger = logging.getLogger(__name__)

        self.screen = Screen.home
        self.error: ScreenError | None = None
        self.home: HomeContent | None = None
        self.category: Category | None = None
        self.navigator: WizardNavigator | None = None
        self.form_data: CalculatorData | None = None
        self.contact: FormContact | None = None
        self._results_inputs: tuple[ResultsContent, EmailTemplate, EstimateBreakdown] | None = None

    @property
    def store(self) -> SelectionStorePort:
        return self._store

    @property
    def orchestrator(self) -> LeadSubmissionOrchestrator:
        return self._orchestrator

    @property
    def category_id(self) -> str | None:
        return self.navigator.category_id if self.navigator else (self.category.id if self.category else None)

    async def load_home(self) -> HomeContent | None:
        try:
            self.home = await self._content.fetch_home_content()
        except ContentFetchError as e:
            self._fail(Screen.error, e.kind, f"Failed to load data: {e}")
            return None
        self.screen = Screen.home
        self.error = None
        return self.home

    async def open_category(self, category_id: str, category: Category | None = None) -> WizardNavigator | None:
        self.category = category or self._known_category(category_id)
        self.navigator = None
        self.form_data = None
        self.screen = Screen.category
        self.error = None
        try:
            data = await self._content.fetch_category_content(category_id)
        except ContentFetchError as e:
            self._fail(Screen.category, e.kind, f"Unable to load category details: {e}", category_id=category_id)
            return None
        self.navigator = WizardNavigator(category_id, data, self._store)
        self._logger.info("Category opened", extra={"category_id": category_id})
        return self.navigator

    async def open_category_param(self, value: str) -> WizardNavigator | None:
        """Open a category from a link parameter, matching by id or slugified title."""
        home = await self.load_home()
        if home is None:
            return None
        wanted = value.strip().lower()
        for category in home.categories:
            if category.id == value or slugify_category_id(category.title) == wanted:
                return await self.open_category(category.id, category)
        self._fail(Screen.error, "not_found", f'Category "{value}" does not exist. Please check the URL and try again.')
        return None

    def select_option(self, question_index: int, option_index: int) -> bool:
        return self._require_navigator().select_option(question_index, option_index)

    def next_question(self) -> NavigationResult:
        result = self._require_navigator().next()
        if result.ready:
            self.form_data = result.calculator_data
            self.screen = Screen.form
        return result

    def previous_question(self) -> NavigationResult:
        return self._require_navigator().previous()

    def back_to_home(self) -> None:
        """Leave the category; its answers are discarded."""
        if self.category_id:
            self._store.clear_category(self.category_id)
        self.category = None
        self.navigator = None
        self.form_data = None
        self.error = None
        self.screen = Screen.home

    def back_to_category(self) -> None:
        self._require_navigator()
        self.screen = Screen.category

    def submit_contact(self, name: str | None, email: str | None, zip: str | None, phone: str | None) -> FormContact:
        navigator = self._require_navigator()
        if not navigator.is_ready:
            raise ValueError("All questions must be answered before submitting the form")
        contact = validate_contact(name=name, email=email, zip=zip, phone=phone)
        if contact != self.contact:
            self._orchestrator.reset()
            self._results_inputs = None
        self.contact = contact
        self.screen = Screen.results
        return contact

    async def load_results(self) -> ResultsView | None:
        navigator = self._require_navigator()
        if self.contact is None:
            raise ValueError("Contact details have not been submitted")

        try:
            results, template = await asyncio.gather(
                self._content.fetch_results_content(),
                self._content.fetch_email_template(),
            )
        except ContentFetchError as e:
            self._fail(Screen.results, e.kind, f"Unable to load estimate results: {e}")
            return None

        try:
            breakdown = self._aggregator.aggregate(
                navigator.category_id,
                navigator.calculator_data,
                self._store.get_category_selections(navigator.category_id),
            )
        except CostParseError as e:
            self._fail(Screen.results, "cost_parse", str(e), category_id=navigator.category_id)
            return None

        self.error = None
        self._results_inputs = (results, template, breakdown)
        outcome = await self._orchestrator.submit(self.contact, results, template, breakdown)
        return ResultsView(content=results, breakdown=breakdown, submission=outcome)

    async def retry_submission(self) -> SubmissionOutcome:
        if self._results_inputs is None or self.contact is None:
            return self._orchestrator.outcome()
        results, template, breakdown = self._results_inputs
        return await self._orchestrator.submit(self.contact, results, template, breakdown)

    def restart(self) -> None:
        self._store.clear()
        self._orchestrator.reset()
        self.screen = Screen.home
        self.error = None
        self.category = None
        self.navigator = None
        self.form_data = None
        self.contact = None
        self._results_inputs = None

    def snapshot(self) -> SelectionSnapshot:
        return self._store.snapshot()

    def _require_navigator(self) -> WizardNavigator:
        if self.navigator is None:
            raise ValueError("No category is open")
        return self.navigator

    def _known_category(self, category_id: str) -> Category | None:
        if self.home is None:
            return None
        return next((c for c in self.home.categories if c.id == category_id), None)

    def _fail(self, screen: Screen, kind: str, message: str, category_id: str | None = None) -> None:
        self.screen = screen
        self.error = ScreenError(kind=kind, message=message)
        self._logger.error(message, extra={"category_id": category_id, "reason": kind})
