from __future__ import annotations

import asyncio

import pytest

from estimate_wizard.application.exceptions import DeliveryError, NotFoundError
from estimate_wizard.application.ports.content_source import ContentSourcePort
from estimate_wizard.application.ports.crm import CrmPort
from estimate_wizard.application.ports.email_delivery import EmailDeliveryPort
from estimate_wizard.application.use_cases.lead_submission import LeadSubmissionOrchestrator
from estimate_wizard.application.use_cases.wizard_session import WizardSession
from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.domain.entities.content import (
    CalculatorData,
    Category,
    EmailTemplate,
    FormFields,
    HomeContent,
    Option,
    Question,
    ResultsContent,
)
from estimate_wizard.infrastructure.store.memory_selection_store import MemorySelectionStore


def make_kitchens() -> CalculatorData:
    return CalculatorData(
        calculator_id=12,
        title="Kitchens",
        slug="calculator-kitchens",
        form_fields=FormFields(headline="Almost done", description="Tell us where to send it", footer_text=""),
        questions=(
            Question(
                position=0,
                text="What size is your kitchen?",
                options=(
                    Option("Small", "Up to 100 sq ft", "1000", "2000"),
                    Option("Large", "Over 100 sq ft", "3000", "5000"),
                ),
            ),
            Question(
                position=1,
                text="Countertops?",
                options=(
                    Option("Laminate", "", "500", "500"),
                    Option("Quartz", "", "800", "1200"),
                ),
            ),
        ),
    )


RESULTS = ResultsContent(
    headline="Your Estimate",
    description="Here is what we calculated.",
    footer_text="Call us.",
    disclaimer="Prices vary.",
)

TEMPLATE = EmailTemplate(subject="Your Estimate Results", html_body="<p>Thanks!</p>")

CONTACT = FormContact(name="Jordan Lee", email="jordan@example.com", zip="12345", phone="555-123-4567")


class FakeContentSource(ContentSourcePort):
    def __init__(self, categories: dict[str, CalculatorData] | None = None) -> None:
        self.categories = categories if categories is not None else {"kitchens": make_kitchens()}
        self.home = HomeContent(
            headline="Pick a project",
            help_text="Select a category",
            categories=(
                Category(id="kitchens", title="Kitchens", description="Kitchen remodels"),
                Category(id="home-renovations", title="Home Renovations", description="Whole home"),
            ),
        )
        self.calls: list[str] = []
        self.results_error: Exception | None = None
        self.results_gate: asyncio.Event | None = None

    async def fetch_home_content(self) -> HomeContent:
        self.calls.append("home")
        return self.home

    async def fetch_category_content(self, category_id: str) -> CalculatorData:
        self.calls.append(f"category:{category_id}")
        if category_id not in self.categories:
            raise NotFoundError(f"Unknown category ID: {category_id}")
        return self.categories[category_id]

    async def fetch_results_content(self) -> ResultsContent:
        self.calls.append("results")
        if self.results_gate is not None:
            await self.results_gate.wait()
        if self.results_error is not None:
            raise self.results_error
        return RESULTS

    async def fetch_email_template(self) -> EmailTemplate:
        self.calls.append("email")
        return TEMPLATE


class RecordingEmail(EmailDeliveryPort):
    def __init__(self, fail_notification: bool = False) -> None:
        self.confirmations: list[dict[str, str]] = []
        self.notifications: list[tuple[FormContact, str]] = []
        self.fail_notification = fail_notification

    async def send_confirmation_email(self, to_email: str, to_name: str, html_body: str, subject: str) -> None:
        await asyncio.sleep(0)
        self.confirmations.append(
            {"to_email": to_email, "to_name": to_name, "html_body": html_body, "subject": subject}
        )

    async def send_internal_notification(self, contact: FormContact, breakdown_html: str) -> None:
        await asyncio.sleep(0)
        if self.fail_notification:
            raise DeliveryError("relay unavailable")
        self.notifications.append((contact, breakdown_html))


class RecordingCrm(CrmPort):
    def __init__(self, fail: bool = False) -> None:
        self.contacts: list[FormContact] = []
        self.fail = fail

    async def create_account_and_contact(self, contact: FormContact) -> str:
        await asyncio.sleep(0)
        if self.fail:
            raise DeliveryError("CRM rejected request")
        self.contacts.append(contact)
        return f"acct-{len(self.contacts)}"


@pytest.fixture
def kitchens() -> CalculatorData:
    return make_kitchens()


@pytest.fixture
def store() -> MemorySelectionStore:
    return MemorySelectionStore()


@pytest.fixture
def content() -> FakeContentSource:
    return FakeContentSource()


@pytest.fixture
def email() -> RecordingEmail:
    return RecordingEmail()


@pytest.fixture
def crm() -> RecordingCrm:
    return RecordingCrm()


@pytest.fixture
def orchestrator(email: RecordingEmail, crm: RecordingCrm) -> LeadSubmissionOrchestrator:
    return LeadSubmissionOrchestrator(email=email, crm=crm)


@pytest.fixture
def session(content: FakeContentSource, store: MemorySelectionStore, orchestrator: LeadSubmissionOrchestrator) -> WizardSession:
    return WizardSession(content=content, store=store, orchestrator=orchestrator)
