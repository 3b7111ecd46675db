from functools import lru_cache
import logging

from estimate_wizard.application.ports.content_source import ContentSourcePort
from estimate_wizard.application.ports.crm import CrmPort
from estimate_wizard.application.ports.email_delivery import EmailDeliveryPort
from estimate_wizard.application.ports.session_store import SessionStorePort
from estimate_wizard.application.use_cases.estimate import EstimateAggregator
from estimate_wizard.application.use_cases.lead_submission import LeadSubmissionOrchestrator
from estimate_wizard.application.use_cases.wizard_session import WizardSession
from estimate_wizard.core.config import ApiConfig, settings
from estimate_wizard.infrastructure.crm.jobtread_relay import JobTreadCrmRelay
from estimate_wizard.infrastructure.crm.mock_crm import MockCrm
from estimate_wizard.infrastructure.email.mock_email import MockEmailDelivery
from estimate_wizard.infrastructure.email.sendgrid_relay import WordPressEmailRelay
from estimate_wizard.infrastructure.store.memory_selection_store import MemorySelectionStore
from estimate_wizard.infrastructure.store.memory_session_store import MemorySessionStore
from estimate_wizard.infrastructure.wordpress.content_api import WordPressContentSource
from estimate_wizard.infrastructure.wordpress.http_client import WordPressHttpClient


_session_store: MemorySessionStore | None = None


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_http_client() -> WordPressHttpClient:
    return WordPressHttpClient(config=ApiConfig.from_settings(settings))


@lru_cache
def get_content_source() -> ContentSourcePort:
    return WordPressContentSource(client=get_http_client())


@lru_cache
def get_email_delivery() -> EmailDeliveryPort:
    logger = logging.getLogger(__name__)
    if _is_local():
        logger.info("Using MockEmailDelivery (ENV=dev/local)")
        return MockEmailDelivery()
    return WordPressEmailRelay(client=get_http_client())


@lru_cache
def get_crm() -> CrmPort:
    logger = logging.getLogger(__name__)
    if _is_local():
        logger.info("Using MockCrm (ENV=dev/local)")
        return MockCrm()
    return JobTreadCrmRelay(client=get_http_client())


async def close_http_client() -> None:
    """Close the shared WordPress client and drop the adapters built on it."""
    if not get_http_client.cache_info().currsize:
        return
    await get_http_client().aclose()
    for factory in (get_http_client, get_content_source, get_email_delivery, get_crm):
        factory.cache_clear()


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore()
    return _session_store


def build_wizard_session() -> WizardSession:
    return WizardSession(
        content=get_content_source(),
        store=MemorySelectionStore(),
        orchestrator=LeadSubmissionOrchestrator(email=get_email_delivery(), crm=get_crm()),
        aggregator=EstimateAggregator(currency_symbol=settings.CURRENCY_SYMBOL),
    )


def get_session_factory():
    return build_wizard_session
