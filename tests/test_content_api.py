"""
Tests for the WordPress content adapter over a mocked transport.
"""

from __future__ import annotations

import httpx
import pytest

from conftest import RecordingCrm, RecordingEmail
from estimate_wizard.application.exceptions import MalformedContentError, NetworkError, NotFoundError
from estimate_wizard.application.use_cases.lead_submission import LeadSubmissionOrchestrator
from estimate_wizard.application.use_cases.wizard_session import Screen, WizardSession
from estimate_wizard.core.config import ApiConfig
from estimate_wizard.infrastructure.store.memory_selection_store import MemorySelectionStore
from estimate_wizard.infrastructure.wordpress.content_api import WordPressContentSource
from estimate_wizard.infrastructure.wordpress.http_client import WordPressHttpClient


BASE_URL = "http://cms.test/wp-json/estimate-calculator/v1"

KITCHENS_PAYLOAD = {
    "success": True,
    "data": {
        "calculator_id": 42,
        "calculator_title": "Kitchens",
        "calculator_slug": "calculator-kitchens",
        "form_fields": {"form_headline": "Almost there", "form_description": "", "form_footer_text": ""},
        "questions": [
            {
                "question_text": "What size is your kitchen?",
                "question_help_text": "Pick the closest",
                "option": [
                    {
                        "short_description": "Small",
                        "long_description": "",
                        "minimum_cost": "1000",
                        "maximum_cost": "2000",
                        "featured_image": {"url": "https://cms.test/small.jpg"},
                    },
                    {
                        "short_description": "Large",
                        "long_description": "",
                        "minimum_cost": "3000",
                        "maximum_cost": "5000",
                        "featured_image": False,
                    },
                ],
            }
        ],
    },
}

HOME_PAYLOAD = {
    "success": True,
    "data": {
        "calculator_title": "RPK",
        "questions": [
            {
                "question_text": "What are you planning?",
                "question_help_text": "",
                "option": [
                    {"short_description": "Kitchens", "long_description": "", "featured_image": {"url": "k.jpg"}},
                    {"short_description": "Home Renovations", "long_description": "Whole home", "featured_image": {}},
                ],
            }
        ],
    },
}


class Recorder:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


async def _no_sleep(_: float) -> None:
    return None


def _source(recorder: Recorder, retries: int = 2, fallback: bool = True) -> WordPressContentSource:
    client = WordPressHttpClient(
        config=ApiConfig(base_url=BASE_URL, timeout_ms=500, retries=retries, retry_backoff_seconds=0),
        transport=httpx.MockTransport(recorder),
        sleep=_no_sleep,
    )
    return WordPressContentSource(
        client=client,
        category_slugs={"kitchens": "calculator-kitchens"},
        fallback_enabled=fallback,
    )


@pytest.mark.asyncio
async def test_category_content_is_parsed():
    recorder = Recorder([httpx.Response(200, json=KITCHENS_PAYLOAD)])

    data = await _source(recorder).fetch_category_content("kitchens")

    request = recorder.requests[0]
    assert request.url.path == "/wp-json/estimate-calculator/v1/get-calculator-data"
    assert request.url.params["slug"] == "calculator-kitchens"
    assert data.calculator_id == 42
    assert data.form_fields.headline == "Almost there"
    assert data.questions[0].help_text == "Pick the closest"
    assert data.questions[0].options[0].image == "https://cms.test/small.jpg"
    assert data.questions[0].options[1].image == ""
    assert data.questions[0].options[1].maximum_cost == "5000"


@pytest.mark.asyncio
async def test_unknown_category_raises_without_request():
    recorder = Recorder([httpx.Response(200, json=KITCHENS_PAYLOAD)])

    with pytest.raises(NotFoundError):
        await _source(recorder).fetch_category_content("gazebos")
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_404_is_not_found_and_not_retried():
    recorder = Recorder([httpx.Response(404, json={"code": "calculator_not_found"})])

    with pytest.raises(NotFoundError):
        await _source(recorder).fetch_category_content("kitchens")
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_transient_failures_are_retried():
    recorder = Recorder(
        [
            httpx.ConnectError("boom"),
            httpx.Response(503),
            httpx.Response(200, json=KITCHENS_PAYLOAD),
        ]
    )

    data = await _source(recorder).fetch_category_content("kitchens")

    assert data.title == "Kitchens"
    assert len(recorder.requests) == 3


@pytest.mark.asyncio
async def test_retries_are_bounded():
    recorder = Recorder([httpx.ReadTimeout("slow")])

    with pytest.raises(NetworkError):
        await _source(recorder, retries=2).fetch_category_content("kitchens")
    assert len(recorder.requests) == 3


@pytest.mark.asyncio
async def test_success_false_is_malformed():
    recorder = Recorder([httpx.Response(200, json={"success": False})])

    with pytest.raises(MalformedContentError):
        await _source(recorder).fetch_category_content("kitchens")


@pytest.mark.asyncio
async def test_home_content_builds_categories():
    recorder = Recorder([httpx.Response(200, json=HOME_PAYLOAD)])

    home = await _source(recorder).fetch_home_content()

    assert recorder.requests[0].url.params["slug"] == "calculator-home"
    assert home.headline == "What are you planning?"
    assert home.help_text.startswith("Select a category")
    assert [c.id for c in home.categories] == ["kitchens", "home-renovations"]
    assert home.categories[0].description == "Professional kitchens estimates"
    assert home.categories[0].detail_content.startswith("Transform your kitchen")
    assert home.categories[1].description == "Whole home"


@pytest.mark.asyncio
async def test_home_without_categories_is_malformed():
    recorder = Recorder([httpx.Response(200, json={"success": True, "data": {"questions": []}})])

    with pytest.raises(MalformedContentError):
        await _source(recorder).fetch_home_content()


@pytest.mark.asyncio
async def test_results_and_email_template_parsed():
    recorder = Recorder(
        [
            httpx.Response(
                200,
                json={
                    "success": True,
                    "calculator_results_headline": "Your numbers",
                    "calculator_results_description": "desc",
                    "calculator_results_footer_text": "footer",
                    "calculator_results_disclaimer": "disclaimer",
                },
            ),
            httpx.Response(200, json={"success": True, "calculator_email_body": "<p>Hi</p>"}),
        ]
    )
    source = _source(recorder)

    results = await source.fetch_results_content()
    template = await source.fetch_email_template()

    assert results.headline == "Your numbers"
    assert results.is_fallback is False
    assert template.html_body == "<p>Hi</p>"
    assert template.subject == "Your Estimate Results"
    assert template.is_fallback is False


@pytest.mark.asyncio
async def test_fallback_copy_is_flagged(caplog):
    recorder = Recorder([httpx.Response(404)])
    source = _source(recorder)

    results = await source.fetch_results_content()
    template = await source.fetch_email_template()

    assert results.is_fallback is True
    assert results.headline == "Your Estimate Results"
    assert template.is_fallback is True
    assert "fallback" in caplog.text


@pytest.mark.asyncio
async def test_fallback_can_be_disabled():
    recorder = Recorder([httpx.Response(404)])

    with pytest.raises(NotFoundError):
        await _source(recorder, fallback=False).fetch_results_content()


@pytest.mark.asyncio
async def test_non_numeric_calculator_id_is_malformed():
    payload = {**KITCHENS_PAYLOAD, "data": {**KITCHENS_PAYLOAD["data"], "calculator_id": "abc"}}
    recorder = Recorder([httpx.Response(200, json=payload)])

    with pytest.raises(MalformedContentError):
        await _source(recorder).fetch_category_content("kitchens")


@pytest.mark.asyncio
async def test_home_skips_entries_that_are_not_objects():
    question = {**HOME_PAYLOAD["data"]["questions"][0]}
    question["option"] = [*question["option"], "stray", None]
    payload = {"success": True, "data": {**HOME_PAYLOAD["data"], "questions": [question]}}
    recorder = Recorder([httpx.Response(200, json=payload)])

    home = await _source(recorder).fetch_home_content()

    assert [c.id for c in home.categories] == ["kitchens", "home-renovations"]


@pytest.mark.asyncio
@pytest.mark.parametrize("option", ["Kitchens", {"short_description": "Kitchens"}])
async def test_home_categories_must_be_a_list(option):
    payload = {"success": True, "data": {"questions": [{"question_text": "Pick", "option": option}]}}
    recorder = Recorder([httpx.Response(200, json=payload)])

    with pytest.raises(MalformedContentError):
        await _source(recorder).fetch_home_content()


@pytest.mark.asyncio
async def test_bad_payloads_become_session_errors():
    payload = {**KITCHENS_PAYLOAD, "data": {**KITCHENS_PAYLOAD["data"], "calculator_id": "abc"}}
    recorder = Recorder([httpx.Response(200, json=payload)])
    session = WizardSession(
        content=_source(recorder),
        store=MemorySelectionStore(),
        orchestrator=LeadSubmissionOrchestrator(email=RecordingEmail(), crm=RecordingCrm()),
    )

    assert await session.open_category("kitchens") is None
    assert session.screen is Screen.category
    assert session.error.kind == "malformed"
