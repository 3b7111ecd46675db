from __future__ import annotations

import logging
from typing import Any

from estimate_wizard.application.exceptions import ContentFetchError, MalformedContentError, NotFoundError
from estimate_wizard.application.ports.content_source import ContentSourcePort
from estimate_wizard.application.utils.formatting import slugify_category_id
from estimate_wizard.core.config import settings
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
from estimate_wizard.infrastructure.wordpress.fallback_copy import (
    DEFAULT_EMAIL_SUBJECT,
    FALLBACK_EMAIL_TEMPLATE,
    FALLBACK_RESULTS,
    category_detail_content,
)
from estimate_wizard.infrastructure.wordpress.http_client import WordPressHttpClient


HOME_SLUG = "calculator-home"
RESULTS_SLUG = "calculator-results"
EMAIL_SLUG = "calculator-email"


class WordPressContentSource(ContentSourcePort):
    def __init__(
        self,
        client: WordPressHttpClient,
        category_slugs: dict[str, str] | None = None,
        fallback_enabled: bool | None = None,
    ) -> None:
        self._client = client
        self._category_slugs = dict(category_slugs if category_slugs is not None else settings.CATEGORY_SLUGS)
        self._fallback_enabled = settings.CONTENT_FALLBACK_ENABLED if fallback_enabled is None else fallback_enabled
        self._logger = logging.getLogger(__name__)

    async def fetch_home_content(self) -> HomeContent:
        payload = await self._client.get_content(HOME_SLUG)
        data = _payload_data(payload, HOME_SLUG)
        questions = data.get("questions")
        if not isinstance(questions, list):
            questions = []
        home_question = questions[0] if questions and isinstance(questions[0], dict) else None
        raw_options = home_question.get("option") if home_question else None
        if not raw_options:
            raise MalformedContentError("Invalid API response: No categories found")
        if not isinstance(raw_options, list):
            raise MalformedContentError(f"Categories of {HOME_SLUG} are not a list")

        categories = []
        for raw in raw_options:
            if not isinstance(raw, dict):
                continue
            title = str(raw.get("short_description") or "").strip()
            if not title:
                continue
            long_description = str(raw.get("long_description") or "")
            categories.append(
                Category(
                    id=slugify_category_id(title),
                    title=title,
                    description=long_description or f"Professional {title.lower()} estimates",
                    image=_image_url(raw.get("featured_image")),
                    detail_content=category_detail_content(title, long_description),
                )
            )

        calculator_title = str(data.get("calculator_title") or "")
        return HomeContent(
            headline=home_question.get("question_text")
            or f"{calculator_title} - Professional Estimate Calculator",
            help_text=home_question.get("question_help_text")
            or "Select a category below to get started with your construction estimate",
            categories=tuple(categories),
        )

    async def fetch_category_content(self, category_id: str) -> CalculatorData:
        slug = self._category_slugs.get(category_id)
        if not slug:
            self._logger.warning("Unknown category requested", extra={"category_id": category_id})
            raise NotFoundError(f"Unknown category ID: {category_id}")
        payload = await self._client.get_content(slug)
        return _parse_calculator_data(_payload_data(payload, slug), slug)

    async def fetch_results_content(self) -> ResultsContent:
        try:
            payload = await self._client.get_content(RESULTS_SLUG)
        except ContentFetchError as e:
            if not self._fallback_enabled:
                raise
            self._logger.warning(
                "Results content unavailable, using fallback copy",
                extra={"slug": RESULTS_SLUG, "error": str(e)},
            )
            return FALLBACK_RESULTS

        return ResultsContent(
            headline=str(payload.get("calculator_results_headline") or ""),
            description=str(payload.get("calculator_results_description") or ""),
            footer_text=str(payload.get("calculator_results_footer_text") or ""),
            disclaimer=str(payload.get("calculator_results_disclaimer") or ""),
        )

    async def fetch_email_template(self) -> EmailTemplate:
        try:
            payload = await self._client.get_content(EMAIL_SLUG)
        except ContentFetchError as e:
            if not self._fallback_enabled:
                raise
            self._logger.warning(
                "Email template unavailable, using fallback copy",
                extra={"slug": EMAIL_SLUG, "error": str(e)},
            )
            return FALLBACK_EMAIL_TEMPLATE

        return EmailTemplate(
            subject=payload.get("email_subject") or payload.get("calculator_email_subject") or DEFAULT_EMAIL_SUBJECT,
            html_body=payload.get("calculator_email_body")
            or payload.get("email_html")
            or payload.get("calculator_email_html")
            or "",
        )


def _payload_data(payload: dict[str, Any], slug: str) -> dict[str, Any]:
    data = payload.get("data")
    if not isinstance(data, dict):
        raise MalformedContentError(f"Response for {slug} has no data")
    return data


def _image_url(image: Any) -> str:
    if isinstance(image, dict):
        return str(image.get("url") or "")
    if isinstance(image, str):
        return image
    return ""


def _parse_calculator_data(data: dict[str, Any], slug: str) -> CalculatorData:
    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list):
        raise MalformedContentError(f'Custom field "questions" not found for {slug}')

    questions = []
    for position, raw in enumerate(raw_questions):
        if not isinstance(raw, dict):
            raise MalformedContentError(f"Question {position} of {slug} is not an object")
        options = tuple(
            Option(
                short_description=str(opt.get("short_description") or ""),
                long_description=str(opt.get("long_description") or ""),
                minimum_cost=opt.get("minimum_cost", ""),
                maximum_cost=opt.get("maximum_cost", ""),
                image=_image_url(opt.get("featured_image")),
            )
            for opt in (raw.get("option") or [])
            if isinstance(opt, dict)
        )
        questions.append(
            Question(
                position=position,
                text=str(raw.get("question_text") or ""),
                help_text=str(raw.get("question_help_text") or ""),
                options=options,
            )
        )

    form_fields = data.get("form_fields")
    if not isinstance(form_fields, dict):
        form_fields = {}
    calculator_id = data.get("calculator_id")
    if calculator_id is not None:
        try:
            calculator_id = int(calculator_id)
        except (TypeError, ValueError) as e:
            raise MalformedContentError(f"calculator_id of {slug} is not a number") from e
    return CalculatorData(
        calculator_id=calculator_id,
        title=str(data.get("calculator_title") or ""),
        slug=str(data.get("calculator_slug") or slug),
        form_fields=FormFields(
            headline=str(form_fields.get("form_headline") or ""),
            description=str(form_fields.get("form_description") or ""),
            footer_text=str(form_fields.get("form_footer_text") or ""),
        ),
        questions=tuple(questions),
    )
