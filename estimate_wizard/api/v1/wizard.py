from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException

from estimate_wizard.api.v1.schemas import (
    BreakdownSchema,
    CategorySchema,
    ContactAcceptedSchema,
    ContactRequestSchema,
    DeepLinkRequestSchema,
    HomeSchema,
    LineItemSchema,
    NavigatorSchema,
    OptionSchema,
    QuestionSchema,
    ResultsSchema,
    ScreenSchema,
    SelectionRequestSchema,
    SessionCreatedSchema,
    SnapshotSchema,
    SubmissionSchema,
)
from estimate_wizard.application.exceptions import ContactValidationError
from estimate_wizard.application.ports.session_store import SessionStorePort
from estimate_wizard.application.use_cases.wizard_session import WizardSession
from estimate_wizard.domain.entities.submission_state import SubmissionOutcome
from estimate_wizard.wiring.dependencies import get_session_factory, get_session_store


router = APIRouter()
logger = logging.getLogger(__name__)

_ERROR_STATUS = {"not_found": 404, "cost_parse": 422}


def _session(session_id: str, store: SessionStorePort = Depends(get_session_store)) -> WizardSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _raise_screen_error(session: WizardSession) -> None:
    error = session.error
    if error is None:
        raise HTTPException(status_code=500, detail="Unknown error")
    raise HTTPException(
        status_code=_ERROR_STATUS.get(error.kind, 502),
        detail={"screen": session.screen.value, "kind": error.kind, "message": error.message},
    )


def _navigator_view(session: WizardSession) -> NavigatorSchema:
    navigator = session.navigator
    if navigator is None:
        raise HTTPException(status_code=400, detail="No category is open")
    data = navigator.calculator_data
    question = navigator.current_question
    question_schema = None
    if question is not None:
        selected = session.store.get_option(navigator.category_id, navigator.current_index)
        question_schema = QuestionSchema(
            index=navigator.current_index,
            text=question.text,
            help_text=question.help_text,
            options=[
                OptionSchema(
                    index=i,
                    short_description=opt.short_description,
                    long_description=opt.long_description,
                    minimum_cost=str(opt.minimum_cost),
                    maximum_cost=str(opt.maximum_cost),
                    image=opt.image,
                    selected=selected == i,
                )
                for i, opt in enumerate(question.options)
            ],
        )
    return NavigatorSchema(
        screen=session.screen.value,
        category_id=navigator.category_id,
        title=data.title,
        current_index=navigator.current_index,
        question_count=navigator.question_count,
        answered_count=navigator.answered_count,
        can_advance=navigator.can_advance,
        ready=navigator.is_ready,
        question=question_schema,
        form_headline=data.form_fields.headline,
        form_description=data.form_fields.description,
        form_footer_text=data.form_fields.footer_text,
    )


def _submission_view(outcome: SubmissionOutcome) -> SubmissionSchema:
    return SubmissionSchema(
        status=outcome.status.value,
        fired=outcome.fired,
        completed_steps=[step.value for step in outcome.completed_steps],
        failed_step=outcome.failed_step.value if outcome.failed_step else None,
        error=outcome.error,
        account_id=outcome.account_id,
    )


@router.post("/sessions", response_model=SessionCreatedSchema, status_code=201)
def create_session(
    store: SessionStorePort = Depends(get_session_store),
    factory: Callable[[], WizardSession] = Depends(get_session_factory),
):
    session_id = store.add(factory())
    logger.info("Wizard session created", extra={"session_id": session_id})
    return SessionCreatedSchema(session_id=session_id)


@router.get("/sessions/{session_id}/home", response_model=HomeSchema)
async def home(session: WizardSession = Depends(_session)):
    content = await session.load_home()
    if content is None:
        _raise_screen_error(session)
    return HomeSchema(
        headline=content.headline,
        help_text=content.help_text,
        categories=[
            CategorySchema(
                id=c.id,
                title=c.title,
                description=c.description,
                image=c.image,
                detail_content=c.detail_content,
            )
            for c in content.categories
        ],
    )


@router.post("/sessions/{session_id}/categories/{category_id}", response_model=NavigatorSchema)
async def open_category(category_id: str, session: WizardSession = Depends(_session)):
    if await session.open_category(category_id) is None:
        _raise_screen_error(session)
    return _navigator_view(session)


@router.post("/sessions/{session_id}/deep-link", response_model=NavigatorSchema)
async def deep_link(req: DeepLinkRequestSchema, session: WizardSession = Depends(_session)):
    if await session.open_category_param(req.category) is None:
        _raise_screen_error(session)
    return _navigator_view(session)


@router.post("/sessions/{session_id}/selections", response_model=NavigatorSchema)
def select_option(req: SelectionRequestSchema, session: WizardSession = Depends(_session)):
    try:
        session.select_option(req.question_index, req.option_index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _navigator_view(session)


@router.post("/sessions/{session_id}/next", response_model=NavigatorSchema)
def next_question(session: WizardSession = Depends(_session)):
    try:
        session.next_question()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _navigator_view(session)


@router.post("/sessions/{session_id}/previous", response_model=NavigatorSchema)
def previous_question(session: WizardSession = Depends(_session)):
    try:
        session.previous_question()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _navigator_view(session)


@router.post("/sessions/{session_id}/back-to-home", response_model=ScreenSchema)
def back_to_home(session: WizardSession = Depends(_session)):
    session.back_to_home()
    return ScreenSchema(screen=session.screen.value)


@router.post("/sessions/{session_id}/back-to-category", response_model=NavigatorSchema)
def back_to_category(session: WizardSession = Depends(_session)):
    try:
        session.back_to_category()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _navigator_view(session)


@router.post("/sessions/{session_id}/contact", response_model=ContactAcceptedSchema)
def submit_contact(req: ContactRequestSchema, session: WizardSession = Depends(_session)):
    try:
        contact = session.submit_contact(name=req.name, email=req.email, zip=req.zip, phone=req.phone)
    except ContactValidationError as e:
        raise HTTPException(status_code=422, detail={"field_errors": e.field_errors})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ContactAcceptedSchema(screen=session.screen.value, name=contact.name, email=contact.email)


@router.post("/sessions/{session_id}/results", response_model=ResultsSchema)
async def results(session: WizardSession = Depends(_session)):
    try:
        view = await session.load_results()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if view is None:
        _raise_screen_error(session)

    breakdown = view.breakdown
    return ResultsSchema(
        headline=view.content.headline,
        description=view.content.description,
        footer_text=view.content.footer_text,
        disclaimer=view.content.disclaimer,
        is_fallback=view.content.is_fallback,
        breakdown=BreakdownSchema(
            category_id=breakdown.category_id,
            line_items=[
                LineItemSchema(
                    question_index=item.question_index,
                    option_index=item.option_index,
                    question_text=item.question_text,
                    description=item.description,
                    minimum_cost=item.minimum_cost,
                    maximum_cost=item.maximum_cost,
                    formatted_cost=item.formatted_cost,
                    image=item.image,
                )
                for item in breakdown.line_items
            ],
            minimum_total=breakdown.minimum_total,
            maximum_total=breakdown.maximum_total,
            formatted_total=breakdown.formatted_total,
        ),
        submission=_submission_view(view.submission),
    )


@router.post("/sessions/{session_id}/submission/retry", response_model=SubmissionSchema)
async def retry_submission(session: WizardSession = Depends(_session)):
    outcome = await session.retry_submission()
    return _submission_view(outcome)


@router.post("/sessions/{session_id}/restart", response_model=ScreenSchema)
def restart(session: WizardSession = Depends(_session)):
    session.restart()
    return ScreenSchema(screen=session.screen.value)


@router.get("/sessions/{session_id}/snapshot", response_model=SnapshotSchema)
def snapshot(session: WizardSession = Depends(_session)):
    snap = session.snapshot()
    return SnapshotSchema(
        selections=snap.selections,
        total_categories=snap.total_categories,
        total_questions=snap.total_questions,
        completed_categories=list(snap.completed_categories),
        incomplete_categories=list(snap.incomplete_categories),
    )
