from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SessionCreatedSchema(BaseModel):
    session_id: str


class CategorySchema(BaseModel):
    id: str
    title: str
    description: str
    image: str = ""
    detail_content: str = ""


class HomeSchema(BaseModel):
    headline: str
    help_text: str
    categories: list[CategorySchema] = Field(default_factory=list)


class OptionSchema(BaseModel):
    index: int
    short_description: str
    long_description: str
    minimum_cost: str
    maximum_cost: str
    image: str = ""
    selected: bool = False


class QuestionSchema(BaseModel):
    index: int
    text: str
    help_text: str = ""
    options: list[OptionSchema] = Field(default_factory=list)


class NavigatorSchema(BaseModel):
    screen: str
    category_id: str
    title: str
    current_index: int
    question_count: int
    answered_count: int
    can_advance: bool
    ready: bool
    question: QuestionSchema | None = None
    form_headline: str = ""
    form_description: str = ""
    form_footer_text: str = ""


class SelectionRequestSchema(BaseModel):
    question_index: int = Field(ge=0)
    option_index: int = Field(ge=0)


class DeepLinkRequestSchema(BaseModel):
    category: str = Field(min_length=1)


class ContactRequestSchema(BaseModel):
    name: str = ""
    email: str = ""
    zip: str = ""
    phone: str = ""


class ContactAcceptedSchema(BaseModel):
    screen: str
    name: str
    email: str


class LineItemSchema(BaseModel):
    question_index: int
    option_index: int
    question_text: str
    description: str
    minimum_cost: int
    maximum_cost: int
    formatted_cost: str
    image: str = ""


class BreakdownSchema(BaseModel):
    category_id: str
    line_items: list[LineItemSchema] = Field(default_factory=list)
    minimum_total: int
    maximum_total: int
    formatted_total: str


class SubmissionSchema(BaseModel):
    status: str
    fired: bool
    completed_steps: list[str] = Field(default_factory=list)
    failed_step: str | None = None
    error: str | None = None
    account_id: str | None = None


class ResultsSchema(BaseModel):
    headline: str
    description: str
    footer_text: str
    disclaimer: str
    is_fallback: bool = False
    breakdown: BreakdownSchema
    submission: SubmissionSchema


class SnapshotSchema(BaseModel):
    selections: dict[str, dict[int, int]] = Field(default_factory=dict)
    total_categories: int
    total_questions: int
    completed_categories: list[str] = Field(default_factory=list)
    incomplete_categories: list[str] = Field(default_factory=list)


class ScreenSchema(BaseModel):
    screen: str
    error: dict[str, Any] | None = None
