from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Category:
    id: str
    title: str
    description: str
    image: str = ""
    detail_content: str = ""


@dataclass(frozen=True)
class Option:
    short_description: str
    long_description: str
    minimum_cost: str | int  # raw CMS value, parsed during aggregation
    maximum_cost: str | int
    image: str = ""


@dataclass(frozen=True)
class Question:
    position: int
    text: str
    help_text: str = ""
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class FormFields:
    headline: str = ""
    description: str = ""
    footer_text: str = ""


@dataclass(frozen=True)
class CalculatorData:
    calculator_id: int | None
    title: str
    slug: str
    form_fields: FormFields = field(default_factory=FormFields)
    questions: tuple[Question, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class HomeContent:
    headline: str
    help_text: str
    categories: tuple[Category, ...] = ()


@dataclass(frozen=True)
class ResultsContent:
    headline: str
    description: str
    footer_text: str
    disclaimer: str
    is_fallback: bool = False


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html_body: str
    is_fallback: bool = False
