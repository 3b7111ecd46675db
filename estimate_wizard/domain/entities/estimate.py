from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItem:
    question_index: int
    option_index: int
    question_text: str
    description: str
    minimum_cost: int
    maximum_cost: int
    formatted_cost: str
    image: str = ""


@dataclass(frozen=True)
class EstimateBreakdown:
    category_id: str
    line_items: tuple[LineItem, ...]
    minimum_total: int
    maximum_total: int
    formatted_total: str

    @property
    def is_empty(self) -> bool:
        return not self.line_items
