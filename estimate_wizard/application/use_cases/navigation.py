from __future__ import annotations

import logging
from dataclasses import dataclass

from estimate_wizard.application.ports.selection_store import SelectionStorePort
from estimate_wizard.domain.entities.content import CalculatorData, Question


@dataclass(frozen=True)
class NavigationResult:
    """Result of a next/previous request."""

    moved: bool
    current_index: int
    ready: bool = False  # all questions answered, caller may show the form
    calculator_data: CalculatorData | None = None


class WizardNavigator:
    """Question-by-question flow through one category. Always starts at question 0."""

    def __init__(self, category_id: str, calculator_data: CalculatorData, store: SelectionStorePort) -> None:
        self._category_id = category_id
        self._data = calculator_data
        self._store = store
        self._index = 0
        self._logger = logging.getLogger(__name__)

    @property
    def category_id(self) -> str:
        return self._category_id

    @property
    def calculator_data(self) -> CalculatorData:
        return self._data

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def question_count(self) -> int:
        return self._data.question_count

    @property
    def current_question(self) -> Question | None:
        if not self._data.questions:
            return None
        return self._data.questions[self._index]

    @property
    def is_last_question(self) -> bool:
        return self._index >= self.question_count - 1

    def is_answered(self, question_index: int) -> bool:
        return self._store.get_option(self._category_id, question_index) is not None

    @property
    def answered_count(self) -> int:
        return sum(1 for i in range(self.question_count) if self.is_answered(i))

    @property
    def is_ready(self) -> bool:
        return all(self.is_answered(i) for i in range(self.question_count))

    @property
    def can_advance(self) -> bool:
        if self.is_last_question:
            return self.is_ready
        return self.is_answered(self._index)

    def select_option(self, question_index: int, option_index: int) -> bool:
        """
        Toggle an option for a question. Picking the option that is already
        selected clears the answer. Returns True if the option is selected afterwards.
        """
        if not 0 <= question_index < self.question_count:
            raise ValueError(f"Question {question_index} does not exist in category {self._category_id}")
        options = self._data.questions[question_index].options
        if not 0 <= option_index < len(options):
            raise ValueError(f"Option {option_index} does not exist for question {question_index}")
        selected = self._store.toggle_option(self._category_id, question_index, option_index)
        self._logger.debug(
            "Option toggled",
            extra={"category_id": self._category_id, "question_index": question_index, "selected": selected},
        )
        return selected

    def next(self) -> NavigationResult:
        if not self.is_last_question:
            if not self.is_answered(self._index):
                return NavigationResult(moved=False, current_index=self._index)
            self._index += 1
            return NavigationResult(moved=True, current_index=self._index)

        if not self.is_ready:
            return NavigationResult(moved=False, current_index=self._index)
        return NavigationResult(
            moved=False,
            current_index=self._index,
            ready=True,
            calculator_data=self._data,
        )

    def previous(self) -> NavigationResult:
        if self._index == 0:
            return NavigationResult(moved=False, current_index=0)
        self._index -= 1
        return NavigationResult(moved=True, current_index=self._index)
