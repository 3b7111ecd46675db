from __future__ import annotations

from estimate_wizard.application.ports.selection_store import SelectionStorePort
from estimate_wizard.domain.entities.selection_state import SelectionSnapshot


class MemorySelectionStore(SelectionStorePort):
    def __init__(self) -> None:
        self._selections: dict[str, dict[int, int]] = {}

    def set_option(self, category_id: str, question_index: int, option_index: int) -> None:
        self._selections.setdefault(category_id, {})[question_index] = option_index

    def remove_option(self, category_id: str, question_index: int) -> None:
        category = self._selections.get(category_id)
        if category is None:
            return
        # the emptied category stays registered and reports as incomplete
        category.pop(question_index, None)

    def get_option(self, category_id: str, question_index: int) -> int | None:
        return self._selections.get(category_id, {}).get(question_index)

    def toggle_option(self, category_id: str, question_index: int, option_index: int) -> bool:
        if self.get_option(category_id, question_index) == option_index:
            self.remove_option(category_id, question_index)
            return False
        self.set_option(category_id, question_index, option_index)
        return True

    def get_category_selections(self, category_id: str) -> dict[int, int]:
        return dict(self._selections.get(category_id, {}))

    def clear_category(self, category_id: str) -> None:
        self._selections.pop(category_id, None)

    def clear(self) -> None:
        self._selections.clear()

    def snapshot(self) -> SelectionSnapshot:
        completed: list[str] = []
        incomplete: list[str] = []
        total_questions = 0
        for category_id, answers in self._selections.items():
            total_questions += len(answers)
            if answers:
                completed.append(category_id)
            else:
                incomplete.append(category_id)
        return SelectionSnapshot(
            selections={category_id: dict(answers) for category_id, answers in self._selections.items()},
            total_categories=len(self._selections),
            total_questions=total_questions,
            completed_categories=tuple(completed),
            incomplete_categories=tuple(incomplete),
        )
