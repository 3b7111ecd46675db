from abc import ABC, abstractmethod

from estimate_wizard.domain.entities.selection_state import SelectionSnapshot


class SelectionStorePort(ABC):
    @abstractmethod
    def set_option(self, category_id: str, question_index: int, option_index: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_option(self, category_id: str, question_index: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_option(self, category_id: str, question_index: int) -> int | None:
        raise NotImplementedError

    @abstractmethod
    def toggle_option(self, category_id: str, question_index: int, option_index: int) -> bool:
        """
        Deselect when option_index is already chosen for the question, select it otherwise.
        Returns True if the option is selected afterwards.
        """
        raise NotImplementedError

    @abstractmethod
    def get_category_selections(self, category_id: str) -> dict[int, int]:
        raise NotImplementedError

    @abstractmethod
    def clear_category(self, category_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> SelectionSnapshot:
        raise NotImplementedError
