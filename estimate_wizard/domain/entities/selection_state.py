from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SelectionSnapshot:
    selections: dict[str, dict[int, int]] = field(default_factory=dict)
    total_categories: int = 0
    total_questions: int = 0
    # display only: a category with one answer already counts as completed
    completed_categories: tuple[str, ...] = ()
    incomplete_categories: tuple[str, ...] = ()
