from __future__ import annotations

import re

from estimate_wizard.application.exceptions import CostParseError
from estimate_wizard.application.utils.formatting import format_cost_range
from estimate_wizard.domain.entities.content import CalculatorData, Option
from estimate_wizard.domain.entities.estimate import EstimateBreakdown, LineItem


_COST_RE = re.compile(r"^[0-9]+$")


def parse_cost(value: object, question_index: int, option_index: int, field: str) -> int:
    """Parse a CMS cost field. Only non-negative whole numbers are accepted."""
    if isinstance(value, bool):
        raise CostParseError(question_index, option_index, field, value)
    if isinstance(value, int):
        if value < 0:
            raise CostParseError(question_index, option_index, field, value)
        return value
    if isinstance(value, str) and _COST_RE.match(value.strip()):
        return int(value.strip())
    raise CostParseError(question_index, option_index, field, value)


class EstimateAggregator:
    """Builds the cost breakdown of one category from its content and selections."""

    def __init__(self, currency_symbol: str | None = None) -> None:
        self._symbol = currency_symbol

    def aggregate(
        self,
        category_id: str,
        calculator_data: CalculatorData,
        selections: dict[int, int],
    ) -> EstimateBreakdown:
        """
        Resolve every selection to its option and sum the cost ranges.
        Selections pointing at questions or options that no longer exist are skipped.
        Raises CostParseError if any resolved option has a malformed cost.
        """
        items: list[LineItem] = []
        for question_index, option_index in sorted(selections.items()):
            option = self._resolve(calculator_data, question_index, option_index)
            if option is None:
                continue
            minimum = parse_cost(option.minimum_cost, question_index, option_index, "minimum_cost")
            maximum = parse_cost(option.maximum_cost, question_index, option_index, "maximum_cost")
            items.append(
                LineItem(
                    question_index=question_index,
                    option_index=option_index,
                    question_text=calculator_data.questions[question_index].text,
                    description=option.short_description,
                    minimum_cost=minimum,
                    maximum_cost=maximum,
                    formatted_cost=format_cost_range(minimum, maximum, self._symbol),
                    image=option.image,
                )
            )

        minimum_total = sum(item.minimum_cost for item in items)
        maximum_total = sum(item.maximum_cost for item in items)
        return EstimateBreakdown(
            category_id=category_id,
            line_items=tuple(items),
            minimum_total=minimum_total,
            maximum_total=maximum_total,
            formatted_total=format_cost_range(minimum_total, maximum_total, self._symbol),
        )

    @staticmethod
    def _resolve(calculator_data: CalculatorData, question_index: int, option_index: int) -> Option | None:
        if not 0 <= question_index < len(calculator_data.questions):
            return None
        options = calculator_data.questions[question_index].options
        if not 0 <= option_index < len(options):
            return None
        return options[option_index]
