"""
Tests for cost aggregation and formatting.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from estimate_wizard.application.exceptions import CostParseError
from estimate_wizard.application.use_cases.estimate import EstimateAggregator, parse_cost
from estimate_wizard.application.utils.email_html import render_breakdown_html
from estimate_wizard.application.utils.formatting import format_cost_range, format_currency
from estimate_wizard.domain.entities.content import Option


def test_kitchens_scenario_totals(kitchens):
    """Q1 option 0 (1000-2000) plus Q2 option 1 (800-1200) gives 1800-3200."""
    breakdown = EstimateAggregator(currency_symbol="$").aggregate("kitchens", kitchens, {0: 0, 1: 1})

    assert breakdown.minimum_total == 1800
    assert breakdown.maximum_total == 3200
    assert breakdown.formatted_total == "$1,800 - $3,200"
    assert [item.description for item in breakdown.line_items] == ["Small", "Quartz"]
    assert breakdown.line_items[0].formatted_cost == "$1,000 - $2,000"


def test_equal_min_max_renders_single_amount(kitchens):
    breakdown = EstimateAggregator(currency_symbol="$").aggregate("kitchens", kitchens, {1: 0})

    assert breakdown.line_items[0].formatted_cost == "$500"
    assert breakdown.formatted_total == "$500"


def test_stale_selections_are_skipped(kitchens):
    breakdown = EstimateAggregator().aggregate("kitchens", kitchens, {0: 1, 1: 7, 4: 0})

    assert len(breakdown.line_items) == 1
    assert breakdown.minimum_total == 3000
    assert breakdown.maximum_total == 5000


def test_totals_recomputed_after_removal(kitchens, store):
    aggregator = EstimateAggregator()
    store.set_option("kitchens", 0, 0)
    store.set_option("kitchens", 1, 1)
    before = aggregator.aggregate("kitchens", kitchens, store.get_category_selections("kitchens"))

    store.remove_option("kitchens", 1)
    after = aggregator.aggregate("kitchens", kitchens, store.get_category_selections("kitchens"))

    assert before.minimum_total == 1800
    assert after.minimum_total == 1000
    assert after.maximum_total == 2000


def test_empty_selection_totals_zero(kitchens):
    breakdown = EstimateAggregator(currency_symbol="$").aggregate("kitchens", kitchens, {})
    assert breakdown.is_empty
    assert breakdown.formatted_total == "$0"


def test_malformed_cost_aborts_aggregation(kitchens):
    broken_question = replace(
        kitchens.questions[1],
        options=(Option("Laminate", "", "abc", "500"), kitchens.questions[1].options[1]),
    )
    broken = replace(kitchens, questions=(kitchens.questions[0], broken_question))

    with pytest.raises(CostParseError) as exc_info:
        EstimateAggregator().aggregate("kitchens", broken, {0: 0, 1: 0})

    assert exc_info.value.question_index == 1
    assert exc_info.value.field == "minimum_cost"


def test_malformed_cost_on_unselected_option_is_ignored(kitchens):
    broken_question = replace(
        kitchens.questions[1],
        options=(Option("Laminate", "", "abc", "500"), kitchens.questions[1].options[1]),
    )
    broken = replace(kitchens, questions=(kitchens.questions[0], broken_question))

    breakdown = EstimateAggregator().aggregate("kitchens", broken, {0: 0, 1: 1})
    assert breakdown.minimum_total == 1800


@pytest.mark.parametrize("value", ["abc", "", "-5", "1,000", "12.5", None, -1, True])
def test_parse_cost_rejects(value):
    with pytest.raises(CostParseError):
        parse_cost(value, 0, 0, "minimum_cost")


@pytest.mark.parametrize("value,expected", [("0", 0), (" 2500 ", 2500), (750, 750)])
def test_parse_cost_accepts(value, expected):
    assert parse_cost(value, 0, 0, "maximum_cost") == expected


def test_currency_formatting():
    assert format_currency(1234567, "$") == "$1,234,567"
    assert format_cost_range(10, 10, "$") == "$10"
    assert format_cost_range(10, 20, "$") == "$10 - $20"


def test_breakdown_html_escapes_descriptions(kitchens):
    tricky = replace(
        kitchens,
        questions=(replace(kitchens.questions[0], options=(Option("<b>Big</b>", "", "1", "2"),)),),
    )
    html = render_breakdown_html(EstimateAggregator(currency_symbol="$").aggregate("kitchens", tricky, {0: 0}))

    assert "&lt;b&gt;Big&lt;/b&gt;" in html
    assert "Estimate Total" in html
    assert "$1 - $2" in html
