"""Tests for ftracker.domain.query pure functions."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ftracker.domain.models import TransactionType
from ftracker.domain.query import (
    FilterCriteria,
    SortDirection,
    distinct_categories,
    filter_transactions,
    format_amount,
    recent_transactions,
    sort_transactions,
)

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def ids(transactions) -> list[str]:
    return [t.id for t in transactions]


class TestFormatAmount:
    """Tests for format_amount."""

    def test_drops_trailing_zeros(self) -> None:
        """Should render amounts without trailing zeros or exponents."""
        assert format_amount(Decimal("50.00")) == "50"
        assert format_amount(Decimal("12.50")) == "12.5"
        assert format_amount(Decimal("1000")) == "1000"


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_no_criteria_returns_everything(self, make_txn) -> None:
        """Should keep every transaction when nothing is set."""
        transactions = [make_txn(), make_txn()]

        assert filter_transactions(transactions, FilterCriteria()) == transactions

    def test_empty_strings_mean_any(self, make_txn) -> None:
        """Should ignore criteria given as empty strings."""
        transactions = [make_txn(), make_txn(txn_type=INCOME, category="Salary")]
        criteria = FilterCriteria(type="", category="", search="", start_date="", end_date="")

        assert len(filter_transactions(transactions, criteria)) == 2

    def test_by_type(self, make_txn) -> None:
        """Should keep only the requested type."""
        transactions = [make_txn(txn_id="a"), make_txn(txn_type=INCOME, category="Salary", txn_id="b")]

        assert ids(filter_transactions(transactions, FilterCriteria(type="income"))) == ["b"]
        assert ids(filter_transactions(transactions, FilterCriteria(type=EXPENSE))) == ["a"]

    def test_by_category_is_exact(self, make_txn) -> None:
        """Should match category exactly."""
        transactions = [make_txn(category="Food", txn_id="a"), make_txn(category="Food Delivery", txn_id="b")]

        assert ids(filter_transactions(transactions, FilterCriteria(category="Food"))) == ["a"]

    def test_search_description_case_insensitive(self, make_txn) -> None:
        """Should find text in the description regardless of case."""
        transactions = [
            make_txn(description="Weekly GROCERIES", txn_id="a"),
            make_txn(description=None, txn_id="b"),
        ]

        assert ids(filter_transactions(transactions, FilterCriteria(search="groceries"))) == ["a"]

    def test_search_category(self, make_txn) -> None:
        """Should find text in the category."""
        transactions = [make_txn(category="Transport", txn_id="a"), make_txn(category="Food", txn_id="b")]

        assert ids(filter_transactions(transactions, FilterCriteria(search="trans"))) == ["a"]

    def test_search_amount_text(self, make_txn) -> None:
        """Should find text in the amount's plain form."""
        transactions = [make_txn("125.50", txn_id="a"), make_txn("99", txn_id="b")]

        assert ids(filter_transactions(transactions, FilterCriteria(search="125.5"))) == ["a"]
        assert ids(filter_transactions(transactions, FilterCriteria(search="9"))) == ["b"]

    def test_search_amount_with_cents(self, make_txn) -> None:
        """Should find the amount written with two decimals."""
        transactions = [make_txn("50", txn_id="a"), make_txn("12.5", txn_id="b"), make_txn("7", txn_id="c")]

        assert ids(filter_transactions(transactions, FilterCriteria(search="50.00"))) == ["a"]
        assert ids(filter_transactions(transactions, FilterCriteria(search="12.50"))) == ["b"]

    def test_date_range_is_inclusive(self, make_txn) -> None:
        """Should keep transactions on both boundary days."""
        transactions = [
            make_txn(day=date(2024, 1, 1), txn_id="a"),
            make_txn(day=date(2024, 1, 10), txn_id="b"),
            make_txn(day=date(2024, 1, 15), txn_id="c"),
            make_txn(day=date(2024, 1, 20), txn_id="d"),
            make_txn(day=date(2024, 1, 21), txn_id="e"),
        ]
        criteria = FilterCriteria(start_date="2024-01-10", end_date="2024-01-20")

        assert ids(filter_transactions(transactions, criteria)) == ["b", "c", "d"]

    def test_date_bounds_ignore_time_of_day(self, make_txn) -> None:
        """Should compare by calendar date when bounds carry a time."""
        transactions = [make_txn(day=date(2024, 1, 20), txn_id="a")]
        criteria = FilterCriteria(start_date=datetime(2024, 1, 20, 18, 0), end_date="2024-01-20T00:00:00")

        assert ids(filter_transactions(transactions, criteria)) == ["a"]

    def test_single_bound(self, make_txn) -> None:
        """Should apply whichever bound is supplied."""
        transactions = [make_txn(day=date(2024, 1, 1), txn_id="a"), make_txn(day=date(2024, 2, 1), txn_id="b")]

        assert ids(filter_transactions(transactions, FilterCriteria(start_date=date(2024, 1, 15)))) == ["b"]
        assert ids(filter_transactions(transactions, FilterCriteria(end_date=date(2024, 1, 15)))) == ["a"]

    def test_criteria_are_conjunctive(self, make_txn) -> None:
        """Should require every supplied criterion."""
        transactions = [
            make_txn(category="Food", day=date(2024, 1, 5), txn_id="a"),
            make_txn(category="Food", day=date(2024, 2, 5), txn_id="b"),
            make_txn(category="Bills", day=date(2024, 1, 5), txn_id="c"),
            make_txn(txn_type=INCOME, category="Food", day=date(2024, 1, 5), txn_id="d"),
        ]
        criteria = FilterCriteria(type="expense", category="Food", end_date="2024-01-31")

        assert ids(filter_transactions(transactions, criteria)) == ["a"]

    def test_invalid_type_raises(self, make_txn) -> None:
        """Should raise ValueError for an unknown type."""
        with pytest.raises(ValueError):
            filter_transactions([make_txn()], FilterCriteria(type="transfer"))


class TestSortTransactions:
    """Tests for sort_transactions."""

    def test_by_date_descending_by_default(self, make_txn) -> None:
        """Should put the newest first by default."""
        transactions = [
            make_txn(day=date(2024, 1, 2), txn_id="a"),
            make_txn(day=date(2024, 3, 1), txn_id="b"),
            make_txn(day=date(2023, 12, 31), txn_id="c"),
        ]

        assert ids(sort_transactions(transactions)) == ["b", "a", "c"]

    def test_by_amount_numeric(self, make_txn) -> None:
        """Should compare amounts as numbers, not text."""
        transactions = [make_txn("9", txn_id="a"), make_txn("100", txn_id="b"), make_txn("25.5", txn_id="c")]

        assert ids(sort_transactions(transactions, "amount", "asc")) == ["a", "c", "b"]

    def test_by_category_case_insensitive(self, make_txn) -> None:
        """Should ignore case when ordering categories."""
        transactions = [
            make_txn(category="rent", txn_id="a"),
            make_txn(category="Bills", txn_id="b"),
            make_txn(category="food", txn_id="c"),
        ]

        assert ids(sort_transactions(transactions, "category", SortDirection.ASC)) == ["b", "c", "a"]

    def test_ties_break_on_id(self, make_txn) -> None:
        """Should order equal keys by id."""
        transactions = [make_txn(txn_id="z"), make_txn(txn_id="m"), make_txn(txn_id="a")]

        assert ids(sort_transactions(transactions, "date", "asc")) == ["a", "m", "z"]

    def test_descending_is_reverse_of_ascending(self, make_txn) -> None:
        """Should give exactly reversed results for the other direction."""
        transactions = [
            make_txn("10", category="Food", day=date(2024, 1, 1), txn_id="d"),
            make_txn("10", category="food", day=date(2024, 1, 1), txn_id="b"),
            make_txn("5", category="Bills", day=date(2024, 2, 1), txn_id="c"),
            make_txn("20", category="Rent", day=date(2024, 1, 1), txn_id="a"),
        ]

        for field in ("date", "amount", "category", "type", "description"):
            ascending = sort_transactions(transactions, field, "asc")
            descending = sort_transactions(transactions, field, "desc")
            assert ids(ascending) == list(reversed(ids(descending)))

    def test_fallback_attribute_with_none_first(self, make_txn) -> None:
        """Should sort other attributes by raw value with None first."""
        transactions = [
            make_txn(description="zoo", txn_id="a"),
            make_txn(description=None, txn_id="b"),
            make_txn(description="apple", txn_id="c"),
        ]

        assert ids(sort_transactions(transactions, "description", "asc")) == ["b", "c", "a"]

    def test_accepts_json_field_names(self, make_txn) -> None:
        """Should accept camelCase record names."""
        transactions = [make_txn(txn_id="b"), make_txn(txn_id="a")]

        assert ids(sort_transactions(transactions, "createdAt", "asc")) == ["a", "b"]

    def test_unknown_field_raises(self, make_txn) -> None:
        """Should raise ValueError for fields transactions don't have."""
        with pytest.raises(ValueError):
            sort_transactions([make_txn()], "colour")

    def test_unknown_direction_raises(self, make_txn) -> None:
        """Should raise ValueError for an unknown direction."""
        with pytest.raises(ValueError):
            sort_transactions([make_txn()], "date", "sideways")

    def test_does_not_mutate_input(self, make_txn) -> None:
        """Should leave the input list untouched."""
        transactions = [make_txn(day=date(2024, 1, 1)), make_txn(day=date(2024, 2, 1))]
        before = list(transactions)

        sort_transactions(transactions, "date", "desc")

        assert transactions == before


class TestDistinctCategories:
    """Tests for distinct_categories."""

    def test_sorted_and_unique(self, make_txn) -> None:
        """Should return each category once, sorted."""
        transactions = [make_txn(category="Food"), make_txn(category="Bills"), make_txn(category="Food")]

        assert distinct_categories(transactions) == ["Bills", "Food"]

    def test_empty(self) -> None:
        """Should return an empty list for no transactions."""
        assert distinct_categories([]) == []


class TestRecentTransactions:
    """Tests for recent_transactions."""

    def test_newest_first_limited(self, make_txn) -> None:
        """Should return the newest transactions up to the limit."""
        transactions = [make_txn(day=date(2024, 1, d), txn_id=f"t{d:02d}") for d in range(1, 9)]

        assert ids(recent_transactions(transactions, limit=3)) == ["t08", "t07", "t06"]
        assert len(recent_transactions(transactions)) == 5
