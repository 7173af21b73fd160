import pytest

from espocrm.query import (
    FilterOption,
    Order,
    Parameters,
    Where,
    encode_filters,
    quote_value,
)


class TestFilterOption:
    def test_member_count(self):
        assert len(FilterOption) == 48

    @pytest.mark.parametrize(
        "option, expected",
        [
            (FilterOption.EQUALS, "equals"),
            (FilterOption.NOT_EQUALS, "notEquals"),
            (FilterOption.GREATER_THAN_OR_EQUALS, "greaterThanOrEquals"),
            (FilterOption.IS_NOT_NULL, "isNotNull"),
            (FilterOption.IN, "in"),
            (FilterOption.OR, "or"),
            (FilterOption.AND_TODAY, "andToday"),
            (FilterOption.LAST_SEVEN_DAYS, "lastSevenDays"),
            (FilterOption.CURRENT_FISCAL_QUARTER, "currentFiscalQuarter"),
            (FilterOption.OLDER_THAN_X_DAYS, "olderThanXDays"),
            (FilterOption.ARRAY_IS_NOT_EMPTY, "arrayIsNotEmpty"),
        ],
    )
    def test_wire_string(self, option, expected):
        assert option.wire == expected

    def test_wire_strings_are_unique_lower_camel_case(self):
        wires = [option.wire for option in FilterOption]
        assert len(set(wires)) == len(wires)
        for wire in wires:
            assert wire[0].islower()
            assert "_" not in wire


class TestEncodeFilters:
    def test_empty(self):
        assert encode_filters([]) == ""

    def test_two_clauses(self):
        where = encode_filters(
            [
                Where(FilterOption.EQUALS, "a", "c"),
                Where(FilterOption.NOT_EQUALS, "b", "d"),
            ]
        )

        assert where == (
            "&where[0][type]=equals&where[0][attribute]=a&where[0][value]=c"
            "&where[1][type]=notEquals&where[1][attribute]=b&where[1][value]=d"
        )

    def test_indices_follow_input_order(self):
        clauses = [Where(FilterOption.EQUALS, f"attr{i}", str(i)) for i in range(12)]

        where = encode_filters(clauses)

        for i in range(12):
            assert f"&where[{i}][attribute]=attr{i}" in where
        assert where.count("][type]=") == 12
        assert where.index("where[2][") < where.index("where[10][")

    def test_values_are_not_escaped(self):
        where = encode_filters([Where(FilterOption.LIKE, "name", "Al ice&x=1%")])

        assert where.endswith("&where[0][value]=Al ice&x=1%")

    def test_accepts_generator(self):
        clauses = (Where(FilterOption.IS_TRUE, attr) for attr in ["a", "b"])

        assert encode_filters(clauses) == (
            "&where[0][type]=isTrue&where[0][attribute]=a&where[0][value]="
            "&where[1][type]=isTrue&where[1][attribute]=b&where[1][value]="
        )


def test_quote_value():
    assert quote_value("Al ice&x=1/2") == "Al%20ice%26x%3D1%2F2"
    assert quote_value("plain") == "plain"


class TestParameters:
    def test_defaults(self):
        params = Parameters()

        assert params.max_size == 200
        assert params.offset == 0
        assert params.order is Order.DESC
        assert params.total is False
        assert params.encode() == "?maxSize=200&offset=0&total=false&order=desc"

    def test_chained_setters(self):
        params = Parameters()

        result = params.set_max_size(10).set_order(Order.ASC)

        assert result is params
        assert params.encode() == "?maxSize=10&offset=0&total=false&order=asc"

    def test_each_setter_changes_one_field(self):
        params = Parameters().set_offset(40).set_total(True)

        assert params == Parameters(offset=40, total=True)
        assert params.encode() == "?maxSize=200&offset=40&total=true&order=desc"

    def test_setters_are_idempotent(self):
        params = Parameters().set_max_size(5).set_max_size(5)

        assert params == Parameters(max_size=5)

    def test_no_range_validation(self):
        params = Parameters().set_max_size(0).set_offset(10**9)

        assert params.encode() == "?maxSize=0&offset=1000000000&total=false&order=desc"
