"""Query-string encoding for EspoCRM list requests.

EspoCRM reads list options and filters from the query string:

    ?maxSize=20&offset=0&total=true&order=desc
    &where[0][type]=equals&where[0][attribute]=name&where[0][value]=Alice

Nothing in this module percent-encodes. Attribute names and values are
inserted verbatim, so text containing reserved characters (``&``, ``=``,
``#``, spaces, ...) must be passed through :func:`quote_value` first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable
from urllib.parse import quote


class FilterOption(str, Enum):
    """Filter operators understood by the ``where`` query parameter."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUALS = "greaterThanOrEquals"
    LESS_THAN_OR_EQUALS = "lessThanOrEquals"
    IS_NULL = "isNull"
    IS_NOT_NULL = "isNotNull"
    IS_TRUE = "isTrue"
    IS_FALSE = "isFalse"
    LINKED_WITH = "linkedWith"
    NOT_LINKED_WITH = "notLinkedWith"
    IS_LINKED = "isLinked"
    IS_NOT_LINKED = "isNotLinked"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    LIKE = "like"
    NOT_LIKE = "notLike"
    OR = "or"
    AND_TODAY = "andToday"
    PAST = "past"
    FUTURE = "future"
    LAST_SEVEN_DAYS = "lastSevenDays"
    CURRENT_MONTH = "currentMonth"
    LAST_MONTH = "lastMonth"
    NEXT_MONTH = "nextMonth"
    CURRENT_QUARTER = "currentQuarter"
    LAST_QUARTER = "lastQuarter"
    CURRENT_YEAR = "currentYear"
    LAST_YEAR = "lastYear"
    CURRENT_FISCAL_YEAR = "currentFiscalYear"
    LAST_FISCAL_YEAR = "lastFiscalYear"
    CURRENT_FISCAL_QUARTER = "currentFiscalQuarter"
    LAST_FISCAL_QUARTER = "lastFiscalQuarter"
    LAST_X_DAYS = "lastXDays"
    NEXT_X_DAYS = "nextXDays"
    OLDER_THAN_X_DAYS = "olderThanXDays"
    AFTER_X_DAYS = "afterXDays"
    BETWEEN = "between"
    ARRAY_ANY_OF = "arrayAnyOf"
    ARRAY_NONE_OF = "arrayNoneOf"
    ARRAY_ALL_OF = "arrayAllOf"
    ARRAY_IS_EMPTY = "arrayIsEmpty"
    ARRAY_IS_NOT_EMPTY = "arrayIsNotEmpty"

    @property
    def wire(self) -> str:
        """Spelling used in the query string."""
        return self.value


@dataclass(frozen=True)
class Where:
    """A single filter clause of a list request.

    Args:
        type: Filter operator.
        attribute: Entity attribute the filter applies to.
        value: Comparison value, already in its wire form.
    """

    type: FilterOption
    attribute: str
    value: str = ""


def encode_filters(clauses: Iterable[Where]) -> str:
    """Encode filter clauses as ``&where[i][...]`` query fragments.

    Each clause gets the index of its position in ``clauses``.

    Example:
        >>> encode_filters([Where(FilterOption.EQUALS, "name", "Alice")])
        '&where[0][type]=equals&where[0][attribute]=name&where[0][value]=Alice'
    """
    parts = []
    for idx, clause in enumerate(clauses):
        parts.append(
            f"&where[{idx}][type]={clause.type.wire}"
            f"&where[{idx}][attribute]={clause.attribute}"
            f"&where[{idx}][value]={clause.value}"
        )
    return "".join(parts)


def quote_value(text: str) -> str:
    """Percent-encode ``text`` for safe use as a query value or path segment."""
    return quote(text, safe="")


class Order(str, Enum):
    """Sort direction of a list request."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class Parameters:
    """Pagination and sorting options of a list request.

    Setters return the instance itself so calls can be chained:

        >>> Parameters().set_max_size(10).set_order(Order.ASC).encode()
        '?maxSize=10&offset=0&total=false&order=asc'
    """

    max_size: int = 200
    offset: int = 0
    order: Order = Order.DESC
    total: bool = False

    def set_max_size(self, value: int) -> "Parameters":
        self.max_size = value
        return self

    def set_offset(self, value: int) -> "Parameters":
        self.offset = value
        return self

    def set_order(self, value: Order) -> "Parameters":
        self.order = value
        return self

    def set_total(self, value: bool) -> "Parameters":
        """Ask the server to include the total record count."""
        self.total = value
        return self

    def encode(self) -> str:
        """Encode as a query string, always emitting all four keys."""
        total = "true" if self.total else "false"
        return (
            f"?maxSize={self.max_size}&offset={self.offset}"
            f"&total={total}&order={Order(self.order).value}"
        )
