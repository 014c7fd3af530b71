"""Fluent builder for Drupal JSON:API filter query strings.

Renders the three forms the Drupal JSON:API module understands:

- shorthand: ``filter[field]=value``
- conditions: ``filter[label][condition][path|operator|value|memberOf]``
- groups: ``filter[label][group][conjunction|memberOf]``

Example:
    >>> query = (Filter()
    ...     .where("status", 1)
    ...     .group("recent", conjunction="OR")
    ...     .condition("created", 1700000000, operator=">", member_of="recent")
    ...     .condition("sticky", True, member_of="recent")
    ...     .query())
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

OPERATORS = frozenset(
    {
        "=",
        "<>",
        ">",
        ">=",
        "<",
        "<=",
        "STARTS_WITH",
        "CONTAINS",
        "ENDS_WITH",
        "IN",
        "NOT IN",
        "BETWEEN",
        "NOT BETWEEN",
        "IS NULL",
        "IS NOT NULL",
    }
)
MULTI_VALUE_OPERATORS = frozenset({"IN", "NOT IN", "BETWEEN", "NOT BETWEEN"})
RANGE_OPERATORS = frozenset({"BETWEEN", "NOT BETWEEN"})
NULL_OPERATORS = frozenset({"IS NULL", "IS NOT NULL"})
CONJUNCTIONS = frozenset({"AND", "OR"})


@dataclass(frozen=True)
class _Condition:
    label: str
    path: str
    operator: str
    value: Any
    member_of: str | None


@dataclass(frozen=True)
class _Group:
    label: str
    conjunction: str
    member_of: str | None


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class Filter:
    """Filter expression builder.

    Methods return self for chaining; ``query()`` renders the URL-encoded
    fragment (without a leading ``?``), and ``str(filter)`` does the same.
    """

    def __init__(self, expr: Mapping[str, Any] | None = None) -> None:
        """Initialize builder.

        Args:
            expr: Optional shorthand equality filters ``{field: value}``
        """
        self._shorthand: dict[str, Any] = {}
        self._conditions: list[_Condition] = []
        self._groups: dict[str, _Group] = {}
        for path, value in (expr or {}).items():
            self.where(path, value)

    def where(self, path: str, value: Any) -> Filter:
        """Add a shorthand equality filter.

        Raises:
            ValueError: If the path is empty or the value is None
        """
        if not path:
            raise ValueError("Filter path must be a non-empty string")
        if value is None:
            raise ValueError(f'Filter value for {path} is None; use operator="IS NULL" on a condition')
        self._shorthand[path] = value
        return self

    def condition(
        self,
        path: str,
        value: Any = None,
        *,
        operator: str = "=",
        label: str | None = None,
        member_of: str | None = None,
    ) -> Filter:
        """Add a condition.

        Args:
            path: Field path, e.g. ``uid.name``
            value: Comparison value; a sequence for IN/BETWEEN operators
            operator: One of ``OPERATORS``
            label: Condition label (generated when omitted)
            member_of: Label of the group this condition belongs to

        Raises:
            ValueError: If the operator or value is invalid
        """
        if not path:
            raise ValueError("Filter path must be a non-empty string")
        operator = operator.upper()
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported filter operator: {operator}")
        if operator in MULTI_VALUE_OPERATORS:
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                raise ValueError(f"{operator} requires a sequence of values")
            value = list(value)
            if not value:
                raise ValueError(f"{operator} requires at least one value")
            if operator in RANGE_OPERATORS and len(value) != 2:
                raise ValueError(f"{operator} requires exactly two values")
        elif operator in NULL_OPERATORS:
            value = None
        elif value is None:
            raise ValueError(f"{operator} requires a value")

        label = label or f"c{len(self._conditions)}"
        self._check_label(label)
        self._conditions.append(_Condition(label, path, operator, value, member_of))
        return self

    def group(self, label: str, *, conjunction: str = "AND", member_of: str | None = None) -> Filter:
        """Declare a condition group.

        Raises:
            ValueError: If the conjunction is not AND/OR or the label is taken
        """
        conjunction = conjunction.upper()
        if conjunction not in CONJUNCTIONS:
            raise ValueError(f"Unsupported conjunction: {conjunction}")
        self._check_label(label)
        self._groups[label] = _Group(label, conjunction, member_of)
        return self

    def params(self) -> list[tuple[str, str]]:
        """Query parameters as ordered ``(key, value)`` pairs.

        Raises:
            ValueError: If a condition or group references an undeclared group
        """
        for member_of in [c.member_of for c in self._conditions] + [g.member_of for g in self._groups.values()]:
            if member_of is not None and member_of not in self._groups:
                raise ValueError(f"Unknown filter group: {member_of}")

        pairs: list[tuple[str, str]] = []
        for path, value in self._shorthand.items():
            pairs.append((f"filter[{path}]", _render_value(value)))

        for group in self._groups.values():
            prefix = f"filter[{group.label}][group]"
            pairs.append((f"{prefix}[conjunction]", group.conjunction))
            if group.member_of:
                pairs.append((f"{prefix}[memberOf]", group.member_of))

        for cond in self._conditions:
            prefix = f"filter[{cond.label}][condition]"
            pairs.append((f"{prefix}[path]", cond.path))
            if cond.operator != "=":
                pairs.append((f"{prefix}[operator]", cond.operator))
            if cond.operator in MULTI_VALUE_OPERATORS:
                pairs.extend((f"{prefix}[value][]", _render_value(v)) for v in cond.value)
            elif cond.operator not in NULL_OPERATORS:
                pairs.append((f"{prefix}[value]", _render_value(cond.value)))
            if cond.member_of:
                pairs.append((f"{prefix}[memberOf]", cond.member_of))
        return pairs

    def query(self) -> str:
        return urlencode(self.params(), safe="[]")

    def __str__(self) -> str:
        return self.query()

    def __len__(self) -> int:
        return len(self._shorthand) + len(self._conditions) + len(self._groups)

    def _check_label(self, label: str) -> None:
        if label in self._groups or any(c.label == label for c in self._conditions):
            raise ValueError(f"Filter label already in use: {label}")


def sort_param(sort: str | Sequence[str]) -> str:
    """Render a sort spec; a sequence of fields joins with commas."""
    if isinstance(sort, str):
        return sort
    return ",".join(sort)
