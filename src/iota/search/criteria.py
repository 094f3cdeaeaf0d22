"""SearchCriteria — operator constructors bound to one set of form input.

Each operator looks its field up in the input and returns a node, or
``None`` when the field is missing or blank. ``land``/``lor`` drop the
``None`` results, so a search form with optional fields needs no ``if``
blocks::

    c = SearchCriteria(request.params)
    where = c.land(c.eq("status"), c.contains("title"), c.between("price"))

Range fields use the ``<field>_lo`` / ``<field>_hi`` input keys.

Qualified fields (``"u.name"``) read the input key ``"u-name"`` first and
fall back to ``"name"``, so one form can drive criteria over joined tables
while the rendered column keeps its table alias.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from iota.search.expr import And, Node, Not, Or
from iota.search.terms import (
    Begins,
    Between,
    Contains,
    Eq,
    Ge,
    Gt,
    In,
    Le,
    Literal,
    Lt,
    Ne,
    Term,
)


def _blank(value: object) -> bool:
    return value is None or value == ""


class SearchCriteria:
    """Builds search expressions from a flat input mapping."""

    __slots__ = ("_input",)

    def __init__(self, input: Mapping[str, Any]) -> None:  # noqa: A002
        self._input = input

    # -- Input lookup --

    def value(self, field: str, suffix: str = "") -> Any:
        """Return the raw input for *field* (plus *suffix*), or ``None``."""
        alias, _, column = field.rpartition(".")
        keys = [f"{alias}-{column}{suffix}", f"{column}{suffix}"] if alias else [f"{field}{suffix}"]
        for key in keys:
            if key in self._input:
                return self._input[key]
        return None

    def _term(self, cls: type[Term], field: str) -> Term | None:
        value = self.value(field)
        if _blank(value):
            return None
        return cls(field, value)

    # -- Comparison operators --

    def eq(self, field: str) -> Term | None:
        return self._term(Eq, field)

    def ne(self, field: str) -> Term | None:
        return self._term(Ne, field)

    def lt(self, field: str) -> Term | None:
        return self._term(Lt, field)

    def le(self, field: str) -> Term | None:
        return self._term(Le, field)

    def gt(self, field: str) -> Term | None:
        return self._term(Gt, field)

    def ge(self, field: str) -> Term | None:
        return self._term(Ge, field)

    def begins(self, field: str) -> Term | None:
        """``field LIKE 'input%'``."""
        return self._term(Begins, field)

    def contains(self, field: str) -> Term | None:
        """``field LIKE '%input%'``."""
        return self._term(Contains, field)

    def in_(self, field: str) -> Term | None:
        """Set membership for multi-valued input (e.g. a multi-select).

        Blank members are dropped; an all-blank set yields ``None``.
        """
        value = self.value(field)
        if isinstance(value, Sequence) and not isinstance(value, str):
            members = tuple(v for v in value if not _blank(v))
            if not members:
                return None
            return In(field, members)
        if _blank(value):
            return None
        return In(field, value)

    def between(self, field: str, open_ended: bool = False) -> Term | Between | None:
        """Range over ``<field>_lo`` and ``<field>_hi``.

        Both bounds are required unless *open_ended*, in which case a lone
        low bound gives ``field >= lo`` and a lone high bound ``field <= hi``.
        """
        low = self.value(field, "_lo")
        high = self.value(field, "_hi")
        if not _blank(low) and not _blank(high):
            return Between(field, low, high)
        if open_ended and not _blank(low):
            return Ge(field, low)
        if open_ended and not _blank(high):
            return Le(field, high)
        return None

    def literal(self, sql: str) -> Literal | None:
        """Pass *sql* through verbatim. The caller is responsible for escaping."""
        if not sql:
            return None
        return Literal(sql)

    # -- Logical combinators --

    def land(self, *nodes: Node | None) -> Node | None:
        """AND together the non-``None`` *nodes*."""
        return _group(And, nodes)

    def lor(self, *nodes: Node | None) -> Node | None:
        """OR together the non-``None`` *nodes*."""
        return _group(Or, nodes)

    def lnot(self, node: Node | None) -> Node | None:
        """Negate *node*; ``None`` stays ``None``."""
        if node is None:
            return None
        return Not.of(node)

    @staticmethod
    def where(node: Node | None) -> str:
        """Render a full ``WHERE`` clause, or ``""`` when there is no filter."""
        if node is None:
            return ""
        return f"WHERE {node.sql}"


def _group(cls: type[And] | type[Or], nodes: tuple[Node | None, ...]) -> Node | None:
    present = tuple(n for n in nodes if n is not None)
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return cls(present)
