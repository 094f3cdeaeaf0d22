"""Leaf nodes of a search expression: one comparison each."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from iota.search.quoting import escape_like, quote_value


@dataclass(frozen=True, slots=True)
class Term:
    """A ``field OPERATOR 'value'`` comparison.

    Subclasses set ``operator`` and may override ``quote`` to transform the
    value before quoting.
    """

    field: str
    value: object

    operator: ClassVar[str] = "="

    def quote(self, value: object) -> str:
        return quote_value(value)

    @property
    def sql(self) -> str:
        return f"{self.field} {self.operator} {self.quote(self.value)}"

    def __str__(self) -> str:
        return self.sql


class Eq(Term):
    operator = "="


class Ne(Term):
    operator = "<>"


class Lt(Term):
    operator = "<"


class Le(Term):
    operator = "<="


class Gt(Term):
    operator = ">"


class Ge(Term):
    operator = ">="


class Begins(Term):
    """``field LIKE 'value%'`` with the value's own wildcards escaped."""

    operator = "LIKE"

    def quote(self, value: object) -> str:
        return quote_value(f"{escape_like(value)}%")


class Contains(Term):
    """``field LIKE '%value%'`` with the value's own wildcards escaped."""

    operator = "LIKE"

    def quote(self, value: object) -> str:
        return quote_value(f"%{escape_like(value)}%")


class In(Term):
    """Set membership.

    Renders ``field = 'v'`` for a scalar or a single-member set and
    ``field IN ('a','b')`` otherwise.
    """

    operator = "IN"

    @property
    def values(self) -> tuple[object, ...]:
        if isinstance(self.value, str) or not isinstance(self.value, Sequence):
            return (self.value,)
        return tuple(self.value)

    @property
    def sql(self) -> str:
        values = self.values
        if len(values) <= 1:
            return f"{self.field} = {self.quote(values[0] if values else '')}"
        quoted = ",".join(self.quote(v) for v in values)
        return f"{self.field} IN ({quoted})"


@dataclass(frozen=True, slots=True)
class Between:
    """``field BETWEEN 'low' AND 'high'``."""

    field: str
    low: object
    high: object

    operator: ClassVar[str] = "BETWEEN"

    @property
    def sql(self) -> str:
        return f"{self.field} BETWEEN {quote_value(self.low)} AND {quote_value(self.high)}"

    def __str__(self) -> str:
        return self.sql


@dataclass(frozen=True, slots=True)
class Literal:
    """Raw SQL passed through untouched.

    For constants or expressions no operator covers. Escaping is entirely
    the caller's responsibility.
    """

    text: str

    @property
    def sql(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text
