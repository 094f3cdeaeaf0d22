"""Composite nodes of a search expression: AND, OR and NOT."""

from dataclasses import dataclass
from typing import ClassVar

from iota.search.terms import Between, Literal, Term

type Node = Term | Between | Literal | Expression


@dataclass(frozen=True, slots=True)
class Expression:
    """Children joined by a logical operator.

    Nested ``And``/``Or`` children are parenthesized; terms, literals and
    ``Not`` nodes (which parenthesize themselves) are not.
    """

    children: tuple[Node, ...]

    operator: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def sql(self) -> str:
        parts = []
        for child in self.children:
            if isinstance(child, (And, Or)):
                parts.append(f"({child.sql})")
            else:
                parts.append(child.sql)
        return f" {self.operator} ".join(parts)

    def __str__(self) -> str:
        return self.sql


class And(Expression):
    operator = "AND"


class Or(Expression):
    operator = "OR"


class Not(Expression):
    """Negation of exactly one child: ``NOT(child)``."""

    operator = "NOT"

    def __post_init__(self) -> None:
        Expression.__post_init__(self)
        if len(self.children) != 1:
            msg = f"Not takes exactly one child, got {len(self.children)}"
            raise ValueError(msg)

    @classmethod
    def of(cls, child: Node) -> Not:
        return cls((child,))

    @property
    def child(self) -> Node:
        return self.children[0]

    @property
    def sql(self) -> str:
        return f"NOT({self.child.sql})"
