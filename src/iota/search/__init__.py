"""Search criteria — build SQL WHERE fragments from search-form input.

Fields left blank on the form simply drop out of the expression::

    from iota.search import SearchCriteria

    c = SearchCriteria({"name": "ann", "age_lo": "30", "age_hi": "", "city": ""})
    expr = c.land(c.begins("name"), c.between("age", open_ended=True), c.eq("city"))
    str(expr)   # "name LIKE 'ann%' AND age >= '30'"

Expressions are immutable trees of ``Term`` leaves and ``And``/``Or``/``Not``
nodes; rendering is a pure function of the tree.
"""

from iota.search.criteria import SearchCriteria
from iota.search.expr import And, Expression, Node, Not, Or
from iota.search.quoting import escape_like, quote_value
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

__all__ = [
    "And",
    "Begins",
    "Between",
    "Contains",
    "Eq",
    "Expression",
    "Ge",
    "Gt",
    "In",
    "Le",
    "Literal",
    "Lt",
    "Ne",
    "Node",
    "Not",
    "Or",
    "SearchCriteria",
    "Term",
    "escape_like",
    "quote_value",
]
