"""Hook resolution — which methods a controller runs for a given verb.

Each controller class gets a verb -> call sequence table, built once from
the class's own methods and cached per class, instead of checking the
instance with ``hasattr`` on every request. For ``GET`` the full sequence
is::

    before_all -> before_get -> get -> after_get -> after_all

Every hook is optional; the verb method is not. A class without the verb
method has no sequence at all and the request ends in a 405. Request
methods that no class defines are plain lookup misses and are never cached.
"""

from collections.abc import Mapping
from functools import cache
from types import MappingProxyType

from iota.controller.base import Controller

BEFORE_ALL = "before_all"
AFTER_ALL = "after_all"

# Helpers on the base class are never treated as verb handlers
_RESERVED = frozenset(name for name in dir(Controller) if not name.startswith("__"))


def _has_method(cls: type, name: str) -> bool:
    return callable(getattr(cls, name, None))


def _sequence(cls: type, verb: str) -> tuple[str, ...]:
    sequence: list[str] = []
    for name in (BEFORE_ALL, f"before_{verb}"):
        if _has_method(cls, name):
            sequence.append(name)
    sequence.append(verb)
    for name in (f"after_{verb}", AFTER_ALL):
        if _has_method(cls, name):
            sequence.append(name)
    return tuple(sequence)


@cache
def hook_table(cls: type) -> Mapping[str, tuple[str, ...]]:
    """Return the verb -> method-name sequence table for *cls*.

    Only alphabetic, lower-case method names count as verbs, which keeps
    dunder and hook names out of reach of the request method.
    """
    verbs = (
        name
        for name in dir(cls)
        if name.isalpha() and name.islower() and name not in _RESERVED and _has_method(cls, name)
    )
    return MappingProxyType({verb: _sequence(cls, verb) for verb in verbs})


def resolve_hooks(cls: type, verb: str) -> tuple[str, ...] | None:
    """Return the ordered method names to call for *verb*, or ``None``.

    *verb* must already be lower-cased.
    """
    return hook_table(cls).get(verb)
