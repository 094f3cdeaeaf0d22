"""Controller registry — turn a controller identifier into an instance.

Routes name controllers by opaque strings. The registry maps those strings
to zero-argument factories (usually classes)::

    controllers = ControllerRegistry()

    @controllers.controller()
    class UserController(Controller):
        def get(self) -> None: ...

    controllers.resolve("UserController")   # new UserController()

Identifiers that were never registered but look like import strings
(``"myapp.controllers:UserController"``) are imported on first use.
"""

import importlib
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from iota.errors import ConfigurationError, ControllerNotFoundError

T = TypeVar("T", bound=Callable[..., Any])


class ControllerResolver(Protocol):
    """Anything that can produce a controller object from its identifier."""

    def resolve(self, controller: str) -> Any: ...


class ControllerRegistry:
    """Identifier -> factory mapping used by the dispatcher."""

    __slots__ = ("_factories",)

    def __init__(self, controllers: dict[str, Callable[[], Any]] | None = None) -> None:
        self._factories: dict[str, Callable[[], Any]] = {}
        for name, factory in (controllers or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: Callable[[], Any]) -> None:
        """Register *factory* under *name*, replacing any previous entry."""
        if not callable(factory):
            msg = f"Controller factory for {name!r} must be callable"
            raise ConfigurationError(msg)
        self._factories[name] = factory

    def controller(self, name: str | None = None) -> Callable[[T], T]:
        """Class decorator registering a controller under *name*.

        *name* defaults to the class name.
        """

        def decorator(cls: T) -> T:
            self.register(name or cls.__name__, cls)
            return cls

        return decorator

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def resolve(self, controller: str) -> Any:
        """Instantiate the controller registered as *controller*.

        Raises ``ControllerNotFoundError`` if it is neither registered nor an
        importable ``"module:attribute"`` string.
        """
        factory = self._factories.get(controller)
        if factory is None:
            factory = self._import(controller)
            self._factories[controller] = factory
        return factory()

    @staticmethod
    def _import(import_string: str) -> Callable[[], Any]:
        module_path, _, attr_name = import_string.partition(":")
        if not attr_name:
            raise ControllerNotFoundError(import_string, "not registered")
        try:
            module = importlib.import_module(module_path)
        except ImportError as exc:
            raise ControllerNotFoundError(import_string, str(exc)) from exc
        obj = getattr(module, attr_name, None)
        if not callable(obj):
            raise ControllerNotFoundError(
                import_string, f"module {module_path!r} has no callable {attr_name!r}"
            )
        return obj
