"""Route, RouteMatch and PatternMatch frozen dataclasses."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Route:
    """A named association between a URL pattern and a controller.

    ``pattern`` is slash-delimited; each segment is either a literal or a
    colon-variable::

        Route("user", "/users/:id", "UserController")
    """

    name: str
    pattern: str
    controller: str

    @property
    def variables(self) -> tuple[str, ...]:
        """Names of the colon-variables in the pattern, in order."""
        return tuple(
            seg[1:] for seg in self.pattern.strip("/").split("/") if seg.startswith(":")
        )

    @property
    def is_static(self) -> bool:
        """True when the pattern has no colon-variables."""
        return ":" not in self.pattern


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Variables captured by matching one pattern against one path."""

    variables: dict[str, str] = field(default_factory=dict)

    @property
    def variable_count(self) -> int:
        return len(self.variables)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    controller: str
    variables: dict[str, str]
    route_name: str
