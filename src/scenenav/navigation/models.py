"""Data models for navigation state."""

from dataclasses import dataclass, field, replace
from typing import Any

from ..navigation_exceptions import InvalidRouteStateException
from .action_const import ActionType, Verb
from .hook_phase import HookPhase


@dataclass(frozen=True)
class RouteTreeState:
    """One node of the navigation tree.

    A node without ``routes`` is a leaf (a scene). A container node holds a
    non-empty ordered tuple of child nodes and ``index`` selects the active one.
    """

    route_name: str
    params: dict[str, Any] = field(default_factory=dict)
    key: str | None = None
    index: int | None = None
    routes: tuple["RouteTreeState", ...] | None = None

    def __post_init__(self) -> None:
        """Validate the leaf/container invariant."""
        if self.routes is None:
            return
        if not isinstance(self.routes, tuple):
            object.__setattr__(self, "routes", tuple(self.routes))
        if not self.routes:
            raise InvalidRouteStateException(self.route_name, "container has no routes")
        if self.index is None or not 0 <= self.index < len(self.routes):
            raise InvalidRouteStateException(
                self.route_name,
                f"index {self.index} out of range for {len(self.routes)} routes",
            )

    @property
    def is_leaf(self) -> bool:
        """Whether this node is a scene rather than a nested navigator."""
        return self.routes is None

    @property
    def active_route(self) -> "RouteTreeState | None":
        """Currently selected child, or None for a leaf."""
        if self.routes is None:
            return None
        return self.routes[self.index]

    def with_params(self, params: dict[str, Any]) -> "RouteTreeState":
        """Return a copy whose params are merged with ``params``."""
        return replace(self, params={**self.params, **params})

    def with_routes(self, routes: tuple["RouteTreeState", ...], index: int) -> "RouteTreeState":
        """Return a copy with a new child sequence and active index."""
        return replace(self, routes=tuple(routes), index=index)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        data: dict[str, Any] = {
            "routeName": self.route_name,
            "params": dict(self.params),
            "key": self.key,
        }
        if self.routes is not None:
            data["index"] = self.index
            data["routes"] = [route.to_dict() for route in self.routes]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RouteTreeState":
        """Create a RouteTreeState from dictionary."""
        routes = data.get("routes")
        return cls(
            route_name=data["routeName"],
            params=dict(data.get("params") or {}),
            key=data.get("key"),
            index=data.get("index"),
            routes=tuple(cls.from_dict(route) for route in routes) if routes is not None else None,
        )


@dataclass(frozen=True)
class Action:
    """Low-level router action, or a verb-tagged notification for a custom reducer."""

    type: ActionType | Verb | str
    route_name: str | None = None
    params: dict[str, Any] = field(default_factory=dict)
    key: str | None = None
    index: int | None = None
    actions: tuple["Action", ...] = ()


@dataclass
class NavigationSnapshot:
    """Externally observed navigation state, derived on every commit."""

    current_scene: str = ""
    prev_scene: str = ""
    current_params: dict[str, Any] = field(default_factory=dict)
    exit_phase: HookPhase = field(default_factory=lambda: HookPhase("exit"))
    enter_phase: HookPhase = field(default_factory=lambda: HookPhase("enter"))

    @property
    def on_exit_executed(self) -> bool:
        return self.exit_phase.executed

    @property
    def on_enter_executed(self) -> bool:
        return self.enter_phase.executed


@dataclass(frozen=True)
class SceneChange:
    """Change descriptor produced by one commit and consumed by subscribers.

    Attributes:
        prev_scene: Scene active before the commit
        current_scene: Scene active after the commit
        current_params: Leaf params at commit time
        verb: Verb that produced the commit, if any
        generation: Commit counter value for this commit
        exit_phase: Exit hook phase shared with the snapshot of this commit
        enter_phase: Enter hook phase shared with the snapshot of this commit
    """

    prev_scene: str
    current_scene: str
    current_params: dict[str, Any]
    verb: Verb | str | None
    generation: int
    exit_phase: HookPhase
    enter_phase: HookPhase

    @property
    def scene_changed(self) -> bool:
        return self.prev_scene != self.current_scene
