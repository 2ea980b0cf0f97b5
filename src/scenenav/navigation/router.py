"""Routers computing the next route tree from a state and an action.

The navigation store treats a router as an injected collaborator: any object
with a ``compute_next(state, action)`` method will do. ``StackRouter`` and
``TabRouter`` are reference implementations covering pushed stacks, tab
switching and nesting of one navigator inside another.

Routers are pure: they never mutate the given state and return ``None`` for
actions they do not handle.

Example:
    >>> router = StackRouter({"Home": None, "Detail": None})
    >>> state = router.compute_next(None, init())
    >>> state = router.compute_next(state, navigate("Detail", {"id": 7}))
    >>> [route.route_name for route in state.routes]
    ['Home', 'Detail']
"""

import itertools
import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ..navigation_exceptions import RouteNotFoundException
from .action_const import ActionType
from .actions import init
from .models import Action, RouteTreeState

logger = logging.getLogger(__name__)

_key_counter = itertools.count()


def generate_key() -> str:
    """Generate a unique route key."""
    return f"id-{next(_key_counter)}"


@runtime_checkable
class Router(Protocol):
    """Pure transition function over route trees."""

    def compute_next(
        self, state: RouteTreeState | None, action: Action
    ) -> RouteTreeState | None: ...


def owns_navigator_key(state: RouteTreeState, key: str) -> bool:
    """Check whether ``state`` or a navigator below it carries ``key``."""
    if state.routes is None:
        return False
    if state.key == key:
        return True
    return any(owns_navigator_key(route, key) for route in state.routes)


def set_params_by_key(
    state: RouteTreeState, key: str | None, params: dict[str, Any]
) -> RouteTreeState | None:
    """Merge ``params`` into the node carrying ``key``.

    Returns:
        New tree, or None if no node has the key
    """
    if key is None:
        return None
    if state.key == key:
        return state.with_params(params)
    if state.routes is None:
        return None
    for position, route in enumerate(state.routes):
        updated = set_params_by_key(route, key, params)
        if updated is not None:
            routes = state.routes[:position] + (updated,) + state.routes[position + 1 :]
            return state.with_routes(routes, state.index)
    return None


class _BaseRouter:
    """Shared plumbing for routers with optional nested child navigators."""

    def __init__(
        self,
        routes: Mapping[str, "Router | None"],
        initial_route_name: str | None = None,
        initial_params: dict[str, Any] | None = None,
    ) -> None:
        if not routes:
            raise ValueError("A router needs at least one route")
        self.routes = dict(routes)
        self.initial_route_name = initial_route_name or next(iter(self.routes))
        if self.initial_route_name not in self.routes:
            raise RouteNotFoundException(self.initial_route_name, available=list(self.routes))
        self.initial_params = dict(initial_params or {})

    def child_router(self, route_name: str) -> "Router | None":
        return self.routes.get(route_name)

    def _build_route(
        self, route_name: str, params: dict[str, Any], key: str | None = None
    ) -> RouteTreeState:
        """Create a route node, initializing the child navigator if there is one."""
        key = key or generate_key()
        child = self.child_router(route_name)
        if child is None:
            return RouteTreeState(route_name=route_name, params=dict(params), key=key)
        child_state = child.compute_next(None, init(params))
        if child_state is None:
            raise RouteNotFoundException(route_name, reason="child navigator returned no state")
        return RouteTreeState(
            route_name=route_name,
            params=dict(params),
            key=key,
            index=child_state.index,
            routes=child_state.routes,
        )

    def _delegate(
        self, state: RouteTreeState, position: int, action: Action
    ) -> RouteTreeState | None:
        """Offer ``action`` to the child navigator at ``position``.

        Returns:
            Parent state with the child replaced, or None if the child
            is a scene or did not handle the action
        """
        route = state.routes[position]
        child = self.child_router(route.route_name)
        if child is None or route.routes is None:
            return None
        child_state = child.compute_next(route, action)
        if child_state is None:
            return None
        # Child navigators rebuild their own node, the parent keeps its identity
        child_state = RouteTreeState(
            route_name=route.route_name,
            params=child_state.params,
            key=route.key,
            index=child_state.index,
            routes=child_state.routes,
        )
        routes = state.routes[:position] + (child_state,) + state.routes[position + 1 :]
        return state.with_routes(routes, position)

    def _reset_owner(self, state: RouteTreeState, key: str | None) -> int | None:
        """Find the child navigator owning a reset key."""
        if key is None or key == state.key:
            return None
        for position, route in enumerate(state.routes):
            if owns_navigator_key(route, key):
                return position
        return None


class StackRouter(_BaseRouter):
    """Router for a stack of scenes where navigate pushes and back pops."""

    def __init__(
        self,
        routes: Mapping[str, "Router | None"],
        initial_route_name: str | None = None,
        initial_params: dict[str, Any] | None = None,
        key: str = "StackRouterRoot",
    ) -> None:
        super().__init__(routes, initial_route_name, initial_params)
        self.key = key

    def compute_next(
        self, state: RouteTreeState | None, action: Action
    ) -> RouteTreeState | None:
        if state is None:
            return self._initial_state(action)

        if action.type == ActionType.INIT:
            return state
        if action.type == ActionType.NAVIGATE:
            return self._navigate(state, action)
        if action.type == ActionType.BACK:
            return self._back(state, action)
        if action.type == ActionType.RESET:
            return self._reset(state, action)
        if action.type == ActionType.SET_PARAMS:
            return set_params_by_key(state, action.key, action.params)

        logger.debug(f"StackRouter ignoring action {action.type}")
        return None

    def _initial_state(self, action: Action) -> RouteTreeState | None:
        if action.type != ActionType.INIT:
            return None
        params = {**self.initial_params, **action.params}
        route = self._build_route(self.initial_route_name, params)
        return RouteTreeState(
            route_name=self.key, key=self.key, index=0, routes=(route,)
        )

    def _navigate(self, state: RouteTreeState, action: Action) -> RouteTreeState | None:
        delegated = self._delegate(state, state.index, action)
        if delegated is not None:
            return delegated

        if action.route_name not in self.routes:
            return None

        route = self._build_route(action.route_name, action.params)
        routes = state.routes[: state.index + 1] + (route,)
        return state.with_routes(routes, len(routes) - 1)

    def _back(self, state: RouteTreeState, action: Action) -> RouteTreeState | None:
        delegated = self._delegate(state, state.index, action)
        if delegated is not None:
            return delegated

        if state.index == 0:
            return None
        return state.with_routes(state.routes[: state.index], state.index - 1)

    def _reset(self, state: RouteTreeState, action: Action) -> RouteTreeState | None:
        owner = self._reset_owner(state, action.key)
        if owner is not None:
            delegated = self._delegate(state, owner, action)
            if delegated is not None:
                return delegated

        if not action.actions:
            return None
        if any(nav.route_name not in self.routes for nav in action.actions):
            return None
        index = action.index or 0
        if not 0 <= index < len(action.actions):
            return None

        routes = tuple(self._build_route(nav.route_name, nav.params) for nav in action.actions)
        return state.with_routes(routes, index)


class TabRouter(_BaseRouter):
    """Router for a fixed set of tabs, one of which is selected."""

    def compute_next(
        self, state: RouteTreeState | None, action: Action
    ) -> RouteTreeState | None:
        if state is None:
            return self._initial_state(action)

        if action.type == ActionType.INIT:
            return state
        if action.type == ActionType.NAVIGATE:
            return self._navigate(state, action)
        if action.type == ActionType.BACK:
            return self._back(state, action)
        if action.type == ActionType.RESET:
            owner = self._reset_owner(state, action.key)
            return self._delegate(state, owner, action) if owner is not None else None
        if action.type == ActionType.SET_PARAMS:
            return set_params_by_key(state, action.key, action.params)

        logger.debug(f"TabRouter ignoring action {action.type}")
        return None

    def _initial_state(self, action: Action) -> RouteTreeState | None:
        if action.type != ActionType.INIT:
            return None
        names = list(self.routes)
        routes = tuple(
            self._build_route(
                name,
                self.initial_params if name == self.initial_route_name else {},
                key=name,
            )
            for name in names
        )
        return RouteTreeState(
            route_name="TabRouter",
            params=dict(action.params),
            key=generate_key(),
            index=names.index(self.initial_route_name),
            routes=routes,
        )

    def _navigate(self, state: RouteTreeState, action: Action) -> RouteTreeState | None:
        names = [route.route_name for route in state.routes]
        if action.route_name in names:
            position = names.index(action.route_name)
            if position == state.index and not action.params:
                return state
            selected = state.routes[position]
            if action.params:
                selected = selected.with_params(action.params)
            routes = state.routes[:position] + (selected,) + state.routes[position + 1 :]
            return state.with_routes(routes, position)

        # Active tab first, then the others
        order = [state.index] + [i for i in range(len(state.routes)) if i != state.index]
        for position in order:
            delegated = self._delegate(state, position, action)
            if delegated is not None:
                return delegated
        return None

    def _back(self, state: RouteTreeState, action: Action) -> RouteTreeState | None:
        delegated = self._delegate(state, state.index, action)
        if delegated is not None:
            return delegated

        initial = [route.route_name for route in state.routes].index(self.initial_route_name)
        if state.index != initial:
            return state.with_routes(state.routes, initial)
        return None
