"""Transition engine: computes, commits and publishes route tree changes.

This module owns the authoritative route tree and the derived navigation
snapshot.

Architecture:
    - TransitionEngine: computes next states and commits them
    - Delegates tree transitions to a Router, or entirely to a custom reducer
    - Produces a SceneChange descriptor per commit and pushes it to subscribers

Commit steps:
    1. Reject a null state
    2. Skip a Jump that resolves to the already active scene
    3. Store the new tree
    4. Give a custom reducer a blur pseudo-action for the scene being left
    5. Merge the params of a Jump into the active leaf, within the same commit
    6. Shift the previous scene and reset the hook phases
    7. Derive current scene and params from the active leaf
    8. Give a custom reducer a focus pseudo-action for the new scene

Example:
    >>> engine = TransitionEngine(router=StackRouter({"Home": None, "Detail": None}))
    >>> engine.dispatch(init())
    >>> change = engine.dispatch(navigate("Detail"), Verb.PUSH)
    >>> change.prev_scene, change.current_scene
    ('Home', 'Detail')
"""

import logging
from collections.abc import Callable
from typing import Any

from ..logging import NavigationLogger
from ..navigation_exceptions import RouterNotConfiguredException
from .action_const import Verb
from .actions import set_params
from .models import Action, NavigationSnapshot, RouteTreeState, SceneChange
from .resolver import resolve_active_leaf
from .router import Router

logger = logging.getLogger(__name__)

Reducer = Callable[[RouteTreeState | None, Action], RouteTreeState | None]
SceneChangeListener = Callable[[SceneChange], None]


class TransitionEngine:
    """Computes next route trees and commits them as the authoritative state."""

    def __init__(self, router: Router | None = None, reducer: Reducer | None = None) -> None:
        """Initialize TransitionEngine.

        Args:
            router: Router computing tree transitions
            reducer: Optional custom reducer replacing the router entirely
        """
        self.router = router
        self.reducer = reducer
        self.snapshot = NavigationSnapshot()
        self.generation = 0
        self.scene_changed_at = 0
        self._state: RouteTreeState | None = None
        self._listeners: list[SceneChangeListener] = []
        self._nav_logger = NavigationLogger()

    @property
    def state(self) -> RouteTreeState | None:
        """Authoritative route tree."""
        return self._state

    def subscribe(self, listener: SceneChangeListener) -> Callable[[], None]:
        """Register a listener called with every committed SceneChange.

        Returns:
            Callable removing the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def compute_next(
        self, state: RouteTreeState | None, action: Action
    ) -> RouteTreeState | None:
        """Compute the state resulting from ``action`` without committing it.

        Returns:
            Next state, or None if the action was not recognized
        """
        if self.reducer is not None:
            return self.reducer(state, action)
        if self.router is None:
            raise RouterNotConfiguredException(action=str(action.type))
        return self.router.compute_next(state, action)

    def dispatch(
        self,
        action: Action,
        verb: Verb | str | None = None,
        params: dict[str, Any] | None = None,
    ) -> SceneChange | None:
        """Compute the next state for ``action`` and commit it."""
        return self.commit(self.compute_next(self._state, action), verb, params)

    def commit(
        self,
        new_state: RouteTreeState | None,
        verb: Verb | str | None = None,
        params: dict[str, Any] | None = None,
    ) -> SceneChange | None:
        """Commit ``new_state`` as the authoritative tree.

        Args:
            new_state: State to commit, None is ignored
            verb: Verb that produced the state
            params: Normalized params supplied with the verb

        Returns:
            SceneChange for the commit, or None if nothing was committed
        """
        if new_state is None:
            return None

        leaf = resolve_active_leaf(new_state)
        if verb is Verb.JUMP and leaf.route_name == self.snapshot.current_scene:
            logger.debug(f"Jump to active scene '{leaf.route_name}' ignored")
            return None

        self._state = new_state
        leaving = self.snapshot.current_scene

        if self.reducer is not None:
            overridden = self.reducer(new_state, Action(type=Verb.BLUR, route_name=leaving))
            if overridden:
                self._state = overridden

        if verb is Verb.JUMP and params and set(params) - {"routeName"}:
            refreshed = self.compute_next(
                self._state, set_params(resolve_active_leaf(self._state).key, params)
            )
            if refreshed is not None:
                self._state = refreshed
                leaf = resolve_active_leaf(refreshed)

        self.generation += 1
        if leaving != leaf.route_name:
            self.scene_changed_at = self.generation
        self.snapshot = NavigationSnapshot(
            prev_scene=leaving,
            current_scene=leaf.route_name,
            current_params=leaf.params,
        )
        change = SceneChange(
            prev_scene=leaving,
            current_scene=leaf.route_name,
            current_params=leaf.params,
            verb=verb,
            generation=self.generation,
            exit_phase=self.snapshot.exit_phase,
            enter_phase=self.snapshot.enter_phase,
        )

        if self.reducer is not None:
            overridden = self.reducer(
                self._state,
                Action(type=Verb.FOCUS, route_name=leaf.route_name, params=leaf.params),
            )
            if overridden:
                self._state = overridden

        self._nav_logger.log_transition(
            leaving,
            leaf.route_name,
            verb=getattr(verb, "value", verb),
            generation=change.generation,
        )
        self._notify(change)
        return change

    def refresh(self, params: dict[str, Any]) -> SceneChange | None:
        """Merge ``params`` into the active leaf, addressed by its stable key."""
        if self._state is None:
            logger.warning("Refresh requested before any state was committed")
            return None
        key = resolve_active_leaf(self._state).key
        return self.dispatch(set_params(key, params))

    def _notify(self, change: SceneChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                logger.error(f"Scene change listener failed: {e}", exc_info=True)
