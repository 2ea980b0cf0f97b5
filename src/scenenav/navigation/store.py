"""Navigation store: the public navigation API.

The store normalizes high-level verbs into router actions, runs the custom
search and composition verbs (pop-to, pop-and-push) and wires the lifecycle
scheduler to the transition engine.

Architecture:
    - NavigationStore: verb normalization and public operations
    - TransitionEngine: computes and commits route trees
    - LifecycleScheduler: runs scene hooks after each commit
    - pop_to_search: finds a named ancestor by simulated back steps

Example:
    >>> store = NavigationStore(router=StackRouter({"Home": None, "Detail": None}))
    >>> store.register_scene("Detail", on_enter=load_detail)
    >>> store.push("Detail", {"id": 42})
    >>> store.current_scene
    'Detail'
"""

import logging
from collections.abc import Callable
from typing import Any

from ..config import NavigationSettings, get_settings
from . import actions
from .action_const import POP_VERBS, SUPPORTED_ACTIONS, Verb
from .event_emitter import EventCallback, NavigationEventEmitter
from .lifecycle import HookTable, LifecycleScheduler, SceneHooks
from .models import Action, NavigationSnapshot, RouteTreeState, SceneChange
from .params import filter_param, unite_params
from .pop_to import pop_to_search
from .resolver import resolve_active_leaf
from .router import Router
from .transition_engine import Reducer, SceneChangeListener, TransitionEngine

logger = logging.getLogger(__name__)


class NavigationStore:
    """Owns navigation state and exposes the navigation verbs.

    Construct one store per application and pass it to the code that
    navigates. Assigning a router dispatches an init action.
    """

    def __init__(
        self,
        router: Router | None = None,
        reducer: Reducer | None = None,
        settings: NavigationSettings | None = None,
        emit_event_callback: EventCallback | None = None,
    ) -> None:
        """Initialize the navigation store.

        Args:
            router: Router computing tree transitions
            reducer: Optional custom reducer, see TransitionEngine
            settings: Settings, defaults to get_settings()
            emit_event_callback: Optional callback for navigation events
        """
        self.settings = settings or get_settings()
        self.emit_event_callback = emit_event_callback
        self.hooks = HookTable()
        self.engine = TransitionEngine(reducer=reducer)
        self.lifecycle = LifecycleScheduler(
            self.hooks,
            params_provider=lambda: self.current_state().params,
            is_current=self._is_current if self.settings.drop_stale_hook_results else None,
            emit_event_callback=emit_event_callback,
        )
        self.engine.subscribe(self._emit_scene_changed)
        self.engine.subscribe(self.lifecycle.schedule)
        if router is not None:
            self.router = router

    @property
    def router(self) -> Router | None:
        return self.engine.router

    @router.setter
    def router(self, router: Router) -> None:
        self.engine.router = router
        self.engine.dispatch(actions.init())

    @property
    def reducer(self) -> Reducer | None:
        return self.engine.reducer

    @reducer.setter
    def reducer(self, reducer: Reducer | None) -> None:
        self.engine.reducer = reducer

    @property
    def state(self) -> RouteTreeState | None:
        """Authoritative route tree."""
        return self.engine.state

    @property
    def snapshot(self) -> NavigationSnapshot:
        return self.engine.snapshot

    @property
    def current_scene(self) -> str:
        return self.engine.snapshot.current_scene

    @property
    def prev_scene(self) -> str:
        return self.engine.snapshot.prev_scene

    @property
    def current_params(self) -> dict[str, Any]:
        return self.engine.snapshot.current_params

    def register_scene(
        self,
        route_name: str,
        on_enter: Callable[[dict[str, Any]], Any] | None = None,
        on_exit: Callable[[], Any] | None = None,
        success: Callable[[Any], Any] | None = None,
        failure: Callable[..., Any] | None = None,
    ) -> SceneHooks:
        """Register lifecycle hooks for a scene, see HookTable.register."""
        return self.hooks.register(route_name, on_enter, on_exit, success, failure)

    def subscribe(self, listener: SceneChangeListener) -> Callable[[], None]:
        """Register a listener for committed scene changes."""
        return self.engine.subscribe(listener)

    async def join(self) -> None:
        """Wait until all scheduled lifecycle hooks have finished."""
        await self.lifecycle.join()

    def current_state(self, state: RouteTreeState | None = None) -> RouteTreeState:
        """Return the active leaf of ``state`` or of the committed tree."""
        state = state or self.engine.state
        if state is None:
            raise ValueError("No navigation state committed yet")
        return resolve_active_leaf(state)

    def execute(self, verb: Verb | str, route_name: str | None = None, *params: Any) -> None:
        """Run a verb with merged params.

        A ``type`` key in the merged params overrides ``verb``.

        Args:
            verb: Navigation verb, member or string
            route_name: Target scene
            *params: Param objects merged left to right
        """
        res = unite_params(route_name, params)
        resolved = Verb.coerce(res.get("type") or verb)

        if resolved in (Verb.PUSH, Verb.PUSH_OR_POP):
            self.push(route_name, res)
        elif resolved is Verb.JUMP:
            self.jump(route_name, res)
        elif resolved is Verb.REPLACE:
            self.replace(route_name, res)
        elif resolved is Verb.RESET:
            self.reset(route_name, res)
        elif resolved in POP_VERBS:
            self.pop(res)
        elif resolved is Verb.POP_TO:
            self.pop_to(route_name, res)
        elif resolved is Verb.POP_AND_PUSH:
            self.pop_and_push(route_name, res)
        elif resolved is Verb.REFRESH:
            self.refresh({k: v for k, v in res.items() if k not in ("routeName", "type")})
        elif resolved is Verb.DRAWER_OPEN:
            self.drawer_open()
        elif resolved is Verb.DRAWER_CLOSE:
            self.drawer_close()
        else:
            self.run(resolved, route_name, None, res)

    def run(
        self,
        verb: Verb | str = Verb.PUSH,
        route_name: str | None = None,
        action_fields: dict[str, Any] | None = None,
        *params: Any,
    ) -> None:
        """Lower a verb into router actions and commit the result.

        Args:
            verb: Navigation verb
            route_name: Target scene
            action_fields: Extra Action fields (key, index, actions)
            *params: Param objects merged left to right
        """
        verb = Verb.coerce(verb)
        res = unite_params(route_name, params)

        action_type = SUPPORTED_ACTIONS.get(verb) if isinstance(verb, Verb) else None
        if action_type is not None:
            action = Action(
                type=action_type, route_name=route_name, params=res, **(action_fields or {})
            )
            self.engine.dispatch(action, verb, res)
            return

        if verb is Verb.POP_TO:
            found = pop_to_search(self.engine, route_name)
            if found is not None:
                self.engine.commit(found)
        elif verb is Verb.POP_AND_PUSH:
            self.pop()
            self.push(route_name, *params)

        # Notify the reducer of verbs the router does not understand
        if self.engine.reducer is not None:
            self.engine.commit(
                self.engine.reducer(
                    self.engine.state, Action(type=verb, route_name=route_name, params=res)
                )
            )

    def push(self, route_name: str, *params: Any) -> None:
        self.run(Verb.PUSH, route_name, None, *params)

    def jump(self, route_name: str, *params: Any) -> None:
        """Navigate to ``route_name`` unless it is already the active scene."""
        self.run(Verb.JUMP, route_name, None, *params)

    def pop(self, params: Any = None) -> None:
        """Go back one scene.

        A ``refresh`` entry in ``params`` is applied to the scene reached.
        """
        res = filter_param(params) if params else {}
        self.engine.dispatch(actions.back())
        if res.get("refresh"):
            self.refresh(res["refresh"])

    def pop_to(self, route_name: str, *params: Any) -> None:
        self.run(Verb.POP_TO, route_name, None, *params)

    def pop_and_push(self, route_name: str, *params: Any) -> None:
        self.run(Verb.POP_AND_PUSH, route_name, None, *params)

    def replace(self, route_name: str, *params: Any) -> None:
        """Replace the whole stack with a single ``route_name`` entry."""
        res = unite_params(route_name, params)
        self.run(
            Verb.REPLACE,
            route_name,
            {"key": route_name, "index": 0, "actions": (actions.navigate(route_name, res),)},
        )

    def reset(self, route_name: str, *params: Any) -> None:
        """Reset the root stack to a single ``route_name`` entry."""
        res = unite_params(route_name, params)
        self.run(
            Verb.RESET,
            route_name,
            {"key": None, "index": 0, "actions": (actions.navigate(route_name, res),)},
        )

    def refresh(self, params: dict[str, Any]) -> None:
        """Merge ``params`` into the active leaf."""
        self.engine.refresh(params)

    def drawer_open(self) -> None:
        self.engine.dispatch(actions.navigate(self.settings.drawer_open_route))

    def drawer_close(self) -> None:
        self.engine.dispatch(actions.navigate(self.settings.drawer_close_route))

    def _is_current(self, change: SceneChange) -> bool:
        # Same-scene commits (refresh) do not supersede an enter hook
        return self.engine.scene_changed_at <= change.generation

    def _emit_scene_changed(self, change: SceneChange) -> None:
        NavigationEventEmitter.emit_scene_changed(change, self.emit_event_callback)
