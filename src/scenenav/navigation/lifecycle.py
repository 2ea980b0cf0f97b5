"""Scene lifecycle hooks and their scheduling.

This module runs per-scene enter/exit hooks whenever a commit changes the
active scene.

Architecture:
    - HookTable: per-scene hooks registered once by the application
    - LifecycleScheduler: consumes SceneChange descriptors and runs hooks
      as fire-and-forget asyncio tasks

Hook cycle for one commit:
    1. Exit hook of the previous scene, started once; an awaitable result
       runs in its own task and is never awaited by the cycle
    2. Enter hook of the new scene, started once; its awaited result selects
       the ``success(result)`` or ``failure()`` continuation, an error
       selects ``failure({"error": error})``

Errors never propagate to the navigation call that produced the commit.

Example:
    >>> hooks = HookTable()
    >>> hooks.register("Profile", on_enter=load_profile, success=show, failure=retry)
    >>> scheduler = LifecycleScheduler(hooks, params_provider=lambda: {})
    >>> engine.subscribe(scheduler.schedule)
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from ..logging import NavigationLogger
from ..navigation_exceptions import SceneAlreadyRegisteredException
from .event_emitter import EventCallback, NavigationEventEmitter
from .models import SceneChange

logger = logging.getLogger(__name__)


@dataclass
class SceneHooks:
    """Lifecycle hooks of one scene."""

    route_name: str
    on_enter: Callable[[dict[str, Any]], Any] | None = None
    on_exit: Callable[[], Any] | None = None
    success: Callable[[Any], Any] | None = None
    failure: Callable[..., Any] | None = None


class HookTable:
    """Registry of scene hooks keyed by route name."""

    def __init__(self) -> None:
        self._hooks: dict[str, SceneHooks] = {}

    def register(
        self,
        route_name: str,
        on_enter: Callable[[dict[str, Any]], Any] | None = None,
        on_exit: Callable[[], Any] | None = None,
        success: Callable[[Any], Any] | None = None,
        failure: Callable[..., Any] | None = None,
    ) -> SceneHooks:
        """Register hooks for a scene.

        Args:
            route_name: Scene the hooks belong to
            on_enter: Called with the leaf params when the scene becomes active
            on_exit: Called when the scene stops being active
            success: Called with a truthy enter result
            failure: Called without arguments for a falsy enter result, or
                with ``{"error": error}`` when the enter hook raised

        Returns:
            The registered SceneHooks

        Raises:
            SceneAlreadyRegisteredException: If the scene already has hooks
        """
        if route_name in self._hooks:
            raise SceneAlreadyRegisteredException(route_name)
        hooks = SceneHooks(route_name, on_enter, on_exit, success, failure)
        self._hooks[route_name] = hooks
        logger.debug(f"Registered hooks for scene: {route_name}")
        return hooks

    def unregister(self, route_name: str) -> None:
        self._hooks.pop(route_name, None)

    def get(self, route_name: str) -> SceneHooks | None:
        return self._hooks.get(route_name)

    def __contains__(self, route_name: object) -> bool:
        return route_name in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)


def _default_success(result: Any) -> None:
    pass


def _default_failure(error: Any = None) -> None:
    pass


class LifecycleScheduler:
    """Runs exit/enter hooks for committed scene changes.

    Each hook runs at most once per commit: the phases carried by the
    SceneChange are shared with the snapshot of that commit, so scheduling
    the same change twice is harmless.
    """

    def __init__(
        self,
        hooks: HookTable,
        params_provider: Callable[[], dict[str, Any]],
        is_current: Callable[[SceneChange], bool] | None = None,
        emit_event_callback: EventCallback | None = None,
    ) -> None:
        """Initialize LifecycleScheduler.

        Args:
            hooks: Hook table to read scene hooks from
            params_provider: Returns the active leaf params at call time
            is_current: Completion guard, False drops the continuation of a
                superseded commit. Continuations always run when omitted.
            emit_event_callback: Optional callback for emitting events
        """
        self.hooks = hooks
        self.params_provider = params_provider
        self.is_current = is_current
        self.emit_event_callback = emit_event_callback
        self._tasks: set[asyncio.Task] = set()
        self._nav_logger = NavigationLogger()

    @property
    def pending(self) -> int:
        """Number of hook tasks not yet finished."""
        return sum(1 for task in self._tasks if not task.done())

    def schedule(self, change: SceneChange) -> None:
        """Start the hook cycle for ``change`` without waiting for it.

        Without a running event loop the cycle runs to completion before
        returning.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._run_blocking(change)
            return
        self._track(loop.create_task(self.run(change)))

    async def join(self) -> None:
        """Wait for all scheduled cycles and exit hook tasks."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def run(self, change: SceneChange) -> None:
        """Run the hook cycle for one change."""
        try:
            self._run_exit(change)
        except Exception as e:
            logger.error(f"Error running exit hook: {e}", exc_info=True)
        try:
            await self._run_enter(change)
        except Exception as e:
            logger.error(f"Error handling scene change: {e}", exc_info=True)

    def _run_blocking(self, change: SceneChange) -> None:
        # Private loop, the caller's current event loop is left untouched
        loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(self._run_to_completion(change))
        finally:
            loop.close()

    async def _run_to_completion(self, change: SceneChange) -> None:
        await self.run(change)
        await self.join()

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _run_exit(self, change: SceneChange) -> None:
        scene = change.prev_scene
        if not scene or not change.scene_changed or change.exit_phase.executed:
            return

        change.exit_phase.begin()
        entry = self.hooks.get(scene)
        if entry is None or entry.on_exit is None:
            change.exit_phase.finish()
            return

        try:
            res = entry.on_exit()
        except Exception as e:
            change.exit_phase.finish()
            self._exit_failed(scene, e)
            return

        if inspect.isawaitable(res):
            task = asyncio.ensure_future(res)
            task.add_done_callback(partial(self._exit_settled, change))
            self._track(task)
        else:
            change.exit_phase.finish()

    def _exit_settled(self, change: SceneChange, task: asyncio.Future) -> None:
        if task.cancelled():
            return
        change.exit_phase.finish()
        error = task.exception()
        if error is not None:
            self._exit_failed(change.prev_scene, error)

    def _exit_failed(self, scene: str, error: BaseException) -> None:
        logger.error(f"Error during onExit handler of '{scene}': {error}", exc_info=error)
        self._nav_logger.log_hook(scene, "on_exit", "failed", error=error)
        self._emit(NavigationEventEmitter.emit_hook_exit_failed, scene, error)

    def _emit(self, emitter: Callable[..., None], scene: str, payload: Any) -> None:
        """Send a hook event, observer errors are logged and never reach the hook."""
        try:
            emitter(scene, payload, self.emit_event_callback)
        except Exception as e:
            logger.error(f"Event callback failed for scene '{scene}': {e}", exc_info=True)

    async def _run_enter(self, change: SceneChange) -> None:
        scene = change.current_scene
        if not scene or not change.scene_changed or change.enter_phase.executed:
            return
        entry = self.hooks.get(scene)
        if entry is None:
            return

        change.enter_phase.begin()
        if entry.on_enter is None:
            change.enter_phase.finish()
            return

        success = entry.success or _default_success
        failure = entry.failure or _default_failure
        try:
            res = entry.on_enter(self.params_provider())
            if inspect.isawaitable(res):
                res = await res
            if not self._still_current(change):
                return
            if res:
                change.enter_phase.succeed()
                self._nav_logger.log_hook(scene, "on_enter", "succeeded")
                self._emit(NavigationEventEmitter.emit_hook_enter_succeeded, scene, res)
                success(res)
            else:
                change.enter_phase.fail()
                self._nav_logger.log_hook(scene, "on_enter", "failed")
                self._emit(NavigationEventEmitter.emit_hook_enter_failed, scene, None)
                failure()
        except Exception as e:
            if change.enter_phase.state == "pending":
                change.enter_phase.fail()
            if not self._still_current(change):
                return
            self._nav_logger.log_hook(scene, "on_enter", "failed", error=e)
            self._emit(NavigationEventEmitter.emit_hook_enter_failed, scene, e)
            failure({"error": e})

    def _still_current(self, change: SceneChange) -> bool:
        if self.is_current is None or self.is_current(change):
            return True
        if change.enter_phase.state == "pending":
            change.enter_phase.finish()
        self._nav_logger.log_hook(
            change.current_scene, "on_enter", "skipped", generation=change.generation
        )
        return False
