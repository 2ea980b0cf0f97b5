"""Event emission for navigation commits and lifecycle hooks.

Events are delivered through an optional ``emit_event_callback(event_type, data)``
so that UI layers or test harnesses can observe navigation without
subscribing to the store directly.

Example:
    >>> def callback(event_type, data):
    ...     print(event_type, data["current_scene"])
    >>> NavigationEventEmitter.emit_scene_changed(change, callback)
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from .models import SceneChange

logger = logging.getLogger(__name__)

EventCallback = Callable[[str, dict], None]


class NavigationEventEmitter:
    """Handles structured event emission for navigation operations."""

    @staticmethod
    def emit_scene_changed(change: SceneChange, emit_event_callback: EventCallback | None) -> None:
        """Emit a committed scene change.

        Args:
            change: Change descriptor of the commit
            emit_event_callback: Optional callback for emitting events
        """
        if emit_event_callback:
            emit_event_callback(
                "scene_changed",
                {
                    "prev_scene": change.prev_scene,
                    "current_scene": change.current_scene,
                    "params": dict(change.current_params),
                    "verb": NavigationEventEmitter._verb_name(change.verb),
                    "generation": change.generation,
                    "timestamp": NavigationEventEmitter._timestamp(),
                },
            )

    @staticmethod
    def emit_hook_enter_succeeded(
        scene: str, result: Any, emit_event_callback: EventCallback | None
    ) -> None:
        """Emit a resolved enter hook.

        Args:
            scene: Scene whose enter hook resolved
            result: Truthy hook result handed to the success continuation
            emit_event_callback: Optional callback for emitting events
        """
        if emit_event_callback:
            emit_event_callback(
                "hook_enter_succeeded",
                {
                    "scene": scene,
                    "result": result,
                    "timestamp": NavigationEventEmitter._timestamp(),
                },
            )

    @staticmethod
    def emit_hook_enter_failed(
        scene: str, error: BaseException | None, emit_event_callback: EventCallback | None
    ) -> None:
        """Emit a falsy or failed enter hook.

        Args:
            scene: Scene whose enter hook failed
            error: Raised error, None when the hook resolved falsy
            emit_event_callback: Optional callback for emitting events
        """
        if emit_event_callback:
            emit_event_callback(
                "hook_enter_failed",
                {
                    "scene": scene,
                    "error": str(error) if error is not None else None,
                    "timestamp": NavigationEventEmitter._timestamp(),
                },
            )

    @staticmethod
    def emit_hook_exit_failed(
        scene: str, error: BaseException, emit_event_callback: EventCallback | None
    ) -> None:
        """Emit an exit hook error.

        Args:
            scene: Scene whose exit hook raised
            error: Raised error
            emit_event_callback: Optional callback for emitting events
        """
        if emit_event_callback:
            emit_event_callback(
                "hook_exit_failed",
                {
                    "scene": scene,
                    "error": str(error),
                    "timestamp": NavigationEventEmitter._timestamp(),
                },
            )

    @staticmethod
    def _verb_name(verb: Any) -> str | None:
        if verb is None:
            return None
        return getattr(verb, "value", str(verb))

    @staticmethod
    def _timestamp() -> str:
        """Get current timestamp for events.

        Returns:
            ISO format timestamp string
        """
        return datetime.now().isoformat()
