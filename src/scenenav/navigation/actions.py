"""Action constructors producing the canonical low-level router actions."""

from collections.abc import Iterable
from typing import Any

from .action_const import ActionType
from .models import Action


def navigate(
    route_name: str, params: dict[str, Any] | None = None, key: str | None = None
) -> Action:
    return Action(type=ActionType.NAVIGATE, route_name=route_name, params=dict(params or {}), key=key)


def back(key: str | None = None) -> Action:
    return Action(type=ActionType.BACK, key=key)


def reset(actions: Iterable[Action], index: int = 0, key: str | None = None) -> Action:
    """Build a reset action replacing a stack with the routes of ``actions``.

    Args:
        actions: Navigate actions, one per route of the new stack
        index: Active route of the new stack
        key: State key of the navigator to reset, None for the root
    """
    return Action(type=ActionType.RESET, index=index, key=key, actions=tuple(actions))


def set_params(key: str | None, params: dict[str, Any]) -> Action:
    return Action(type=ActionType.SET_PARAMS, key=key, params=dict(params))


def init(params: dict[str, Any] | None = None) -> Action:
    return Action(type=ActionType.INIT, params=dict(params or {}))
