"""Search for a named ancestor scene by simulating back transitions."""

import logging
from typing import TYPE_CHECKING

from .actions import back
from .models import RouteTreeState
from .resolver import resolve_active_leaf

if TYPE_CHECKING:
    from .transition_engine import TransitionEngine

logger = logging.getLogger(__name__)


def pop_to_search(engine: "TransitionEngine", route_name: str) -> RouteTreeState | None:
    """Find the state reached by going back until ``route_name`` is active.

    Back transitions are computed with ``engine.compute_next`` and never
    committed. The search stops when the target scene is found, when the
    starting scene comes round again, or when back yields no state.

    Args:
        engine: Engine holding the committed state
        route_name: Scene to pop to

    Returns:
        The simulated state whose active leaf is ``route_name``, or None
    """
    start_scene = engine.snapshot.current_scene
    cursor = engine.state
    next_scene = ""
    new_state = cursor
    steps = 0

    while next_scene != start_scene and new_state is not None and next_scene != route_name:
        new_state = engine.compute_next(cursor, back())
        steps += 1
        if new_state is not None:
            next_scene = resolve_active_leaf(new_state).route_name
            if next_scene != route_name:
                cursor = new_state

    if next_scene == route_name:
        logger.debug(f"Found '{route_name}' after {steps} back steps")
        return new_state

    logger.debug(f"Scene '{route_name}' not found in the back history ({steps} steps)")
    return None
