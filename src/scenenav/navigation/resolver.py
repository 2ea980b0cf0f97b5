"""Active leaf resolution inside a nested route tree."""

from .models import RouteTreeState


def resolve_active_leaf(state: RouteTreeState) -> RouteTreeState:
    """Descend ``routes[index]`` until a node without routes is reached."""
    if state.routes is None:
        return state
    return resolve_active_leaf(state.routes[state.index])
