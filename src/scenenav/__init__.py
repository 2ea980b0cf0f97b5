"""scenenav: navigation state controller for scene-tree applications.

The store owns the route tree, lowers navigation verbs (push, pop, jump,
replace, reset, pop-to, pop-and-push, refresh) into router actions and runs
per-scene enter/exit hooks as the active scene changes.
"""

from .config import NavigationSettings, get_settings, reset_settings
from .exceptions import (
    InvalidRouteStateException,
    NavigationException,
    RouteNotFoundException,
    RouterNotConfiguredException,
    ScenenavException,
    SceneAlreadyRegisteredException,
)
from .navigation import (
    Action,
    ActionType,
    HookTable,
    LifecycleScheduler,
    NavigationSnapshot,
    NavigationStore,
    RouteTreeState,
    Router,
    SceneChange,
    StackRouter,
    TabRouter,
    TransitionEngine,
    Verb,
    actions,
    resolve_active_leaf,
)

__version__ = "0.1.0"

__all__ = [
    # Store
    "NavigationStore",
    "TransitionEngine",
    "LifecycleScheduler",
    "HookTable",
    # Models
    "Action",
    "ActionType",
    "NavigationSnapshot",
    "RouteTreeState",
    "SceneChange",
    "Verb",
    "actions",
    "resolve_active_leaf",
    # Routers
    "Router",
    "StackRouter",
    "TabRouter",
    # Config
    "NavigationSettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "ScenenavException",
    "NavigationException",
    "RouterNotConfiguredException",
    "RouteNotFoundException",
    "InvalidRouteStateException",
    "SceneAlreadyRegisteredException",
]
