"""Navigation package.

This package handles the navigation state of a scene tree:
- Route tree models and active leaf resolution
- Routers and action constructors
- The transition engine committing route trees
- Scene lifecycle hooks
- The navigation store exposing the navigation verbs
"""

from . import actions
from .action_const import SUPPORTED_ACTIONS, ActionType, Verb
from .event_emitter import NavigationEventEmitter
from .hook_phase import HookPhase
from .lifecycle import HookTable, LifecycleScheduler, SceneHooks
from .models import Action, NavigationSnapshot, RouteTreeState, SceneChange
from .params import filter_param, unite_params
from .pop_to import pop_to_search
from .resolver import resolve_active_leaf
from .router import Router, StackRouter, TabRouter
from .store import NavigationStore
from .transition_engine import TransitionEngine

__all__ = [
    "actions",
    "Action",
    "ActionType",
    "HookPhase",
    "HookTable",
    "LifecycleScheduler",
    "NavigationEventEmitter",
    "NavigationSnapshot",
    "NavigationStore",
    "RouteTreeState",
    "Router",
    "SUPPORTED_ACTIONS",
    "SceneChange",
    "SceneHooks",
    "StackRouter",
    "TabRouter",
    "TransitionEngine",
    "Verb",
    "filter_param",
    "pop_to_search",
    "resolve_active_leaf",
    "unite_params",
]
