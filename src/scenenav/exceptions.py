"""Exception hierarchy for scenenav.

This module re-exports all exceptions from domain-specific modules
for convenience.
"""

from .base_exceptions import ScenenavException
from .navigation_exceptions import (
    InvalidRouteStateException,
    NavigationException,
    RouteNotFoundException,
    RouterNotConfiguredException,
    SceneAlreadyRegisteredException,
)

__all__ = [
    "ScenenavException",
    "NavigationException",
    "RouterNotConfiguredException",
    "RouteNotFoundException",
    "InvalidRouteStateException",
    "SceneAlreadyRegisteredException",
]
