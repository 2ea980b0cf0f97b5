"""Navigation exceptions.

This module contains exceptions for route trees, routers and
scene hook registration.
"""

from .base_exceptions import ScenenavException


class NavigationException(ScenenavException):
    """Base exception for navigation errors."""

    pass


class RouterNotConfiguredException(NavigationException):
    """Raised when a transition is computed before a router or reducer is set."""

    def __init__(self, **kwargs) -> None:
        super().__init__(
            "No router or custom reducer configured",
            error_code="ROUTER_NOT_CONFIGURED",
            context=kwargs,
        )


class RouteNotFoundException(NavigationException):
    """Raised when a router is configured with an unknown route name."""

    def __init__(self, route_name: str, **kwargs) -> None:
        """Initialize with route name."""
        super().__init__(
            f"Route '{route_name}' not found",
            error_code="ROUTE_NOT_FOUND",
            context={"route_name": route_name, **kwargs},
        )


class InvalidRouteStateException(NavigationException):
    """Raised when a route tree node breaks the leaf/container invariant."""

    def __init__(self, route_name: str, reason: str, **kwargs) -> None:
        """Initialize with node details."""
        super().__init__(
            f"Route state '{route_name}' is invalid: {reason}",
            error_code="INVALID_ROUTE_STATE",
            context={"route_name": route_name, "reason": reason, **kwargs},
        )


class SceneAlreadyRegisteredException(NavigationException):
    """Raised when hooks are registered twice for the same scene."""

    def __init__(self, route_name: str, **kwargs) -> None:
        """Initialize with scene name."""
        super().__init__(
            f"Scene '{route_name}' already has registered hooks",
            error_code="SCENE_EXISTS",
            context={"route_name": route_name, **kwargs},
        )
