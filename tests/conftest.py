"""Pytest configuration and fixtures."""

import os

import pytest

# Keep structured navigation logs out of the test output
os.environ.setdefault("SCENENAV_DISABLE_CONSOLE_LOGGING", "1")

from scenenav.config import NavigationSettings, reset_settings
from scenenav.navigation import NavigationStore, RouteTreeState, StackRouter, TabRouter


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Default navigation settings."""
    return NavigationSettings()


@pytest.fixture
def stack_router():
    """Flat stack of scenes starting at Home."""
    return StackRouter(
        {"Home": None, "List": None, "Detail": None, "Profile": None, "Settings": None}
    )


@pytest.fixture
def tab_router():
    """Tabs whose Feed tab holds its own stack."""
    feed = StackRouter({"FeedList": None, "FeedItem": None}, key="FeedStack")
    return TabRouter({"Feed": feed, "Search": None, "Account": None})


@pytest.fixture
def store(stack_router, settings):
    """Store started on the Home scene."""
    return NavigationStore(router=stack_router, settings=settings)


@pytest.fixture
def nested_state():
    """Stack holding a tab navigator whose active tab is a stack."""
    return RouteTreeState.from_dict(
        {
            "routeName": "Root",
            "key": "root",
            "index": 1,
            "routes": [
                {"routeName": "Login", "key": "k-login"},
                {
                    "routeName": "Main",
                    "key": "k-main",
                    "index": 0,
                    "routes": [
                        {
                            "routeName": "Feed",
                            "key": "Feed",
                            "index": 1,
                            "routes": [
                                {"routeName": "FeedList", "key": "k-list"},
                                {"routeName": "FeedItem", "key": "k-item", "params": {"id": 3}},
                            ],
                        },
                        {"routeName": "Search", "key": "Search"},
                    ],
                },
            ],
        }
    )
