"""Tests for NavigationStore."""

import asyncio
from unittest.mock import Mock

import pytest

from scenenav.config import NavigationSettings
from scenenav.navigation import (
    Action,
    ActionType,
    NavigationStore,
    RouteTreeState,
    StackRouter,
    Verb,
)


def names(state):
    return [route.route_name for route in state.routes]


class RecordingRouter:
    """Router double recording the actions it receives."""

    def __init__(self, router):
        self.router = router
        self.actions = []

    def compute_next(self, state, action):
        self.actions.append(action)
        return self.router.compute_next(state, action)


class TestStoreBasics:
    """Test store construction and state access."""

    def test_router_assignment_dispatches_init(self, stack_router, settings):
        store = NavigationStore(settings=settings)
        assert store.state is None

        store.router = stack_router

        assert store.current_scene == "Home"
        assert names(store.state) == ["Home"]

    def test_current_state_without_state(self, settings):
        with pytest.raises(ValueError):
            NavigationStore(settings=settings).current_state()

    def test_current_state_of_given_tree(self, store, nested_state):
        assert store.current_state(nested_state).route_name == "FeedItem"

    def test_uses_global_settings_by_default(self, stack_router):
        store = NavigationStore(router=stack_router)

        assert store.settings.drawer_open_route == "DrawerOpen"


class TestStoreVerbs:
    """Test the public navigation verbs."""

    def test_push(self, store):
        store.push("Detail", {"id": 1})

        assert store.current_scene == "Detail"
        assert store.prev_scene == "Home"
        assert store.current_params == {"id": 1, "routeName": "Detail"}

    def test_pop(self, store):
        store.push("Detail")

        store.pop()

        assert store.current_scene == "Home"
        assert store.prev_scene == "Detail"

    def test_pop_at_root_is_noop(self, store):
        generation = store.engine.generation

        store.pop()

        assert store.engine.generation == generation
        assert store.current_scene == "Home"

    def test_pop_with_refresh(self, store):
        store.push("List")
        store.push("Detail")

        store.pop({"refresh": {"stale": False}})

        assert store.current_scene == "List"
        assert store.current_state().params["stale"] is False

    def test_replace_gives_single_entry_stack(self, store):
        store.push("List")
        store.push("Detail")

        store.replace("Profile")

        assert names(store.state) == ["Profile"]
        assert store.state.index == 0
        assert store.current_scene == "Profile"

    def test_reset_gives_single_entry_stack(self, store):
        store.push("List")

        store.reset("Settings", {"section": "privacy"})

        assert names(store.state) == ["Settings"]
        assert store.state.index == 0
        assert store.current_state().params["section"] == "privacy"

    def test_replace_and_reset_agree(self, stack_router, settings):
        replaced = NavigationStore(router=stack_router, settings=settings)
        reset = NavigationStore(router=stack_router, settings=settings)
        for store in (replaced, reset):
            store.push("List")
            store.push("Detail")

        replaced.replace("Profile")
        reset.reset("Profile")

        assert names(replaced.state) == names(reset.state) == ["Profile"]
        assert replaced.state.index == reset.state.index == 0

    def test_jump_to_active_scene_is_idempotent(self, store):
        on_enter = Mock(return_value=True)
        on_exit = Mock()
        store.register_scene("Detail", on_enter=on_enter, on_exit=on_exit)
        store.push("Detail", {"id": 1})
        on_enter.reset_mock()
        snapshot = store.snapshot
        state = store.state

        store.jump("Detail", {"id": 2})

        assert store.snapshot is snapshot
        assert store.state is state
        assert store.current_scene == "Detail"
        assert store.prev_scene == "Home"
        assert store.current_params["id"] == 1
        on_enter.assert_not_called()
        on_exit.assert_not_called()

    def test_jump_with_params_refreshes(self, settings, tab_router):
        store = NavigationStore(router=tab_router, settings=settings)

        store.jump("Account", {"tab": "billing"})

        assert store.current_scene == "Account"
        assert store.current_state().params["tab"] == "billing"

    def test_jump_with_params_is_one_scene_change(self, settings, tab_router):
        store = NavigationStore(router=tab_router, settings=settings)
        on_exit = Mock()
        on_enter = Mock(return_value=True)
        store.register_scene("FeedList", on_exit=on_exit)
        store.register_scene("Account", on_enter=on_enter)
        changes = []
        store.subscribe(changes.append)

        store.jump("Account", {"tab": "billing"})

        assert [(c.prev_scene, c.current_scene) for c in changes] == [("FeedList", "Account")]
        assert store.prev_scene == "FeedList"
        assert store.current_params["tab"] == "billing"
        assert store.snapshot.on_exit_executed
        assert store.snapshot.on_enter_executed
        on_exit.assert_called_once()
        on_enter.assert_called_once_with(
            {"tab": "billing", "routeName": "Account"}
        )

    def test_refresh_by_key(self, settings):
        store = NavigationStore(router=StackRouter({"Profile": None}), settings=settings)
        store.engine.commit(
            RouteTreeState(
                "Root",
                key="root",
                index=0,
                routes=(RouteTreeState("Profile", {"id": 1}, key="k1"),),
            )
        )

        store.refresh({"id": 2})

        leaf = store.current_state()
        assert leaf.params["id"] == 2
        assert leaf.route_name == "Profile"
        assert leaf.key == "k1"

    def test_pop_to_three_levels_back(self, settings):
        router = RecordingRouter(StackRouter({"X": None, "A": None, "B": None, "C": None}))
        store = NavigationStore(router=router, settings=settings)
        for name in ("A", "B", "C"):
            store.push(name)
        commits = Mock()
        store.subscribe(commits)
        router.actions.clear()

        store.pop_to("X")

        assert [action.type for action in router.actions] == [ActionType.BACK] * 3
        commits.assert_called_once()
        assert names(store.state) == ["X"]
        assert store.current_scene == "X"

    def test_pop_to_missing_scene_leaves_state(self, store):
        store.push("List")
        store.push("Detail")
        commits = Mock()
        store.subscribe(commits)
        state = store.state

        store.pop_to("NotInStack")

        commits.assert_not_called()
        assert store.state is state

    def test_pop_and_push(self, store):
        store.push("List")
        store.push("Profile")
        store.pop()
        store.push("Detail")
        assert names(store.state) == ["Home", "List", "Detail"]

        store.pop_and_push("Settings")

        assert names(store.state) == ["Home", "List", "Settings"]

    def test_pop_and_push_from_two_entries(self, settings):
        store = NavigationStore(
            router=StackRouter({"A": None, "B": None, "C": None}), settings=settings
        )
        store.push("C")

        store.pop_and_push("B", {"n": 1})

        assert names(store.state) == ["A", "B"]
        assert store.current_params["n"] == 1

    def test_drawer_actions(self, settings):
        router = RecordingRouter(StackRouter({"Home": None, "DrawerOpen": None}))
        store = NavigationStore(router=router, settings=settings)

        store.drawer_open()
        store.drawer_close()

        routes = [action.route_name for action in router.actions[1:]]
        assert routes == ["DrawerOpen", "DrawerClose"]
        assert store.current_scene == "DrawerOpen"

    def test_drawer_route_names_from_settings(self):
        router = RecordingRouter(StackRouter({"Home": None, "Menu": None}))
        store = NavigationStore(
            router=router, settings=NavigationSettings(drawer_open_route="Menu")
        )

        store.drawer_open()

        assert store.current_scene == "Menu"


class TestStoreExecute:
    """Test verb normalization in execute."""

    @pytest.fixture
    def spy_store(self, store):
        for name in ("push", "jump", "pop", "pop_to", "pop_and_push", "replace", "reset", "refresh"):
            setattr(store, name, Mock(name=name))
        store.run = Mock(name="run")
        return store

    def test_params_merged_in_order(self, spy_store):
        spy_store.execute(Verb.PUSH, "Detail", {"a": 1}, {"b": 2}, {"a": 3})

        spy_store.push.assert_called_once_with(
            "Detail", {"a": 3, "b": 2, "routeName": "Detail"}
        )

    def test_embedded_type_overrides_verb(self, spy_store):
        spy_store.execute(Verb.PUSH, "Detail", {"type": "replace"})

        spy_store.replace.assert_called_once()
        spy_store.push.assert_not_called()

    @pytest.mark.parametrize(
        "verb,method",
        [
            (Verb.PUSH_OR_POP, "push"),
            (Verb.JUMP, "jump"),
            (Verb.BACK, "pop"),
            (Verb.BACK_ACTION, "pop"),
            (Verb.POP_AND_REPLACE, "pop"),
            (Verb.POP_TO, "pop_to"),
            (Verb.POP_AND_PUSH, "pop_and_push"),
            (Verb.RESET, "reset"),
            (Verb.REFRESH, "refresh"),
        ],
    )
    def test_verb_table(self, spy_store, verb, method):
        spy_store.execute(verb, "Detail")

        getattr(spy_store, method).assert_called_once()

    def test_string_verbs(self, spy_store):
        spy_store.execute("pop_to", "Home")

        spy_store.pop_to.assert_called_once_with("Home", {"routeName": "Home"})

    def test_unknown_verb_goes_to_run(self, spy_store):
        spy_store.execute("openModal", "Sheet", {"size": "half"})

        spy_store.run.assert_called_once_with(
            "openModal", "Sheet", None, {"size": "half", "routeName": "Sheet"}
        )

    def test_execute_push_end_to_end(self, store):
        store.execute(Verb.PUSH, "Detail", {"a": 1}, {"b": 2}, {"a": 3})

        assert store.current_params == {"a": 3, "b": 2, "routeName": "Detail"}

    def test_execute_refresh_keeps_verb_keys_out_of_params(self, store):
        store.push("Detail", {"id": 1})

        store.execute(Verb.REFRESH, None, {"id": 2, "type": "refresh"})

        leaf = store.current_state()
        assert leaf.params == {"id": 2, "routeName": "Detail"}
        assert leaf.route_name == "Detail"


class TestStoreReducer:
    """Test the custom reducer notification channel."""

    def test_reducer_notified_of_unrouted_verbs(self, stack_router, settings):
        seen = []

        def reducer(state, action):
            seen.append(action.type)
            return stack_router.compute_next(state, action) if isinstance(action.type, ActionType) else None

        store = NavigationStore(router=stack_router, reducer=reducer, settings=settings)
        seen.clear()

        store.run("openModal", "Sheet")

        assert seen == ["openModal"]

    def test_reducer_state_committed(self, settings):
        modal = RouteTreeState(
            "Root", key="root", index=0, routes=(RouteTreeState("Sheet", key="m1"),)
        )

        def reducer(state, action):
            if action.type == ActionType.INIT:
                return RouteTreeState(
                    "Root", key="root", index=0, routes=(RouteTreeState("Home", key="h"),)
                )
            if action.type == "openModal":
                return modal
            return None

        store = NavigationStore(reducer=reducer, settings=settings)
        store.router = StackRouter({"Home": None})

        store.run("openModal", "Sheet")

        assert store.state is modal
        assert store.current_scene == "Sheet"

    def test_reducer_notified_after_pop_to(self, settings):
        router = StackRouter({"A": None, "B": None})
        seen = []

        def reducer(state, action):
            seen.append(action.type)
            if isinstance(action.type, ActionType):
                return router.compute_next(state, action)
            return None

        store = NavigationStore(reducer=reducer, settings=settings)
        store.router = router
        store.push("B")
        seen.clear()

        store.pop_to("A")

        assert Verb.POP_TO in seen
        assert store.current_scene == "A"


class TestStoreLifecycle:
    """Test hooks driven by store navigation."""

    @pytest.mark.asyncio
    async def test_push_runs_exit_and_enter(self, store):
        calls = []
        store.register_scene("Home", on_exit=lambda: calls.append("exit Home"))
        store.register_scene(
            "Detail",
            on_enter=lambda params: calls.append(("enter", params["id"])) or True,
        )

        store.push("Detail", {"id": 4})
        assert calls == []
        await store.join()

        assert calls == ["exit Home", ("enter", 4)]

    @pytest.mark.asyncio
    async def test_enter_rejection_never_reaches_caller(self, store):
        error = RuntimeError("E")
        failure = Mock()

        async def on_enter(params):
            raise error

        store.register_scene("Detail", on_enter=on_enter, failure=failure)

        store.push("Detail")
        await store.join()

        failure.assert_called_once_with({"error": error})
        assert store.current_scene == "Detail"

    @pytest.mark.asyncio
    async def test_hooks_once_per_commit(self, store):
        on_exit = Mock()
        on_enter = Mock(return_value=True)
        store.register_scene("Home", on_exit=on_exit)
        store.register_scene("Detail", on_enter=on_enter)
        changes = []
        store.subscribe(changes.append)

        store.push("Detail")
        store.lifecycle.schedule(changes[-1])
        await store.join()

        on_exit.assert_called_once()
        on_enter.assert_called_once()
        assert store.snapshot.on_exit_executed
        assert store.snapshot.on_enter_executed

    @pytest.mark.asyncio
    async def test_stale_results_dropped_when_configured(self, stack_router):
        release = asyncio.Event()
        success = Mock()

        async def on_enter(params):
            await release.wait()
            return True

        store = NavigationStore(
            router=stack_router, settings=NavigationSettings(drop_stale_hook_results=True)
        )
        store.register_scene("Detail", on_enter=on_enter, success=success)

        store.push("Detail")
        await asyncio.sleep(0)
        store.push("Profile")
        release.set()
        await store.join()

        success.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_does_not_make_enter_stale(self, stack_router):
        release = asyncio.Event()
        success = Mock()

        async def on_enter(params):
            await release.wait()
            return params

        store = NavigationStore(
            router=stack_router, settings=NavigationSettings(drop_stale_hook_results=True)
        )
        store.register_scene("Detail", on_enter=on_enter, success=success)

        store.push("Detail")
        await asyncio.sleep(0)
        store.refresh({"loaded": True})
        release.set()
        await store.join()

        success.assert_called_once()

    def test_hooks_run_inline_without_event_loop(self, store):
        success = Mock()
        store.register_scene("Detail", on_enter=lambda params: "ready", success=success)

        store.push("Detail")

        success.assert_called_once_with("ready")

    def test_events_emitted(self, stack_router, settings):
        events = []
        store = NavigationStore(
            router=stack_router,
            settings=settings,
            emit_event_callback=lambda event_type, data: events.append((event_type, data)),
        )
        store.register_scene("Detail", on_enter=lambda params: None)

        store.push("Detail")

        types = [event_type for event_type, _ in events]
        assert types == ["scene_changed", "scene_changed", "hook_enter_failed"]
        assert events[1][1]["current_scene"] == "Detail"
        assert events[1][1]["verb"] == "push"

    def test_raising_event_callback_does_not_change_hook_outcome(self, stack_router, settings):
        def callback(event_type, data):
            if event_type.startswith("hook_"):
                raise RuntimeError("observer broke")

        store = NavigationStore(router=stack_router, settings=settings, emit_event_callback=callback)
        on_enter = Mock(return_value="ok")
        success = Mock()
        failure = Mock()
        store.register_scene("Home", on_exit=Mock(side_effect=ValueError("exit failed")))
        store.register_scene("Detail", on_enter=on_enter, success=success, failure=failure)

        store.push("Detail")

        on_enter.assert_called_once()
        success.assert_called_once_with("ok")
        failure.assert_not_called()
