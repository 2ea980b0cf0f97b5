"""Navigation verbs and low-level action types."""

from enum import Enum


class Verb(Enum):
    """High-level navigation intents accepted by the store."""

    PUSH = "push"
    PUSH_OR_POP = "push_or_pop"
    JUMP = "jump"
    POP = "pop"
    BACK = "back"
    BACK_ACTION = "back_action"
    POP_AND_REPLACE = "pop_and_replace"
    POP_TO = "pop_to"
    REPLACE = "replace"
    RESET = "reset"
    REFRESH = "refresh"
    POP_AND_PUSH = "pop_and_push"
    DRAWER_OPEN = "drawer_open"
    DRAWER_CLOSE = "drawer_close"
    INIT = "init"

    # Pseudo-actions given to a custom reducer around each commit
    BLUR = "blur"
    FOCUS = "focus"

    @classmethod
    def coerce(cls, value: "Verb | str") -> "Verb | str":
        """Resolve a verb from a member, enum value or enum name.

        Unknown strings are returned unchanged.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        return value


class ActionType(Enum):
    """Low-level actions understood by routers."""

    NAVIGATE = "Navigation/NAVIGATE"
    BACK = "Navigation/BACK"
    RESET = "Navigation/RESET"
    SET_PARAMS = "Navigation/SET_PARAMS"
    INIT = "Navigation/INIT"


# Verbs lowered straight into a single router action
SUPPORTED_ACTIONS: dict[Verb, ActionType] = {
    Verb.PUSH: ActionType.NAVIGATE,
    Verb.JUMP: ActionType.NAVIGATE,
    Verb.POP: ActionType.BACK,
    Verb.BACK: ActionType.BACK,
    Verb.REFRESH: ActionType.BACK,
    Verb.RESET: ActionType.RESET,
    Verb.REPLACE: ActionType.RESET,
}

POP_VERBS = frozenset({Verb.POP, Verb.BACK, Verb.BACK_ACTION, Verb.POP_AND_REPLACE})
