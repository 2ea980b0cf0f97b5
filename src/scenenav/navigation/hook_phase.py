"""Per-commit progress tracking for a single lifecycle hook."""

from transitions import Machine


class HookPhase:
    """State machine for one hook (enter or exit) within one commit cycle.

    States:
        idle: hook not started for this commit
        pending: hook invoked, result not settled
        done: exit hook invoked (its result is ignored)
        succeeded: enter hook resolved truthy, ``success`` continuation ran
        failed: enter hook resolved falsy or raised, ``failure`` continuation ran

    A new pair of phases is created on every commit, which is how the
    executed flags are reset.

    Example:
        >>> phase = HookPhase("enter")
        >>> phase.executed
        False
        >>> phase.begin()
        True
        >>> phase.state
        'pending'
    """

    states = ["idle", "pending", "done", "succeeded", "failed"]

    def __init__(self, name: str) -> None:
        self.name = name
        self.machine = Machine(
            model=self,
            states=HookPhase.states,
            initial="idle",
            auto_transitions=False,
        )
        self.machine.add_transition("begin", "idle", "pending")
        self.machine.add_transition("finish", "pending", "done")
        self.machine.add_transition("succeed", "pending", "succeeded")
        self.machine.add_transition("fail", "pending", "failed")

    @property
    def executed(self) -> bool:
        """Whether the hook was already started in this commit cycle."""
        return self.state != "idle"

    def __repr__(self) -> str:
        return f"HookPhase({self.name!r}, state={self.state!r})"
