"""
Optimistic state updates with rollback.

The new state is visible before the write is persisted. If persistence
fails the previous state is restored and the error propagates; there are
no retries.
"""
import copy
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

State = TypeVar("State")


class StateHolder(Generic[State]):
    """Minimal mutable box for a piece of client-side state."""

    def __init__(self, value: State):
        self.value = value

    def get(self) -> State:
        return self.value

    def set(self, value: State) -> None:
        self.value = value


class OptimisticUpdate(Generic[State]):
    """
    snapshot → apply → persist → reconcile or roll back.

    Args:
        get_state: Returns the current state
        set_state: Replaces the current state
    """

    def __init__(self, get_state: Callable[[], State], set_state: Callable[[State], None]):
        self.get_state = get_state
        self.set_state = set_state

    def run(
        self,
        apply: Callable[[State], State],
        persist: Callable[[], Any],
        reconcile: Optional[Callable[[State, Any], State]] = None,
    ) -> Any:
        """
        Args:
            apply: Builds the optimistic state from the current one
            persist: Performs the write; its return value is passed on
            reconcile: Builds the final state from the optimistic state and
                the persisted result

        Returns:
            Whatever `persist` returned

        Raises:
            Whatever `persist` raised, after the snapshot is restored
        """
        snapshot = copy.deepcopy(self.get_state())
        optimistic = apply(copy.deepcopy(snapshot))
        self.set_state(optimistic)

        try:
            result = persist()
        except Exception:
            logger.warning("Persist failed, restoring previous state", exc_info=True)
            self.set_state(snapshot)
            raise

        if reconcile is not None:
            self.set_state(reconcile(optimistic, result))
        return result

    @classmethod
    def on(cls, holder: StateHolder) -> "OptimisticUpdate":
        return cls(holder.get, holder.set)
