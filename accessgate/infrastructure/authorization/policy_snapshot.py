"""Immutable Casbin view over one PolicyState.

Each snapshot owns its own Casbin enforcer, loaded once from the state
through ``PolicyStateAdapter`` and never mutated afterwards. The policy
engine swaps whole snapshots, so a reader holding a reference always
evaluates against one consistent state.
"""

from casbin import Enforcer
from casbin.model import Model
from casbin.persist import Adapter

from accessgate.domain.value_objects import PolicyState


class PolicyStateAdapter(Adapter):
    """Read-only Casbin adapter feeding a PolicyState into a model.

    Persistence is handled by the policy store, not by Casbin, so only
    ``load_policy`` is meaningful here.
    """

    def __init__(self, state: PolicyState) -> None:
        self._state = state

    def load_policy(self, model: Model) -> None:
        for rule in self._state.policies:
            model.add_policy("p", "p", list(rule.as_row()))
        for grouping in self._state.groupings:
            model.add_policy("g", "g", list(grouping.as_row()))


class PolicySnapshot:
    """Casbin enforcer frozen over a single PolicyState.

    Attributes:
        state: The state this snapshot evaluates.
    """

    __slots__ = ("state", "_enforcer")

    def __init__(self, state: PolicyState, model_text: str) -> None:
        model = Model()
        model.load_model_from_text(model_text)

        # Enforcer(model, adapter) runs load_policy() and builds role links
        enforcer = Enforcer(model, PolicyStateAdapter(state))
        enforcer.enable_auto_save(False)

        self.state = state
        self._enforcer = enforcer

    def enforce(self, subject: str, resource: str, action: str) -> bool:
        return bool(self._enforcer.enforce(subject, resource, action))
