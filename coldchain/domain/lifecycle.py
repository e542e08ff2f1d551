"""
Lifecycle - Explicit status transition tables for stateful entities.

Each stateful entity declares a closed table of ``(status, action) -> status``
pairs. Every state-changing method goes through ``Lifecycle.next_status`` so a
pair missing from the table is always rejected the same way.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from .exceptions import InvalidStatusTransitionError


class Lifecycle:
    """
    Transition table for one entity type.

    Usage:
        lifecycle = Lifecycle("Rental", {
            (RentalStatus.ACTIVE, "complete"): RentalStatus.COMPLETED,
        })
        lifecycle.next_status(RentalStatus.ACTIVE, "complete")  # COMPLETED
        lifecycle.next_status(RentalStatus.COMPLETED, "complete")  # raises
    """

    def __init__(self, entity_type: str, transitions: Dict[Tuple[Enum, str], Enum]):
        self.entity_type = entity_type
        self._transitions = dict(transitions)

    def can(self, current: Enum, action: str) -> bool:
        return (current, action) in self._transitions

    def next_status(self, current: Enum, action: str) -> Enum:
        """Resolve the target status or reject the action."""
        try:
            return self._transitions[(current, action)]
        except KeyError:
            raise InvalidStatusTransitionError(
                current_status=getattr(current, 'value', str(current)),
                action=action,
                entity_type=self.entity_type,
            ) from None

    def allowed_actions(self, current: Enum) -> List[str]:
        """Get actions permitted from the given status."""
        return sorted(action for (status, action) in self._transitions if status == current)

    @property
    def actions(self) -> FrozenSet[str]:
        return frozenset(action for (_, action) in self._transitions)

    def terminal_states(self, statuses) -> List[Enum]:
        """Statuses from the given enum that have no outgoing transition."""
        sources = {status for (status, _) in self._transitions}
        return [status for status in statuses if status not in sources]
