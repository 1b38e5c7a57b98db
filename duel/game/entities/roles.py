"""Role protocols for combat interactions.

A role is a capability a data record satisfies, not a base class it
inherits from. ``Combatant`` satisfies both roles; the engine only ever talks
to a combatant through the role it plays in the current exchange.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Attacker(Protocol):
    """Capability to deal damage."""

    @property
    def name(self) -> str:
        ...

    @property
    def attack_power(self) -> int:
        ...

    def attack(self, target: "Defender") -> int:
        """Deal this attacker's damage to ``target``.

        Returns:
            Damage actually absorbed by the target
        """
        ...


@runtime_checkable
class Defender(Protocol):
    """Capability to absorb damage."""

    @property
    def name(self) -> str:
        ...

    @property
    def hp_current(self) -> int:
        ...

    @property
    def hp_max(self) -> int:
        ...

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamping HP at zero.

        Returns:
            Damage actually absorbed
        """
        ...

    def is_defeated(self) -> bool:
        ...
