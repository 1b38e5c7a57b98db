"""Combatant data record.

Holds a combatant's name and stats and implements both combat roles
(``Attacker`` and ``Defender``) directly. Names are for display and stat
lookup only; two combatants may share one.
"""

from typing import TYPE_CHECKING

from ...core.data import StatBlock

if TYPE_CHECKING:
    from .roles import Defender


class Combatant:
    """A participant in a duel with hit points and attack power."""

    def __init__(self, name: str, hp_max: int, attack_power: int):
        """Initialize a combatant at full health.

        Args:
            name: Display name, also the key used for stat lookup
            hp_max: Maximum hit points, must be positive
            attack_power: Damage dealt per attack, must not be negative
        """
        if hp_max <= 0:
            raise ValueError(f"hp_max must be positive, got {hp_max}")
        if attack_power < 0:
            raise ValueError(f"attack_power cannot be negative, got {attack_power}")

        self._name = name
        self._hp_max = hp_max
        self._attack_power = attack_power
        self._hp_current = hp_max  # Start at full health

    @classmethod
    def from_stats(cls, name: str, stats: StatBlock) -> "Combatant":
        """Create a full-health combatant from a resolved stat block."""
        return cls(name, stats.max_hp, stats.attack_power)

    @property
    def name(self) -> str:
        return self._name

    @property
    def hp_max(self) -> int:
        return self._hp_max

    @property
    def hp_current(self) -> int:
        return self._hp_current

    @property
    def attack_power(self) -> int:
        return self._attack_power

    # Defender role

    def take_damage(self, amount: int) -> int:
        """Apply damage to this combatant.

        Args:
            amount: Amount of damage to apply

        Returns:
            Actual damage absorbed (less than ``amount`` when it overkills)
        """
        if amount < 0:
            raise ValueError("Damage amount cannot be negative")

        old_hp = self._hp_current
        self._hp_current = max(0, self._hp_current - amount)
        return old_hp - self._hp_current

    def is_defeated(self) -> bool:
        return self._hp_current == 0

    def get_hp_percent(self) -> float:
        """Current health as a fraction of maximum, from 0.0 to 1.0."""
        return self._hp_current / self._hp_max

    # Attacker role

    def attack(self, target: "Defender") -> int:
        """Deal this combatant's attack power to ``target``.

        Returns:
            Damage actually absorbed by the target
        """
        return target.take_damage(self._attack_power)

    def __repr__(self) -> str:
        return (
            f"Combatant(name={self._name!r}, hp={self._hp_current}/{self._hp_max}, "
            f"attack_power={self._attack_power})"
        )
