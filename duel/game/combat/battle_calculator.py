"""
Battle forecasts for damage prediction.

Forecasts read combatant stats and never touch combat state, so a
presentation layer can show what an attack would do before asking the
engine to resolve it.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..entities.roles import Attacker, Defender


@dataclass(frozen=True)
class BattleForecast:
    """Predicted outcome of the next attack and of the duel as a whole."""
    attacker_name: str
    defender_name: str
    damage: int
    defender_hp_after: int
    would_defeat: bool
    hits_to_defeat: Optional[int]  # None when the attacker cannot deal damage


class BattleCalculator:
    """Calculates deterministic battle forecasts."""

    @staticmethod
    def calculate_damage(attacker: Attacker, defender: Defender) -> int:
        """Damage the defender would absorb from one attack."""
        return min(attacker.attack_power, defender.hp_current)

    @staticmethod
    def hits_to_defeat(attacker: Attacker, defender: Defender) -> Optional[int]:
        """Number of consecutive attacks needed to bring the defender to 0 HP.

        Returns:
            0 if the defender is already down, None if the attacker has no
            attack power
        """
        if defender.hp_current == 0:
            return 0
        if attacker.attack_power == 0:
            return None
        # Ceiling division
        return -(-defender.hp_current // attacker.attack_power)

    @staticmethod
    def project_hp_trajectory(attacker: Attacker, defender: Defender, turns: int) -> NDArray[np.int64]:
        """
        Project the defender's HP over consecutive attacks by one attacker.

        Args:
            attacker: The attacking side for every projected turn
            defender: The defending side for every projected turn
            turns: Number of attacks to project

        Returns:
            Array of length ``turns + 1``: current HP followed by the HP
            after each attack, clamped at zero
        """
        if turns < 0:
            raise ValueError("turns cannot be negative")

        hits = np.arange(turns + 1, dtype=np.int64)
        return np.maximum(0, defender.hp_current - hits * attacker.attack_power)

    @staticmethod
    def forecast(attacker: Attacker, defender: Defender) -> BattleForecast:
        """Calculate the complete forecast for ``attacker`` hitting ``defender``."""
        damage = BattleCalculator.calculate_damage(attacker, defender)
        hp_after = defender.hp_current - damage

        return BattleForecast(
            attacker_name=attacker.name,
            defender_name=defender.name,
            damage=damage,
            defender_hp_after=hp_after,
            would_defeat=defender.hp_current > 0 and hp_after == 0,
            hits_to_defeat=BattleCalculator.hits_to_defeat(attacker, defender),
        )
