"""Core value types shared across the engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StatBlock:
    """Initial stats for a combatant.

    Resolved once per combatant when a session is built; the engine never
    goes back to the lookup afterwards.
    """

    max_hp: int
    attack_power: int

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValueError(f"max_hp must be positive, got {self.max_hp}")
        if self.attack_power < 0:
            raise ValueError(f"attack_power cannot be negative, got {self.attack_power}")

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "StatBlock":
        """Build a stat block from a ``{max_hp, attack_power}`` mapping.

        Raises:
            KeyError: If a stat is missing
            ValueError: If a stat is not an integer or is out of range
        """
        max_hp = data["max_hp"]
        attack_power = data["attack_power"]
        for stat, value in (("max_hp", max_hp), ("attack_power", attack_power)):
            # bool is an int subclass, YAML true/false must not pass as 1/0
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{stat} must be an integer, got {value!r}")
        return cls(max_hp=max_hp, attack_power=attack_power)


# Baseline stats for names missing from the stat table
DEFAULT_STAT_BLOCK = StatBlock(max_hp=100, attack_power=10)
