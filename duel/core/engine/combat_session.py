"""Combat session state.

A :class:`CombatSession` is the context of one duel: it owns both
combatants, knows which one currently attacks and which one defends, and
carries the phase flag. It is passed explicitly to whatever operates on it;
there is no globally reachable "current" session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from ..data import BattlePhase, CombatRole

if TYPE_CHECKING:
    from ...game.entities.combatant import Combatant


@dataclass(frozen=True)
class AttackResult:
    """Outcome of one ``perform_attack`` call."""

    attacker_name: str
    defender_name: str
    damage: int
    hp_before: int
    hp_after: int
    turn: int
    defeated: bool = False
    combat_over: bool = False
    ignored: bool = False  # Session was already over, nothing changed


@dataclass
class CombatSession:
    """The mutable pairing of two combatants and the terminal flag."""

    attacker: "Combatant"
    defender: "Combatant"
    phase: BattlePhase = field(init=False)
    turn: int = field(default=0, init=False)
    history: list[AttackResult] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self.attacker is self.defender:
            raise ValueError("A combatant cannot fight itself")

        if self.attacker.hp_current > 0 and self.defender.hp_current > 0:
            self.phase = BattlePhase.ACTIVE
        else:
            self.phase = BattlePhase.OVER

    @property
    def is_over(self) -> bool:
        return self.phase is BattlePhase.OVER

    @property
    def is_active(self) -> bool:
        return self.phase is BattlePhase.ACTIVE

    @property
    def combatants(self) -> tuple["Combatant", "Combatant"]:
        """Both combatants in their current (attacker, defender) order."""
        return self.attacker, self.defender

    @property
    def winner(self) -> Optional["Combatant"]:
        """Combatant left standing once the session is over."""
        if not self.is_over:
            return None
        if self.defender.is_defeated():
            return self.attacker
        return self.defender

    @property
    def loser(self) -> Optional["Combatant"]:
        """Combatant that was brought down once the session is over."""
        winner = self.winner
        return None if winner is None else self.other(winner)

    def has_combatant(self, combatant: "Combatant") -> bool:
        # Identity, names are not unique
        return combatant is self.attacker or combatant is self.defender

    def other(self, combatant: "Combatant") -> "Combatant":
        """Get the opponent of ``combatant``.

        Raises:
            ValueError: If ``combatant`` is not part of this session
        """
        if combatant is self.attacker:
            return self.defender
        if combatant is self.defender:
            return self.attacker
        raise ValueError(f"{combatant.name} is not part of this combat session")

    def role_of(self, combatant: "Combatant") -> CombatRole:
        """Get the role ``combatant`` currently plays."""
        if combatant is self.attacker:
            return CombatRole.ATTACKER
        if combatant is self.defender:
            return CombatRole.DEFENDER
        raise ValueError(f"{combatant.name} is not part of this combat session")

    def set_attacker(self, combatant: "Combatant") -> None:
        """Make ``combatant`` the attacker and its opponent the defender."""
        if combatant is self.defender:
            self.swap_roles()
        elif combatant is not self.attacker:
            raise ValueError(f"{combatant.name} is not part of this combat session")

    def swap_roles(self) -> None:
        """Exchange attacker and defender. HP and phase are untouched."""
        self.attacker, self.defender = self.defender, self.attacker

    def record_attack(self, result: AttackResult) -> None:
        """Append a resolved attack and enter OVER if it ended the combat.

        Called by the combat engine once per resolved attack.
        """
        self.turn = result.turn
        self.history.append(result)
        if result.combat_over:
            self.phase = BattlePhase.OVER
