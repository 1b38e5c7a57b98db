"""
Combat resolution for a duel.

The engine resolves one attack exchange at a time: the attacker's fixed
attack power comes off the defender's HP, clamped at zero, and the session
ends the moment a defender reaches zero. There is no randomness, so the
same choices always produce the same HP trajectory.
"""
from typing import TYPE_CHECKING, Optional

from ...core.data import LogCategory, LogLevel
from ...core.engine import AttackResult
from ...core.events import (
    AttackIgnored,
    CombatEnded,
    CombatStarted,
    LogMessage,
    UnitAttacked,
    UnitDefeated,
)

if TYPE_CHECKING:
    from ...core.engine import CombatSession
    from ...core.events import EventManager
    from ..entities.combatant import Combatant


class CombatEngine:
    """Resolves attacks on a combat session."""

    def __init__(self, event_manager: Optional["EventManager"] = None):
        """Initialize the engine.

        Args:
            event_manager: Bus to publish combat and log events on. Without
                one, attacks still resolve and nothing is published.
        """
        self.event_manager = event_manager

    def start(self, session: "CombatSession") -> None:
        """Announce a session to listeners before the first attack."""
        attacker, defender = session.combatants
        self._publish(
            CombatStarted(turn=session.turn, attacker_name=attacker.name, defender_name=defender.name)
        )
        self._emit_log(
            f"Combat started: {attacker.name} ({attacker.hp_current}/{attacker.hp_max} HP) "
            f"vs {defender.name} ({defender.hp_current}/{defender.hp_max} HP)",
            session.turn,
            category=LogCategory.SYSTEM,
        )

    def perform_attack(
        self,
        session: "CombatSession",
        attacker: Optional["Combatant"] = None
    ) -> AttackResult:
        """
        Resolve one attack exchange.

        Args:
            session: The session to resolve the attack on
            attacker: Combatant that attacks this time. Its opponent defends.
                Defaults to the session's current attacker.

        Returns:
            AttackResult describing the exchange. On a session that is already
            over nothing changes and the result is marked ``ignored``.

        Raises:
            ValueError: If ``attacker`` is not part of ``session``
        """
        if attacker is not None and not session.has_combatant(attacker):
            raise ValueError(f"{attacker.name} is not part of this combat session")

        if session.is_over:
            return self._ignore_attack(session, attacker or session.attacker)

        if attacker is not None:
            session.set_attacker(attacker)

        attacker, defender = session.combatants
        turn = session.turn + 1

        hp_before = defender.hp_current
        damage = attacker.attack(defender)
        defeated = defender.hp_current == 0

        result = AttackResult(
            attacker_name=attacker.name,
            defender_name=defender.name,
            damage=damage,
            hp_before=hp_before,
            hp_after=defender.hp_current,
            turn=turn,
            defeated=defeated,
            combat_over=defeated,
        )
        session.record_attack(result)

        self._publish(
            UnitAttacked(
                turn=turn,
                attacker_name=attacker.name,
                defender_name=defender.name,
                damage=damage,
                defender_hp=defender.hp_current,
                defender_hp_max=defender.hp_max,
            )
        )
        self._emit_log(
            f"{attacker.name} → {defender.name} ({damage} damage, "
            f"{defender.hp_current}/{defender.hp_max} HP left)",
            turn,
        )

        if defeated:
            self._publish(UnitDefeated(turn=turn, unit_name=defender.name, defeated_by=attacker.name))
            self._publish(CombatEnded(turn=turn, winner_name=attacker.name, loser_name=defender.name))
            self._emit_log(f"{defender.name}: Defeated", turn)
            self._emit_log(f"Combat over, {attacker.name} wins", turn, category=LogCategory.SYSTEM)

        return result

    def get_attack_power(self, session: "CombatSession", name: str) -> int:
        """Attack power of the first combatant in ``session`` named ``name``.

        Returns 0 when no combatant has that name.
        """
        for combatant in session.combatants:
            if combatant.name == name:
                return combatant.attack_power
        return 0

    def _ignore_attack(self, session: "CombatSession", attacker: "Combatant") -> AttackResult:
        defender = session.other(attacker)
        self._publish(
            AttackIgnored(turn=session.turn, attacker_name=attacker.name, defender_name=defender.name)
        )
        self._emit_log(
            f"{attacker.name} cannot attack, the combat is already over",
            session.turn,
            level=LogLevel.WARNING,
        )
        return AttackResult(
            attacker_name=attacker.name,
            defender_name=defender.name,
            damage=0,
            hp_before=defender.hp_current,
            hp_after=defender.hp_current,
            turn=session.turn,
            defeated=defender.is_defeated(),
            combat_over=True,
            ignored=True,
        )

    def _publish(self, event) -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source="CombatEngine")

    def _emit_log(
        self,
        message: str,
        turn: int,
        category: LogCategory = LogCategory.BATTLE,
        level: LogLevel = LogLevel.INFO
    ) -> None:
        """Emit a log message event."""
        self._publish(
            LogMessage(turn=turn, message=message, category=category, level=level, source="CombatEngine")
        )
