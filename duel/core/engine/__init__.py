"""Combat session state machine.

- combat_session.py: CombatSession context and AttackResult records
"""

from .combat_session import CombatSession, AttackResult

__all__ = [
    "CombatSession",
    "AttackResult",
]
