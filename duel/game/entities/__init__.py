"""Combatant entities and roles.

- combatant.py: Combatant data record implementing both combat roles
- roles.py: Attacker and Defender capability protocols
- stat_templates.py: Name to stat block lookup loaded from YAML
"""

from .combatant import Combatant
from .roles import Attacker, Defender
from .stat_templates import StatsProvider, create_combatant, create_session

__all__ = [
    "Combatant",
    "Attacker",
    "Defender",
    "StatsProvider",
    "create_combatant",
    "create_session",
]
