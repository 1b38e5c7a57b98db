"""Combat package.

- combat_engine.py: Attack resolution and the ACTIVE -> OVER transition
- battle_calculator.py: Side-effect-free damage forecasts
"""

from .combat_engine import CombatEngine
from .battle_calculator import BattleCalculator, BattleForecast

__all__ = [
    "CombatEngine",
    "BattleCalculator",
    "BattleForecast",
]
