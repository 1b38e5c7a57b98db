"""
Basic test fixtures for the duel test suite.

Provides combatants, sessions and an event bus wired the way the demo
duel wires them.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from duel.core.data import StatBlock
from duel.core.engine import CombatSession
from duel.core.events import EventManager
from duel.game.combat import CombatEngine
from duel.game.entities import Combatant, StatsProvider
from duel.game.managers import LogManager


HERO = "勇者"
DEMON_LORD = "魔王"


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def log_manager(event_manager):
    """Create a log manager listening on the test event manager."""
    return LogManager(event_manager)


@pytest.fixture
def stats_provider():
    """Stats provider with the two named combatants of the demo duel."""
    return StatsProvider({
        HERO: StatBlock(max_hp=100, attack_power=25),
        DEMON_LORD: StatBlock(max_hp=150, attack_power=15),
    })


@pytest.fixture
def hero():
    return Combatant(HERO, hp_max=100, attack_power=25)


@pytest.fixture
def demon_lord():
    return Combatant(DEMON_LORD, hp_max=150, attack_power=15)


@pytest.fixture
def session(hero, demon_lord):
    """Hero attacking the demon lord, both at full health."""
    return CombatSession(attacker=hero, defender=demon_lord)


@pytest.fixture
def engine():
    """Engine without an event bus."""
    return CombatEngine()


@pytest.fixture
def wired_engine(event_manager):
    """Engine publishing on the test event manager."""
    return CombatEngine(event_manager)


@pytest.fixture
def templates_yaml(tmp_path):
    """Write a stat templates file and return its path."""
    def _write(content: str) -> str:
        path = tmp_path / "stat_templates.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
