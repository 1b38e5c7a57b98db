"""
Unit tests for the CombatEngine class.

Tests attack resolution, the ACTIVE -> OVER transition and the behaviour
of attacks on a finished session.
"""
import itertools

import pytest
from unittest.mock import Mock

from duel.core.data import BattlePhase
from duel.core.engine import AttackResult, CombatSession
from duel.core.events import EventType
from duel.game.combat import CombatEngine
from duel.game.entities import Combatant


def make_session(attacker_power=25, defender_hp=100, defender_max=100):
    attacker = Combatant("attacker", hp_max=100, attack_power=attacker_power)
    defender = Combatant("defender", hp_max=defender_max, attack_power=10)
    if defender_hp < defender_max:
        defender.take_damage(defender_max - defender_hp)
    return CombatSession(attacker=attacker, defender=defender)


class TestPerformAttack:
    """Test single attack exchanges."""

    def test_attack_reduces_defender_hp(self, engine):
        session = make_session(attacker_power=25, defender_hp=100)

        result = engine.perform_attack(session)

        assert session.defender.hp_current == 75
        assert not session.is_over
        assert result == AttackResult(
            attacker_name="attacker",
            defender_name="defender",
            damage=25,
            hp_before=100,
            hp_after=75,
            turn=1,
        )

    def test_attacker_is_untouched(self, engine, session, hero):
        engine.perform_attack(session)
        assert hero.hp_current == 100

    def test_lethal_attack_ends_combat(self, engine):
        session = make_session(attacker_power=25, defender_hp=20)

        result = engine.perform_attack(session)

        assert session.defender.hp_current == 0
        assert session.is_over
        assert session.phase == BattlePhase.OVER
        assert result.defeated
        assert result.combat_over
        assert result.damage == 20

    def test_exact_lethal_attack_ends_combat(self, engine):
        session = make_session(attacker_power=25, defender_hp=25)

        engine.perform_attack(session)

        assert session.defender.hp_current == 0
        assert session.is_over

    def test_defender_left_at_one_hp_stays_active(self, engine):
        session = make_session(attacker_power=25, defender_hp=26)

        engine.perform_attack(session)

        assert session.defender.hp_current == 1
        assert session.is_active

    def test_zero_attack_power_never_ends_combat(self, engine):
        session = make_session(attacker_power=0)

        for _ in range(5):
            result = engine.perform_attack(session)

        assert result.damage == 0
        assert session.defender.hp_current == 100
        assert session.is_active
        assert session.turn == 5

    def test_turn_and_history_are_recorded(self, engine, session):
        first = engine.perform_attack(session)
        second = engine.perform_attack(session)

        assert session.turn == 2
        assert session.history == [first, second]
        assert [r.turn for r in session.history] == [1, 2]

    def test_winner_after_defeat(self, engine, hero, demon_lord):
        session = CombatSession(attacker=hero, defender=demon_lord)

        while not session.is_over:
            engine.perform_attack(session)

        assert session.winner is hero
        assert session.loser is demon_lord
        assert session.turn == 6


class TestAttackAfterCombatOver:
    """Attacks on a finished session are no-ops."""

    @pytest.fixture
    def finished_session(self, engine):
        session = make_session(attacker_power=25, defender_hp=20)
        engine.perform_attack(session)
        return session

    def test_repeat_attack_changes_nothing(self, engine, finished_session):
        turn = finished_session.turn
        history = list(finished_session.history)

        for _ in range(3):
            result = engine.perform_attack(finished_session)

            assert result.ignored
            assert result.damage == 0
            assert result.combat_over

        assert finished_session.defender.hp_current == 0
        assert finished_session.is_over
        assert finished_session.turn == turn
        assert finished_session.history == history

    def test_defeated_side_cannot_strike_back(self, engine, finished_session):
        defeated = finished_session.defender
        survivor = finished_session.attacker

        result = engine.perform_attack(finished_session, attacker=defeated)

        assert result.ignored
        assert survivor.hp_current == 100
        # Roles are not reassigned on an ignored attack
        assert finished_session.attacker is survivor

    def test_terminal_transition_fires_once(self, event_manager, wired_engine):
        session = make_session(attacker_power=25, defender_hp=20)
        ended = Mock()
        event_manager.subscribe(EventType.COMBAT_ENDED, ended)

        wired_engine.perform_attack(session)
        wired_engine.perform_attack(session)
        wired_engine.perform_attack(session)
        event_manager.process_events()

        assert ended.call_count == 1


class TestChoosingTheAttacker:
    """The caller may pick which combatant attacks on each call."""

    def test_attacker_argument_reassigns_roles(self, engine, session, hero, demon_lord):
        result = engine.perform_attack(session, attacker=demon_lord)

        assert result.attacker_name == demon_lord.name
        assert hero.hp_current == 85
        assert demon_lord.hp_current == 150
        assert session.attacker is demon_lord
        assert session.defender is hero

    def test_alternating_attackers(self, engine):
        first = Combatant("duelist", hp_max=30, attack_power=15)
        second = Combatant("duelist", hp_max=30, attack_power=15)
        session = CombatSession(attacker=first, defender=second)

        engine.perform_attack(session, attacker=first)
        engine.perform_attack(session, attacker=second)

        assert first.hp_current == 15
        assert second.hp_current == 15
        assert session.phase == BattlePhase.ACTIVE

    def test_alternating_until_one_falls(self, engine):
        first = Combatant("duelist", hp_max=30, attack_power=15)
        second = Combatant("duelist", hp_max=30, attack_power=15)
        session = CombatSession(attacker=first, defender=second)

        for attacker in itertools.islice(itertools.cycle([first, second]), 4):
            engine.perform_attack(session, attacker=attacker)

        # First to strike twice wins
        assert second.hp_current == 0
        assert first.hp_current == 15
        assert session.winner is first
        assert session.turn == 3

    def test_outsider_attacker_rejected(self, engine, session, demon_lord):
        outsider = Combatant("ostrich", hp_max=100, attack_power=10)

        with pytest.raises(ValueError):
            engine.perform_attack(session, attacker=outsider)

        assert demon_lord.hp_current == 150
        assert session.turn == 0


class TestInvariants:
    """Properties that must hold for any attack sequence."""

    @pytest.mark.parametrize("max_hp,attack_power", [
        (1, 0), (1, 1), (7, 3), (100, 10), (100, 25), (150, 15), (10, 1000),
    ])
    def test_hp_stays_in_bounds(self, engine, max_hp, attack_power):
        left = Combatant("left", hp_max=max_hp, attack_power=attack_power)
        right = Combatant("right", hp_max=max_hp + 5, attack_power=attack_power + 1)
        session = CombatSession(attacker=left, defender=right)

        choices = [left, right, right, left, left, left, right] * 10
        for attacker in choices:
            engine.perform_attack(session, attacker=attacker)
            for combatant in session.combatants:
                assert 0 <= combatant.hp_current <= combatant.hp_max

    def test_over_iff_latest_defender_at_zero(self, engine):
        left = Combatant("left", hp_max=40, attack_power=9)
        right = Combatant("right", hp_max=35, attack_power=11)
        session = CombatSession(attacker=left, defender=right)

        for attacker in [left, right] * 10:
            was_over = session.is_over
            result = engine.perform_attack(session, attacker=attacker)
            if not was_over:
                defender_hp = session.defender.hp_current
                assert session.is_over == (defender_hp == 0)
                assert result.combat_over == (defender_hp == 0)

    def test_deterministic_trajectory(self, engine):
        def run():
            left = Combatant("left", hp_max=90, attack_power=13)
            right = Combatant("right", hp_max=80, attack_power=17)
            session = CombatSession(attacker=left, defender=right)
            trajectory = []
            for attacker in [left, left, right, left, right, right, left, right]:
                engine.perform_attack(session, attacker=attacker)
                trajectory.append((left.hp_current, right.hp_current, session.is_over))
            return trajectory

        assert run() == run()


class TestGetAttackPower:
    """Test looking up attack power by name."""

    def test_known_names(self, engine, session, hero, demon_lord):
        assert engine.get_attack_power(session, hero.name) == 25
        assert engine.get_attack_power(session, demon_lord.name) == 15

    def test_unknown_name(self, engine, session):
        assert engine.get_attack_power(session, "ostrich") == 0


class TestEnginePublishing:
    """Test events published on the bus."""

    def test_no_bus_required(self, session):
        engine = CombatEngine()
        assert engine.perform_attack(session).damage == 25

    def test_attack_publishes_unit_attacked(self, event_manager, wired_engine, session, demon_lord):
        attacked = Mock()
        event_manager.subscribe(EventType.UNIT_ATTACKED, attacked)

        wired_engine.perform_attack(session)
        event_manager.process_events()

        attacked.assert_called_once()
        event = attacked.call_args[0][0]
        assert event.attacker_name == session.attacker.name
        assert event.defender_name == demon_lord.name
        assert event.damage == 25
        assert event.defender_hp == 125
        assert event.defender_hp_max == 150
        assert event.turn == 1

    def test_defeat_publishes_defeat_and_end(self, event_manager, wired_engine):
        session = make_session(attacker_power=25, defender_hp=20)
        seen = []
        event_manager.subscribe_all(lambda event: seen.append(event.event_type))

        wired_engine.perform_attack(session)
        event_manager.process_events()

        assert EventType.UNIT_DEFEATED in seen
        assert EventType.COMBAT_ENDED in seen
        assert seen.index(EventType.UNIT_ATTACKED) < seen.index(EventType.UNIT_DEFEATED)

    def test_ignored_attack_publishes_attack_ignored(self, event_manager, wired_engine):
        session = make_session(attacker_power=25, defender_hp=20)
        wired_engine.perform_attack(session)
        event_manager.process_events()

        ignored = Mock()
        event_manager.subscribe(EventType.ATTACK_IGNORED, ignored)
        wired_engine.perform_attack(session)
        event_manager.process_events()

        ignored.assert_called_once()

    def test_start_publishes_combat_started(self, event_manager, wired_engine, session, hero, demon_lord):
        started = Mock()
        event_manager.subscribe(EventType.COMBAT_STARTED, started)

        wired_engine.start(session)
        event_manager.process_events()

        event = started.call_args[0][0]
        assert event.attacker_name == hero.name
        assert event.defender_name == demon_lord.name
        assert event.turn == 0
