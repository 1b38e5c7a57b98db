#!/usr/bin/env python3

from duel import CombatEngine, EventManager, LogManager, StatsProvider, create_session


def main():
    event_manager = EventManager()
    log_manager = LogManager(event_manager)

    stats = StatsProvider.from_yaml()
    session = create_session("勇者", "魔王", stats)
    hero, demon_lord = session.combatants

    engine = CombatEngine(event_manager)
    engine.start(session)

    # Hero strikes first, then the two trade blows
    try:
        while not session.is_over:
            attacker = hero if session.turn % 2 == 0 else demon_lord
            engine.perform_attack(session, attacker)
    except KeyboardInterrupt:
        print("\n\nDuel interrupted by user")
    finally:
        event_manager.process_events()
        for line in log_manager.get_formatted_messages():
            print(line)


if __name__ == "__main__":
    main()
