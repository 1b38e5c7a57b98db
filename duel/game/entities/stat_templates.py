"""Combatant stat templates.

Stat blocks are loaded from a YAML table and keyed by combatant name.
Names missing from the table resolve to the default stat block instead of
failing, so any name can enter a duel.
"""

import os
from collections.abc import Mapping
from typing import Optional

import yaml

from ...core.data import StatBlock, DEFAULT_STAT_BLOCK
from ...core.engine import CombatSession
from .combatant import Combatant


def _default_templates_path() -> str:
    """Path of the stat table shipped with the package."""
    current_dir = os.path.dirname(os.path.abspath(__file__))
    package_root = os.path.dirname(os.path.dirname(current_dir))
    return os.path.join(package_root, "assets", "stat_templates.yaml")


class StatsProvider:
    """Maps combatant names to their initial stat blocks."""

    def __init__(
        self,
        templates: Optional[Mapping[str, StatBlock]] = None,
        default: StatBlock = DEFAULT_STAT_BLOCK
    ):
        """Initialize the provider.

        Args:
            templates: Stat blocks keyed by combatant name
            default: Stats handed out for names not in ``templates``
        """
        self._templates: dict[str, StatBlock] = dict(templates or {})
        self.default = default

    @classmethod
    def from_yaml(cls, yaml_path: Optional[str] = None) -> "StatsProvider":
        """Load stat templates from a YAML file.

        The file holds an optional ``default`` block and a ``combatants``
        mapping of name to ``{max_hp, attack_power}``.

        Args:
            yaml_path: File to load, defaults to the table shipped with the package

        Returns:
            StatsProvider built from the file

        Raises:
            FileNotFoundError: If the file does not exist
            KeyError: If a stat block is missing a field
            ValueError: If the file is not valid YAML or a stat is out of range
        """
        yaml_path = yaml_path or _default_templates_path()

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Stat templates file not found: {yaml_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse stat templates {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Stat templates file must contain a mapping: {yaml_path}")

        combatants_data = data.get("combatants")
        if combatants_data is None:
            combatants_data = {}
        if not isinstance(combatants_data, dict):
            raise ValueError(f"'combatants' must be a mapping of name to stats in {yaml_path}")

        try:
            templates = {
                str(name): StatBlock.from_dict(block)
                for name, block in combatants_data.items()
            }
            default_data = data.get("default")
            default = StatBlock.from_dict(default_data) if default_data is not None else DEFAULT_STAT_BLOCK
        except KeyError as e:
            raise KeyError(f"Invalid stat block structure in {yaml_path}: missing {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid stat value in {yaml_path}: {e}")

        return cls(templates, default)

    def get_initial_stats(self, name: str) -> StatBlock:
        """Get the initial stats for a combatant name.

        Unknown names get the default stat block.
        """
        return self._templates.get(name, self.default)

    def has_template(self, name: str) -> bool:
        return name in self._templates

    @property
    def names(self) -> list[str]:
        """Names with an explicit stat template, in table order."""
        return list(self._templates)


def create_combatant(name: str, stats_provider: StatsProvider) -> Combatant:
    """Create a full-health combatant with stats looked up by name.

    The provider is consulted once; the combatant keeps no reference to it.
    """
    return Combatant.from_stats(name, stats_provider.get_initial_stats(name))


def create_session(attacker_name: str, defender_name: str, stats_provider: StatsProvider) -> CombatSession:
    """Build a combat session with both combatants at full health.

    Stats are looked up once per combatant; the session holds no reference
    to the provider afterwards.
    """
    return CombatSession(
        attacker=create_combatant(attacker_name, stats_provider),
        defender=create_combatant(defender_name, stats_provider),
    )
