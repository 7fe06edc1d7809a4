"""
Shared fixtures for the fight engine tests.
"""

import pytest

from fightsim.attacks.attack import AttackDefinition
from fightsim.character.main import Character
from fightsim.core.config import CombatConfig
from fightsim.core.constants import CharacterClass, CharacterKind, StatKind, TargetKind
from fightsim.effects.effect import EffectParam
from fightsim.effects.effect_type import EffectType


def _make_stats(**overrides: int) -> dict[StatKind, int]:
    """Builds a stat table with neutral rolls (no dodge, no crit)."""
    stats = {
        StatKind.HP: 100,
        StatKind.MANA: 100,
        StatKind.VIGOR: 100,
        StatKind.BERSERK: 100,
        StatKind.SPEED: 10,
        StatKind.CRITICAL_STRIKE: 0,
        StatKind.DODGE: 0,
    }
    for name, value in overrides.items():
        stats[StatKind[name.upper()]] = value
    return stats


def _make_character(
    name: str,
    kind: CharacterKind = CharacterKind.HERO,
    char_class: CharacterClass = CharacterClass.STANDARD,
    attacks: list[AttackDefinition] | None = None,
    **stats: int,
) -> Character:
    """Builds a level 1 character with the given stat overrides."""
    return Character(
        name=name,
        kind=kind,
        stats=_make_stats(**stats),
        char_class=char_class,
        attacks=attacks,
    )


def _damage_attack(name: str = "Strike", value: int = 40, **fields) -> AttackDefinition:
    """Builds a one-effect attack dealing value HP damage to one enemy."""
    return AttackDefinition(
        name=name,
        all_effects=[
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=-value,
                target=TargetKind.ENEMY,
            )
        ],
        **fields,
    )


@pytest.fixture
def config():
    """A configuration with the default rules and a fixed seed."""
    return CombatConfig(seed=42)


@pytest.fixture
def make_character():
    """Factory of characters, see ``_make_character``."""
    return _make_character


@pytest.fixture
def damage_attack():
    """Factory of single-target damage attacks, see ``_damage_attack``."""
    return _damage_attack
