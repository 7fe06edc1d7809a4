"""
Character serialization and deserialization functions.

This module provides functions to turn a Character into a plain dictionary and
back, with its full fight state: attributes, running effects, flags, buffers
and counters. The file format and the paths belong to the caller.
"""

from typing import Any

from fightsim.attacks.attack import AttackDefinition
from fightsim.core.constants import BufKind, CharacterClass, CharacterKind
from fightsim.core.errors import ConfigurationError
from fightsim.effects.effect import GameAtkEffects

from .equipment import Equipment
from .fight_info import Buffers, FightInfo, TxRxCounters
from .main import Character
from .stat_model import StatModel
from .stats_in_game import StatsInGame


def character_to_dict(character: Character) -> dict[str, Any]:
    """
    Serializes a Character into a dictionary of plain values.

    Args:
        character (Character):
            The character to serialize.

    Returns:
        dict[str, Any]:
            The serialized character.

    """
    return {
        "name": character.name,
        "kind": character.kind.value,
        "char_class": character.char_class.value,
        "level": character.level,
        "experience": character.experience,
        "stats": character.stats.model_dump(mode="json"),
        "attacks": [attack.model_dump(mode="json") for attack in character.attacks.values()],
        "effects": [entry.model_dump(mode="json") for entry in character.effects],
        "fight_info": character.fight_info.model_dump(mode="json"),
        "buffers": {
            kind.value: buf.model_dump(mode="json") for kind, buf in character.buffers.items()
        },
        "tx_rx": {
            str(turn): counters.model_dump(mode="json")
            for turn, counters in character.tx_rx.items()
        },
        "stats_in_game": character.stats_in_game.model_dump(mode="json"),
        "equipments": [equipment.model_dump(mode="json") for equipment in character.equipments],
    }


def character_from_dict(data: dict[str, Any]) -> Character:
    """
    Creates a Character instance from a dictionary of data.

    The attributes are restored verbatim: equipment bonuses are already part
    of them and are not applied a second time.

    Args:
        data (dict[str, Any]):
            The dictionary containing character data.

    Raises:
        ConfigurationError:
            If a mandatory field is missing or an enum name is unknown.

    Returns:
        Character:
            The created Character instance.

    """
    try:
        name = data["name"]
        kind = CharacterKind.from_name(data["kind"])
    except KeyError as e:
        raise ConfigurationError(f"Character data is missing the field {e}.") from e

    character = Character(
        name=name,
        kind=kind,
        stats={},
        char_class=CharacterClass.from_name(data.get("char_class", "Standard")),
        level=data.get("level", 1),
        experience=data.get("experience", 0),
        attacks=[AttackDefinition.model_validate(atk) for atk in data.get("attacks", [])],
    )
    if "stats" in data:
        character.stats = StatModel.model_validate(data["stats"])
    character.effects = [GameAtkEffects.model_validate(entry) for entry in data.get("effects", [])]
    if "fight_info" in data:
        character.fight_info = FightInfo.model_validate(data["fight_info"])
    for kind_name, buf_data in data.get("buffers", {}).items():
        character.buffers[BufKind.from_name(kind_name)] = Buffers.model_validate(buf_data)
    character.tx_rx = {
        int(turn): TxRxCounters.model_validate(counters)
        for turn, counters in data.get("tx_rx", {}).items()
    }
    if "stats_in_game" in data:
        character.stats_in_game = StatsInGame.model_validate(data["stats_in_game"])
    character.equipments = [Equipment.model_validate(eq) for eq in data.get("equipments", [])]
    return character
