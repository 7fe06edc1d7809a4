"""
Attack choice of the computer-controlled characters.
"""

from fightsim.attacks.attack import AttackDefinition
from fightsim.character.main import Character
from fightsim.core.config import CombatConfig
from fightsim.core.constants import TargetKind
from fightsim.core.rng import CombatRng

from .roster import Rosters


def choose_auto_attack(
    actor: Character,
    config: CombatConfig,
    rng: CombatRng,
) -> AttackDefinition | None:
    """
    Picks the attack of a computer-controlled character.

    Args:
        actor (Character):
            The character to play.
        config (CombatConfig):
            The rules of the session, for the ultimate level.
        rng (CombatRng):
            Breaks ties between attacks of the same level.

    Returns:
        AttackDefinition | None:
            The highest-level launchable attack, None if none can be launched.

    """
    launchable = [
        attack
        for attack in actor.attacks_by_level
        if attack.can_be_launched(actor, config.ultimate_level)
    ]
    if not launchable:
        return None
    best_level = max(attack.level for attack in launchable)
    return rng.choice([attack for attack in launchable if attack.level == best_level])


def choose_auto_target(
    actor: Character,
    rosters: Rosters,
    config: CombatConfig,
    turn: int,
) -> Character | None:
    """Returns the living opponent with the highest aggro over the last turns."""
    opponents = rosters.living(actor.kind.opponent)
    if not opponents:
        return None
    return max(
        opponents,
        key=lambda c: c.aggro_over_last_turns(turn, config.nb_turns_sum_aggro),
    )


def choose_auto_action(
    actor: Character,
    rosters: Rosters,
    config: CombatConfig,
    rng: CombatRng,
    turn: int,
) -> tuple[AttackDefinition, Character | None] | None:
    """
    Picks the attack and, for attacks aimed at enemies, the target of a
    computer-controlled character.
    """
    attack = choose_auto_attack(actor, config, rng)
    if attack is None:
        return None
    target = None
    if attack.target == TargetKind.ENEMY:
        target = choose_auto_target(actor, rosters, config, turn)
    return attack, target
