"""
Effect type module for the fight engine.

Defines the closed set of effect types and the static capability table that
tells, for each type, whether it ticks every turn (HOT/DOT), is active on
launch only, is amplified by critical strikes, and is expressed in percent.
"""

from enum import Flag, auto

from fightsim.core.constants import NiceEnum, StatKind, TargetKind


class EffectType(NiceEnum):
    """Defines every kind of effect an attack can carry."""

    VALUE_CHANGE = "ValueChange"
    PERCENT_CHANGE = "PercentChange"
    REPEAT_AS_MANY_AS = "RepeatAsManyAs"
    DECREASE_BY_TURN = "DecreaseByTurn"
    DECREASE_ON_TURN = "DecreaseOnTurn"
    COOL_DOWN = "CoolDown"
    REINIT = "Reinit"
    DELETE_BAD = "DeleteBad"
    IMPROVE_HOTS = "ImproveHots"
    BOOSTED_BY_HOTS = "BoostedByHots"
    CHANGE_MAX_DAMAGE_BY_PERCENT = "ChangeMaxDamageByPercent"
    IMPROVEMENT_BY_VALUE = "ImprovementByValue"
    IMPROVE_BY_PERCENT_CHANGE = "ImproveByPercentChange"
    INTO_DAMAGE = "IntoDamage"
    NEXT_HEAL_IS_CRIT = "NextHealIsCrit"
    BUF_MULTI = "BufMulti"
    BLOCK_HEAL_ATK = "BlockHealAtk"
    BUF_VALUE_AS_MUCH_AS_HEAL = "BufValueAsMuchAsHeal"
    CHANGE_DAMAGE_RX_BY_PERCENT = "ChangeDamageRxByPercent"
    CHANGE_HEAL_RX_BY_PERCENT = "ChangeHealRxByPercent"
    CHANGE_HEAL_TX_BY_PERCENT = "ChangeHealTxByPercent"

    @property
    def capabilities(self) -> "EffectCapability":
        """Returns the capability bits of this effect type."""
        return EFFECT_CAPABILITIES[self]


class EffectCapability(Flag):
    """Capability bits of an effect type."""

    NONE = 0
    HOT_OR_DOT = auto()
    LAUNCH_ONLY = auto()
    BOOSTED_BY_CRIT = auto()
    PERCENT = auto()
    NEEDS_STAT = auto()
    LAUNCHER_MODIFIER = auto()


_HOT_OR_DOT = EffectCapability.HOT_OR_DOT
_LAUNCH = EffectCapability.LAUNCH_ONLY
_CRIT = EffectCapability.BOOSTED_BY_CRIT
_PERCENT = EffectCapability.PERCENT
_STAT = EffectCapability.NEEDS_STAT
_MODIFIER = EffectCapability.LAUNCHER_MODIFIER

EFFECT_CAPABILITIES: dict[EffectType, EffectCapability] = {
    EffectType.VALUE_CHANGE: _HOT_OR_DOT | _CRIT | _STAT,
    EffectType.PERCENT_CHANGE: _HOT_OR_DOT | _CRIT | _PERCENT | _STAT,
    EffectType.DECREASE_BY_TURN: _HOT_OR_DOT | _CRIT | _STAT,
    EffectType.REPEAT_AS_MANY_AS: _LAUNCH | _STAT | _MODIFIER,
    EffectType.DECREASE_ON_TURN: _LAUNCH | _MODIFIER,
    EffectType.BOOSTED_BY_HOTS: _LAUNCH | _PERCENT,
    EffectType.COOL_DOWN: _LAUNCH,
    EffectType.REINIT: _LAUNCH,
    EffectType.DELETE_BAD: _LAUNCH,
    EffectType.IMPROVE_HOTS: _LAUNCH | _PERCENT,
    EffectType.CHANGE_MAX_DAMAGE_BY_PERCENT: _LAUNCH | _CRIT | _PERCENT,
    EffectType.IMPROVEMENT_BY_VALUE: _LAUNCH | _CRIT | _STAT,
    EffectType.IMPROVE_BY_PERCENT_CHANGE: _LAUNCH | _CRIT | _PERCENT | _STAT,
    EffectType.INTO_DAMAGE: _LAUNCH | _CRIT | _PERCENT | _STAT,
    EffectType.NEXT_HEAL_IS_CRIT: _LAUNCH,
    EffectType.BUF_MULTI: _LAUNCH,
    EffectType.BLOCK_HEAL_ATK: _LAUNCH,
    EffectType.BUF_VALUE_AS_MUCH_AS_HEAL: _LAUNCH | _PERCENT | _STAT,
    EffectType.CHANGE_DAMAGE_RX_BY_PERCENT: _LAUNCH | _PERCENT,
    EffectType.CHANGE_HEAL_RX_BY_PERCENT: _LAUNCH | _PERCENT,
    EffectType.CHANGE_HEAL_TX_BY_PERCENT: _LAUNCH | _PERCENT,
}


def is_hot_or_dot(effect_type: EffectType) -> bool:
    """Whether the effect type is applied again on every turn of its duration."""
    return EffectCapability.HOT_OR_DOT in effect_type.capabilities


def is_active_on_launch_only(effect_type: EffectType) -> bool:
    """Whether the effect type only acts when its attack is launched."""
    return EffectCapability.LAUNCH_ONLY in effect_type.capabilities


def is_boosted_by_crit(effect_type: EffectType) -> bool:
    """Whether the effect type is amplified by a critical strike."""
    return EffectCapability.BOOSTED_BY_CRIT in effect_type.capabilities


def is_percent_type(effect_type: EffectType) -> bool:
    """Whether the value of the effect type is a percentage."""
    return EffectCapability.PERCENT in effect_type.capabilities


def needs_stat(effect_type: EffectType) -> bool:
    """Whether the effect type must name the stat it acts on."""
    return EffectCapability.NEEDS_STAT in effect_type.capabilities


def is_launcher_modifier(effect_type: EffectType) -> bool:
    """Whether the effect type changes the other effects of its attack."""
    return EffectCapability.LAUNCHER_MODIFIER in effect_type.capabilities


def is_heal(stat: StatKind | None, target: TargetKind) -> bool:
    """
    Whether an effect heals: it acts on HP and is not aimed at enemies.

    Damage and heals both act on HP; only the targeting tells them apart.
    """
    return target != TargetKind.ENEMY and stat == StatKind.HP
