"""
Fight information module for the fight engine.

Round-scoped flags, damage/heal buffers and per-turn tx/rx counters carried by
every character during a combat session, plus the summary of its ongoing
HOTs, DOTs, buffs and debuffs.
"""

from pydantic import BaseModel, Field


class Buffers(BaseModel):
    """
    A damage or heal buffer of a character.

    A buffer can be passive (a switch, without any value) or active, in which
    case it changes the amounts it is applied to.
    """

    value: int = Field(
        0,
        description="The buffer value, a percentage when is_percent is set.",
    )
    is_percent: bool = Field(
        True,
        description="Whether value is a percentage.",
    )
    is_passive_enabled: bool = Field(
        False,
        description="Whether the buffer is enabled as a passive switch.",
    )

    def add(self, value: int, is_percent: bool = True) -> None:
        """Adds value to the buffer and updates its kind."""
        self.value += value
        self.is_percent = is_percent


class FightInfo(BaseModel):
    """Round-scoped flags of a character."""

    is_first_round: bool = Field(
        True,
        description="Whether the character has not played its first round of the turn yet.",
    )
    is_blocking_atk: bool = Field(
        False,
        description="Whether the character is blocking the attack being resolved.",
    )
    is_current_target: bool = Field(
        False,
        description="Whether the character is the currently selected target.",
    )
    is_random_target: bool = Field(
        False,
        description="Whether the character was drawn as random target of the current attack.",
    )
    is_heal_atk_blocked: bool = Field(
        False,
        description="Whether the character is prevented from launching heal attacks.",
    )
    next_heal_is_crit: bool = Field(
        False,
        description="Whether the next heal attack of the character is a critical strike.",
    )
    actions_done_in_round: int = Field(
        0,
        description="Number of attacks launched in the current round.",
    )
    max_actions_in_round: int = Field(
        1,
        description="Number of attacks the character may launch per round.",
    )


class TxRxCounters(BaseModel):
    """Amounts sent (tx) and received (rx) by a character during one turn."""

    damage_tx: int = 0
    damage_rx: int = 0
    heal_tx: int = 0
    heal_rx: int = 0
    critical_nb: int = 0
    aggro_tx: int = 0


class HotsBufs(BaseModel):
    """Counts and display strings of the ongoing effects of a character."""

    hot_nb: int = 0
    dot_nb: int = 0
    buf_nb: int = 0
    debuf_nb: int = 0
    hot_txt: list[str] = Field(default_factory=list)
    dot_txt: list[str] = Field(default_factory=list)
    buf_txt: list[str] = Field(default_factory=list)
    debuf_txt: list[str] = Field(default_factory=list)
