"""
Attribute module for the fight engine.

An attribute is one layered stat of a character: the value in use, its raw
baseline (base stat without equipment or buffs), its maximum and the
contributions of equipment and buffs to that maximum.
"""

from pydantic import BaseModel, Field


class Attribute(BaseModel):
    """
    One stat of a character with its raw baseline and its contributions.

    Invariant: 0 <= current <= max at the end of every public operation of the
    owning StatModel.
    """

    current: int = Field(
        0,
        description="The value currently in use.",
    )
    current_raw: int = Field(
        0,
        description="The current value without equipment or buff contributions.",
    )
    max: int = Field(
        0,
        description="The maximum, base plus equipment plus active buffs.",
    )
    max_raw: int = Field(
        0,
        description="The base maximum, without equipment or buff contributions.",
    )
    buf_value: int = Field(
        0,
        description="Sum of the active buffs by value.",
    )
    buf_percent: int = Field(
        0,
        description="Sum of the active buffs by percent of max_raw.",
    )
    equip_value: int = Field(
        0,
        description="Sum of the equipment bonuses by value.",
    )
    equip_percent: int = Field(
        0,
        description="Sum of the equipment bonuses by percent of max_raw.",
    )

    @classmethod
    def from_value(cls, value: int) -> "Attribute":
        """Builds a full attribute whose current, max and raw values all equal value."""
        return cls(current=value, current_raw=value, max=value, max_raw=value)

    def __str__(self) -> str:
        return f"{self.current}/{self.max}"
