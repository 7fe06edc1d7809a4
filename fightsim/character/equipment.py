"""
Equipment value objects consumed by the fight engine.

The catalog of equipment and its slot model belong to the data layer; the
engine only needs the stat bonuses an equipped item grants.
"""

from pydantic import BaseModel, Field

from fightsim.core.constants import StatKind


class StatBonus(BaseModel):
    """A bonus to one stat, by value or by percent of the raw maximum."""

    value: int = 0
    is_percent: bool = False


class Equipment(BaseModel):
    """An item worn by a character."""

    name: str = Field(
        description="The name of the item.",
    )
    stats: dict[StatKind, StatBonus] = Field(
        default_factory=dict,
        description="The bonuses granted by the item.",
    )
