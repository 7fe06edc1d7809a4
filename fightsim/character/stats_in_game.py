"""
In-game statistics of the attacks launched by a character.
"""

from pydantic import BaseModel, Field


class AttackUsage(BaseModel):
    """How often an attack was used and the HP amounts it moved per target."""

    atk_name: str
    nb_use: int = 0
    all_amounts_by_target: dict[str, int] = Field(default_factory=dict)


class StatsInGame(BaseModel):
    """Per-attack usage statistics of one character."""

    all_atk_info: list[AttackUsage] = Field(default_factory=list)

    def get(self, atk_name: str) -> AttackUsage | None:
        """Returns the usage of an attack, None if it was never launched."""
        return next((info for info in self.all_atk_info if info.atk_name == atk_name), None)

    def record_launch(self, atk_name: str) -> AttackUsage:
        """Counts one more use of an attack."""
        usage = self.get(atk_name)
        if usage is None:
            usage = AttackUsage(atk_name=atk_name)
            self.all_atk_info.append(usage)
        usage.nb_use += 1
        return usage

    def record_amount(self, atk_name: str, target_name: str, amount: int) -> None:
        """Accumulates the HP amount an attack moved on a target."""
        usage = self.get(atk_name) or self.record_launch(atk_name)
        usage.all_amounts_by_target[target_name] = (
            usage.all_amounts_by_target.get(target_name, 0) + amount
        )
