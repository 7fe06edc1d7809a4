"""
State of a combat session: turn and round cursor, play order and status.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from fightsim.core.constants import GameStatus

from .roster import RosterRef


def new_game_name() -> str:
    """Returns a game name stamped with the current date and time."""
    return f"Game_{datetime.now().strftime('%Y-%m-%d-%H-%M-%S')}"


class GameState(BaseModel):
    """
    The cursor of a combat session.

    Attributes:
        current_turn_nb (int):
            The turn in progress, 0 before the first turn.
        current_round (int):
            1-based index of the current slot in order_to_play, 0 between turns.
        order_to_play (list[RosterRef]):
            The play order of the turn, supplementary actions included.
        died_enemies (dict[int, list[str]]):
            The bosses killed during each turn.
        game_name (str):
            The name of the game, stamped with the creation time unless given.
        status (GameStatus):
            The state of the session.

    """

    current_turn_nb: int = 0
    current_round: int = 0
    order_to_play: list[RosterRef] = Field(default_factory=list)
    died_enemies: dict[int, list[str]] = Field(default_factory=dict)
    game_name: str = Field(default_factory=new_game_name)
    status: GameStatus = GameStatus.CREATED

    @property
    def is_round_in_order(self) -> bool:
        """Whether the round cursor designates a slot of the play order."""
        return 1 <= self.current_round <= len(self.order_to_play)

    def current_ref(self) -> RosterRef | None:
        """Returns the reference of the current actor, None between turns."""
        if not self.is_round_in_order:
            return None
        return self.order_to_play[self.current_round - 1]

    def all_died_enemies(self) -> set[str]:
        """Returns the names of every boss killed so far."""
        return {name for names in self.died_enemies.values() for name in names}
