"""
Rosters of a combat session.

The heroes and the bosses are held in two dense lists owned by the session.
Every other part of the engine designates a character by a ``RosterRef``, an
index into one of those lists, and mutates it in place.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict

from fightsim.character.main import Character
from fightsim.core.constants import CharacterKind


class RosterRef(BaseModel):
    """A reference to a character: its faction and its index in that roster."""

    model_config = ConfigDict(frozen=True)

    kind: CharacterKind
    index: int


class Rosters:
    """
    The two rosters of a session.

    Attributes:
        heroes (list[Character]):
            The heroes, in roster order.
        bosses (list[Character]):
            The bosses, in roster order.

    """

    def __init__(self, heroes: list[Character], bosses: list[Character]) -> None:
        self.heroes = heroes
        self.bosses = bosses

    def __iter__(self) -> Iterator[Character]:
        """Iterates over the heroes, then the bosses."""
        yield from self.heroes
        yield from self.bosses

    def roster(self, kind: CharacterKind) -> list[Character]:
        """Returns the roster of a faction."""
        return self.heroes if kind == CharacterKind.HERO else self.bosses

    def get(self, ref: RosterRef) -> Character:
        """Returns the character designated by a reference."""
        return self.roster(ref.kind)[ref.index]

    def ref_of(self, character: Character) -> RosterRef:
        """Returns the reference of a character of the rosters."""
        for index, member in enumerate(self.roster(character.kind)):
            if member is character:
                return RosterRef(kind=character.kind, index=index)
        raise ValueError(f"Character '{character.name}' is not part of the rosters.")

    def find(self, name: str) -> Character | None:
        """Returns the character with that name, None if there is none."""
        return next((character for character in self if character.name == name), None)

    def living(self, kind: CharacterKind) -> list[Character]:
        """Returns the living members of a faction, in roster order."""
        return [character for character in self.roster(kind) if character.is_alive()]

    def all_dead(self, kind: CharacterKind) -> bool:
        """Whether every member of a faction is dead."""
        return not self.living(kind)
