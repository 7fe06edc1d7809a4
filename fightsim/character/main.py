"""
Character module for the fight engine.

Defines the Character class: identity, faction and class, the stat model, the
known attacks, the registry of running effects, round-scoped flags, buffers
and per-turn tx/rx counters.
"""

from typing import TYPE_CHECKING

from fightsim.core.constants import BufKind, CharacterClass, CharacterKind, StatKind
from fightsim.core.logging import log_debug
from fightsim.core.utils import make_bar
from fightsim.effects.effect import GameAtkEffects
from fightsim.effects.effect_engine import summarize_by_category

from .equipment import Equipment
from .fight_info import Buffers, FightInfo, HotsBufs, TxRxCounters
from .stat_model import StatModel
from .stats_in_game import StatsInGame

if TYPE_CHECKING:
    from fightsim.attacks.attack import AttackDefinition


class Character:
    """
    Represents a combatant, hero or boss.

    A character is built once at session start and lives for the whole
    session: it is never removed on death, only marked dead by its HP.

    Attributes:
        name (str):
            The name of the character, unique within a session.
        kind (CharacterKind):
            The faction of the character.
        char_class (CharacterClass):
            The combat class, tanks block the attacks aimed at them.
        level (int):
            The level, attacks require a minimum level.
        experience (int):
            The experience points.
        stats (StatModel):
            The layered attributes of the character.
        attacks (dict[str, AttackDefinition]):
            The known attacks by name.
        effects (list[GameAtkEffects]):
            The registry of the effects running on the character.
        fight_info (FightInfo):
            The round-scoped flags.
        buffers (dict[BufKind, Buffers]):
            The damage and heal buffers.
        tx_rx (dict[int, TxRxCounters]):
            The amounts sent and received, by turn.
        stats_in_game (StatsInGame):
            The usage statistics of the attacks.
        equipments (list[Equipment]):
            The items worn by the character.

    """

    def __init__(
        self,
        name: str,
        kind: CharacterKind,
        stats: dict[StatKind, int],
        char_class: CharacterClass = CharacterClass.STANDARD,
        level: int = 1,
        experience: int = 0,
        attacks: list["AttackDefinition"] | None = None,
        max_actions_in_round: int = 1,
    ) -> None:
        self.name = name
        self.kind = kind
        self.char_class = char_class
        self.level = level
        self.experience = experience

        self.stats = StatModel.from_values(stats, owner=name)
        self.stats.sync_raw_baseline()

        self.attacks: dict[str, "AttackDefinition"] = {}
        for attack in attacks or []:
            self.add_attack(attack)

        self.effects: list[GameAtkEffects] = []
        self.fight_info = FightInfo(max_actions_in_round=max_actions_in_round)
        self.buffers: dict[BufKind, Buffers] = {kind: Buffers() for kind in BufKind}
        self.buffers[BufKind.HEAL_MULTI].is_percent = False
        self.tx_rx: dict[int, TxRxCounters] = {}
        self.stats_in_game = StatsInGame()
        self.equipments: list[Equipment] = []

    def __repr__(self) -> str:
        return f"Character({self.name!r}, {self.kind}, HP={self.stats.get(StatKind.HP)})"

    @property
    def colored_name(self) -> str:
        """Returns the name with the color of the faction."""
        return self.kind.colorize(self.name)

    # === Life ===

    def is_dead(self) -> bool:
        """Whether the HP of the character dropped to 0."""
        return self.stats.current(StatKind.HP) <= 0

    def is_alive(self) -> bool:
        return not self.is_dead()

    # === Attacks ===

    def add_attack(self, attack: "AttackDefinition") -> None:
        """Adds (or replaces) a known attack."""
        self.attacks[attack.name] = attack

    @property
    def attacks_by_level(self) -> list["AttackDefinition"]:
        """Returns the known attacks ordered by level, then by name."""
        return sorted(self.attacks.values(), key=lambda atk: (atk.level, atk.name))

    # === Buffers and counters ===

    def buffer(self, kind: BufKind) -> Buffers:
        """Returns one of the damage/heal buffers."""
        return self.buffers[kind]

    def tx_rx_at(self, turn: int) -> TxRxCounters:
        """Returns the counters of a turn, creating them on first access."""
        return self.tx_rx.setdefault(turn, TxRxCounters())

    def aggro_over_last_turns(self, current_turn: int, nb_turns: int) -> int:
        """
        Sums the aggro generated during the last turns.

        Args:
            current_turn (int):
                The turn in progress, included in the sum.
            nb_turns (int):
                How many turns to sum.

        Returns:
            int:
                The aggro sent over those turns.

        """
        first = current_turn - nb_turns + 1
        return sum(
            counters.aggro_tx
            for turn, counters in self.tx_rx.items()
            if first <= turn <= current_turn
        )

    def reset_round_flags(self) -> None:
        """Prepares the character for a new turn."""
        self.fight_info.is_first_round = True
        self.fight_info.actions_done_in_round = 0

    # === Equipment ===

    def equip(self, equipment: Equipment) -> None:
        """Wears an item and adds its bonuses to the maxima."""
        for kind, bonus in equipment.stats.items():
            self.stats.add_equipment(kind, bonus.value, bonus.is_percent)
        self.equipments.append(equipment)
        log_debug(f"{self.name} equipped {equipment.name}", {"nb_bonus": len(equipment.stats)})

    def unequip(self, equipment_name: str) -> Equipment | None:
        """Removes a worn item and its bonuses, returns None if it is not worn."""
        for equipment in self.equipments:
            if equipment.name == equipment_name:
                for kind, bonus in equipment.stats.items():
                    self.stats.add_equipment(kind, -bonus.value, bonus.is_percent)
                self.equipments.remove(equipment)
                return equipment
        return None

    # === Display ===

    def hots_and_bufs(self) -> HotsBufs:
        """Returns the HOTs, DOTs, buffs and debuffs running on the character."""
        return summarize_by_category(self.effects)

    def get_status_line(self, show_bars: bool = True) -> str:
        """
        Returns a one-line status of the character, with rich markup.

        Args:
            show_bars (bool):
                Whether to draw HP and Mana bars next to the numbers.

        """
        if self.is_dead():
            return f"{self.colored_name} [dim](dead)[/]"
        parts = [self.colored_name]
        for kind, color in ((StatKind.HP, "green"), (StatKind.MANA, "blue")):
            attr = self.stats.get(kind)
            text = f"{kind} {attr}"
            if show_bars:
                text += " " + make_bar(attr.current, attr.max, color=color)
            parts.append(text)
        summary = self.hots_and_bufs()
        if summary.hot_nb or summary.dot_nb or summary.buf_nb or summary.debuf_nb:
            parts.append(
                f"HOT {summary.hot_nb} DOT {summary.dot_nb} "
                f"BUF {summary.buf_nb} DEBUF {summary.debuf_nb}"
            )
        return " | ".join(parts)
