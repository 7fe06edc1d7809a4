"""
Combat session module for the fight engine.

The session owns the two rosters and the game state and ties the turn
scheduler, the attack resolver and the effect engine together. It is the
single writer of every character of the fight.
"""

from typing import Any

from catchery import log_warning

from fightsim.attacks.resolver import AttackResolver, AttackResult
from fightsim.character.main import Character
from fightsim.character.serialization import character_from_dict, character_to_dict
from fightsim.core.config import CombatConfig
from fightsim.core.constants import CharacterKind, GameStatus
from fightsim.core.errors import ConfigurationError
from fightsim.core.logging import log_debug, log_error, log_info
from fightsim.core.rng import CombatRng
from fightsim.core.utils import cprint, crule
from fightsim.effects.effect_engine import EffectEngine

from .auto_play import choose_auto_action
from .game_state import GameState
from .roster import Rosters
from .scheduler import TurnScheduler


class CombatSession:
    """
    Runs a fight between heroes and bosses.

    The session goes from Created to StartRound with ``start_new_game`` and
    ends in EndOfGame once a whole faction is dead. Between those, every
    ``launch_attack`` resolves one attack of the current actor and moves the
    round cursor when the actor has used its actions. The game name
    defaults to one stamped with the current date and time, pass game_name
    for a reproducible one.

    Attributes:
        config (CombatConfig):
            The rules of the session.
        rng (CombatRng):
            The random source, seeded from the configuration.
        rosters (Rosters):
            The heroes and the bosses.
        state (GameState):
            The turn and round cursor.
        verbose (bool):
            Whether to print the fight on the console.

    """

    def __init__(
        self,
        heroes: list[Character],
        bosses: list[Character],
        config: CombatConfig | None = None,
        verbose: bool = False,
        game_name: str | None = None,
    ) -> None:
        self.config = config or CombatConfig()
        self.rng = CombatRng(self.config.seed)
        self.rosters = Rosters(heroes, bosses)
        self.state = GameState(game_name=game_name) if game_name else GameState()
        self.verbose = verbose

        self.engine = EffectEngine(self.config)
        self.scheduler = TurnScheduler(self.config)
        self.resolver = AttackResolver(self.config, self.rng, self.engine)

        # Logs of the effect ticks, handed to the next attack result.
        self._round_logs: list[str] = []

        names = [character.name for character in self.rosters]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ConfigurationError(f"Character names must be unique: {sorted(duplicates)}")

    # === Lookups ===

    @property
    def heroes(self) -> list[Character]:
        return self.rosters.heroes

    @property
    def bosses(self) -> list[Character]:
        return self.rosters.bosses

    @property
    def current_actor(self) -> Character | None:
        """Returns the character playing the current round, None between rounds."""
        ref = self.state.current_ref()
        if ref is None:
            return None
        return self.rosters.get(ref)

    def get_character(self, name: str) -> Character | None:
        """Returns the character with that name, None if there is none."""
        return self.rosters.find(name)

    # === State machine ===

    def start_new_game(self) -> Character | None:
        """
        Starts the fight: first turn, then first round.

        Returns:
            Character | None:
                The first actor, None if the game could not start.

        """
        if self.state.status != GameStatus.CREATED:
            log_warning(
                "The game has already started",
                {"game": self.state.game_name, "status": str(self.state.status)},
            )
            return None
        self.state.status = GameStatus.START_ROUND
        log_info(
            f"{self.state.game_name} starts",
            {"heroes": len(self.heroes), "bosses": len(self.bosses)},
        )
        if self.check_end_of_game():
            return None
        self.start_new_turn()
        return self.new_round()

    def start_new_turn(self) -> None:
        """Starts a new turn and recomputes the play order."""
        self.scheduler.start_new_turn(self.rosters, self.state, self.engine)
        if self.verbose:
            crule(f"⏱ Start of Turn {self.state.current_turn_nb}", style="cyan")

    def new_round(self) -> Character | None:
        """
        Moves to the next living actor, starting a new turn when the play
        order is exhausted. At the first round of an actor in a turn, its
        running effects are applied again.

        Returns:
            Character | None:
                The new current actor, None if the game is over.

        """
        max_attempts = 4 * (len(self.heroes) + len(self.bosses)) + 4
        for _ in range(max_attempts):
            if self.state.status == GameStatus.END_OF_GAME:
                return None
            if not self.scheduler.advance(self.rosters, self.state):
                if self.check_end_of_game():
                    return None
                self.start_new_turn()
                continue
            actor = self.current_actor
            assert actor is not None
            actor.fight_info.actions_done_in_round = 0
            if actor.fight_info.is_first_round:
                actor.fight_info.is_first_round = False
                self._round_logs.extend(
                    self.engine.tick_effects(actor, self.state.current_turn_nb, self.get_character)
                )
                if actor.is_dead():
                    self._update_died_enemies()
                    self.check_end_of_game()
                    continue
            if self.verbose:
                cprint(actor.get_status_line())
            return actor
        log_error("No living actor found", {"turn": self.state.current_turn_nb})
        return None

    def check_end_of_game(self) -> bool:
        """
        Whether every hero or every boss is dead. Switches the session to
        EndOfGame when it is the case.
        """
        if self.rosters.all_dead(CharacterKind.HERO) or self.rosters.all_dead(CharacterKind.BOSS):
            if self.state.status != GameStatus.END_OF_GAME:
                self.state.status = GameStatus.END_OF_GAME
                winner = "Bosses" if self.rosters.all_dead(CharacterKind.HERO) else "Heroes"
                log_info(f"{self.state.game_name} is over", {"winner": winner})
                if self.verbose:
                    crule(f"🏁 {winner} win", style="bold yellow")
            return True
        return False

    def is_round_auto(self) -> bool:
        """Whether the current actor is computer-controlled."""
        actor = self.current_actor
        return actor is not None and actor.kind == CharacterKind.BOSS

    # === Actions ===

    def select_target(self, name: str) -> bool:
        """
        Marks a living character as the currently selected target.

        Returns:
            bool:
                False if no living character has that name.

        """
        target = self.get_character(name)
        if target is None or target.is_dead():
            log_warning(
                f"Cannot select {name} as target",
                {"game": self.state.game_name, "target": name},
            )
            return False
        for character in self.rosters:
            character.fight_info.is_current_target = character is target
        return True

    def launch_attack(self, atk_name: str, target_name: str | None = None) -> AttackResult:
        """
        Resolves one attack of the current actor.

        Args:
            atk_name (str):
                The name of the attack.
            target_name (str | None):
                The target to select first, None to keep the current selection.

        Raises:
            ConfigurationError:
                If the attack or a character is misconfigured. The round cursor
                is left untouched.

        Returns:
            AttackResult:
                The outcomes, or an empty result if nothing was launched.

        """
        actor = self.current_actor
        if self.state.status != GameStatus.START_ROUND or actor is None:
            log_warning(
                f"Cannot launch {atk_name} outside of a round",
                {"game": self.state.game_name, "status": str(self.state.status)},
            )
            return AttackResult()
        if atk_name not in actor.attacks:
            log_warning(
                f"Unknown attack {atk_name}",
                {"launcher": actor.name, "attack": atk_name},
            )
            return AttackResult()
        if target_name is not None and not self.select_target(target_name):
            return AttackResult()

        try:
            result = self.resolver.launch(
                actor,
                atk_name,
                self.heroes,
                self.bosses,
                self.state.current_turn_nb,
            )
        except ConfigurationError as e:
            log_error(
                f"{actor.name} cannot resolve {atk_name}",
                {"error": str(e), "turn": self.state.current_turn_nb},
            )
            raise
        if result.is_empty:
            return result

        result.logs_new_round = self._round_logs
        self._round_logs = []
        if self.verbose:
            self.display_result(result)

        self._update_died_enemies()
        if not self.check_end_of_game():
            if actor.fight_info.actions_done_in_round >= actor.fight_info.max_actions_in_round:
                self.new_round()
        return result

    def launch_auto_attack(self) -> AttackResult:
        """
        Plays the round of a computer-controlled actor.

        An actor without any launchable attack passes its round.
        """
        actor = self.current_actor
        if actor is None or not self.is_round_auto():
            log_warning(
                "The current round is not computer-controlled",
                {"game": self.state.game_name, "actor": actor.name if actor else None},
            )
            return AttackResult()
        choice = choose_auto_action(
            actor, self.rosters, self.config, self.rng, self.state.current_turn_nb
        )
        if choice is None:
            log_warning(f"{actor.name} has no attack to launch", {"actor": actor.name})
            self.new_round()
            return AttackResult(is_auto_atk=True)
        attack, target = choice
        result = self.launch_attack(attack.name, target.name if target else None)
        result.is_auto_atk = True
        return result

    def _update_died_enemies(self) -> None:
        known = self.state.all_died_enemies()
        died = [boss.name for boss in self.bosses if boss.is_dead() and boss.name not in known]
        if died:
            self.state.died_enemies.setdefault(self.state.current_turn_nb, []).extend(died)
            log_debug("Bosses died", {"turn": self.state.current_turn_nb, "names": died})

    # === Display ===

    def display_result(self, result: AttackResult) -> None:
        """Prints the outcomes of an attack on the console."""
        for line in result.logs_new_round:
            cprint(f"    [dim]{line}[/]")
        crit = " [bold yellow](critical)[/]" if result.is_crit else ""
        cprint(f"{result.launcher_name} launches [bold]{result.atk_name}[/]{crit}")
        for info in result.dodging:
            if info.is_dodging:
                cprint(f"    {info.name} dodges")
        for outcome in result.outcomes:
            cprint(f"    {outcome.text}")

    # === Snapshots ===

    def snapshot(self) -> dict[str, Any]:
        """
        Returns the full state of the session as plain values.

        The random source is saved with its full internal state, so that a
        restored session draws the same rolls as the original one.
        """
        return {
            "config": self.config.model_dump(mode="json"),
            "state": self.state.model_dump(mode="json"),
            "heroes": [character_to_dict(hero) for hero in self.heroes],
            "bosses": [character_to_dict(boss) for boss in self.bosses],
            "round_logs": list(self._round_logs),
            "rng_state": self.rng.getstate(),
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any], verbose: bool = False) -> "CombatSession":
        """
        Rebuilds a session from the output of ``snapshot``.

        Raises:
            ConfigurationError:
                If a character of the snapshot is malformed.

        """
        session = cls(
            heroes=[character_from_dict(hero) for hero in data.get("heroes", [])],
            bosses=[character_from_dict(boss) for boss in data.get("bosses", [])],
            config=CombatConfig.model_validate(data.get("config", {})),
            verbose=verbose,
        )
        if "state" in data:
            session.state = GameState.model_validate(data["state"])
        session._round_logs = list(data.get("round_logs", []))
        if "rng_state" in data:
            session.rng.setstate(data["rng_state"])
        return session
