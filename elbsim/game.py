# elbsim/game.py

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Optional
from .bases import BaseState
from .batted_ball import resolve_batted_ball
from .constants import *
from .contact import batter_swings, resolve_contact
from .fielding import determine_hit_bases, resolve_ball_in_play
from .pitching import generate_pitch
from .stats import roll
from .team import TeamConfigurationError
from .utils import ordinal_suffix

logger = logging.getLogger(__name__)


class GameNotFinishedError(RuntimeError):
    """Raised when final game counters are requested before the last out."""


@dataclass(frozen=True)
class PlayLogEntry:
    message: str
    important: bool = False
    is_incineration: bool = False
    timestamp: float = 0.0


@dataclass
class GameEvents:
    home_runs: int = 0
    strikeouts: int = 0
    stolen_bases: int = 0 # No steal model yet; kept for the economy contract
    rbis: int = 0
    incinerations: int = 0
    injuries: int = 0

    def to_dict(self):
        return asdict(self)


@dataclass
class GameState:
    inning: int = 1
    is_top_half: bool = True # Away team bats in the top half
    outs: int = 0
    balls: int = 0
    strikes: int = 0
    bases: BaseState = field(default_factory=BaseState)
    score: dict = field(default_factory=lambda: {"home": 0, "away": 0})
    batter_index: dict = field(default_factory=lambda: {"home": 0, "away": 0})
    current_batter_id: Optional[str] = None
    current_pitcher_id: Optional[str] = None
    play_log: list = field(default_factory=list)
    game_events: GameEvents = field(default_factory=GameEvents)
    is_game_over: bool = False
    pitch_count: int = 0

    @property
    def batting_side(self):
        return "away" if self.is_top_half else "home"

    @property
    def fielding_side(self):
        return "home" if self.is_top_half else "away"


@dataclass
class PlayResult:
    play_type: PlayType
    out_type: Optional[OutType] = None
    bases: int = 0
    rbis: int = 0
    runs: int = 0
    fielder_id: Optional[str] = None
    throw_target: Optional[str] = None
    hit_reason: Optional[HitReason] = None
    pitch: Optional[object] = None
    batted_ball: Optional[object] = None
    fielding_physics: Optional[dict] = None
    baserunning_physics: Optional[dict] = None

    def to_dict(self):
        return {
            "type": self.play_type.value,
            "out_type": self.out_type.value if self.out_type else None,
            "bases": self.bases,
            "rbis": self.rbis,
            "runs": self.runs,
            "fielder_id": self.fielder_id,
            "throw_target": self.throw_target,
            "hit_reason": self.hit_reason.value if self.hit_reason else None,
            "pitch": self.pitch.to_dict() if self.pitch else None,
            "batted_ball": self.batted_ball.to_dict() if self.batted_ball else None,
            "fielding_physics": self.fielding_physics,
            "baserunning_physics": self.baserunning_physics,
        }


class Game:
    """Pitch-by-pitch state machine for one game between two teams."""

    def __init__(self, home_team, away_team, sim_params=None, rng=None, game_id=1):
        if home_team is None or away_team is None:
            raise TeamConfigurationError("A game needs both a home and an away team.")
        home_team.validate()
        away_team.validate()

        self.game_id = game_id
        self.home_team = home_team
        self.away_team = away_team
        self.sim_params = dict(DEFAULT_SIM_PARAMS)
        self.sim_params.update(sim_params or {})
        self.rng = rng or random.Random(self.sim_params.get('seed'))
        for team in (home_team, away_team):
            if team.rng is None:
                team.rng = random.Random(self.rng.randint(0, 2**32))

        self.state = GameState()
        self._refresh_participants()

        self.log_play(f"Game Start: {away_team.name} at {home_team.name}")
        self.log_play("Top of the 1st inning...")
        self.log_play(f"{self.current_batter.name} steps up to the plate.")

    # --- Participants -------------------------------------------------

    @property
    def batting_team(self):
        return self.away_team if self.state.is_top_half else self.home_team

    @property
    def fielding_team(self):
        return self.home_team if self.state.is_top_half else self.away_team

    @property
    def current_batter(self):
        return self.batting_team.get_player(self.state.current_batter_id)

    @property
    def current_pitcher(self):
        return self.fielding_team.get_player(self.state.current_pitcher_id)

    @property
    def play_log(self):
        return self.state.play_log

    @property
    def game_events(self):
        return self.state.game_events

    def _refresh_participants(self):
        """Re-derives the current batter and pitcher ids from the teams."""
        lineup = self.batting_team.lineup
        if not lineup:
            raise TeamConfigurationError(f"Team '{self.batting_team.name}' has no batters.")
        side = self.state.batting_side
        self.state.batter_index[side] %= len(lineup)
        self.state.current_batter_id = lineup[self.state.batter_index[side]].id
        self.state.current_pitcher_id = self.fielding_team.pitcher.id

    def log_play(self, message, important=False, incineration=False):
        self.state.play_log.append(PlayLogEntry(message, important, incineration, time.time()))
        logger.log(logging.INFO if important else logging.DEBUG, message)

    # --- Main step ----------------------------------------------------

    def simulate_pitch(self):
        """Advances the game by one pitch. Returns a PlayResult, or None once the game is over."""
        if self.state.is_game_over:
            return None

        # A replaced batter takes the same slot and faces the incineration check again
        while self._check_incineration(self.current_batter, self.batting_team) is not None:
            pass

        batter = self.current_batter
        pitch = generate_pitch(self.current_pitcher, self.rng, self.sim_params['stamina_cost_per_pitch'])
        self.state.pitch_count += 1

        if not batter_swings(batter, pitch, self.rng):
            result = self._take_pitch(pitch)
        else:
            attempt = resolve_contact(batter, pitch, self.rng)
            if not attempt.contact:
                self.state.strikes += 1
                self.log_play(f"Swings and misses! Strike {self.state.strikes}.")
                if self.state.strikes >= STRIKES_FOR_OUT:
                    result = self._resolve_strikeout()
                else:
                    result = PlayResult(PlayType.SWING_MISS)
            else:
                batted_ball = resolve_batted_ball(batter, pitch, self.rng)
                self.log_play(f"{batter.name} makes contact! {batted_ball.description}")
                fielding = resolve_ball_in_play(batted_ball, self.fielding_team, batter, self.rng,
                                                incinerate=self._incinerate_fielder)
                result = self._apply_fielding(fielding, batted_ball)
                result.batted_ball = batted_ball

        result.pitch = pitch
        self._check_invariants()
        return result

    def _take_pitch(self, pitch):
        if pitch.is_strike:
            self.state.strikes += 1
            self.log_play(f"Called strike {self.state.strikes}.")
            if self.state.strikes >= STRIKES_FOR_OUT:
                return self._resolve_strikeout()
        else:
            self.state.balls += 1
            self.log_play(f"Ball {self.state.balls}.")
            if self.state.balls >= BALLS_FOR_WALK:
                return self._resolve_walk()
        return PlayResult(PlayType.PITCH)

    def _apply_fielding(self, fielding, batted_ball):
        outcome = fielding.outcome
        if outcome == FieldingOutcome.HOME_RUN:
            return self._resolve_home_run()

        fielder = fielding.fielder
        if outcome == FieldingOutcome.CATCH:
            self.log_play(f"{fielder.name} fields it cleanly!")
            self.log_play(f"{fielder.name} makes the catch!")
            result = self._resolve_out(OutType.FLYOUT)
        elif outcome == FieldingOutcome.GROUNDOUT:
            self.log_play(f"{fielder.name} fields it cleanly!")
            self.log_play(f"{fielder.name} throws to first...")
            self.log_play("OUT at first base!")
            result = self._resolve_out(OutType.GROUNDOUT)
        elif outcome == FieldingOutcome.HIT:
            self._log_hit_reason(fielding)
            result = self._resolve_hit(batted_ball, fielding.fielder_missed)
            result.hit_reason = fielding.hit_reason
        else:
            raise ValueError(f"Unhandled fielding outcome: {outcome}")

        result.fielder_id = fielder.id if fielder else None
        result.throw_target = fielding.throw_target
        result.fielding_physics = fielding.fielding_physics()
        result.baserunning_physics = fielding.baserunning_physics()
        return result

    def _log_hit_reason(self, fielding):
        reason = fielding.hit_reason
        name = fielding.fielder.name
        if reason == HitReason.FIELDER_INCINERATED:
            self.log_play("The ball falls! No one there to make the play!")
        elif reason == HitReason.UNREACHED:
            self.log_play(f"{name} can't reach it!")
        elif reason == HitReason.BOBBLED:
            self.log_play(f"{name} bobbles the ball!")
        elif reason in (HitReason.BEAT_THROW, HitReason.THROWING_ERROR):
            self.log_play(f"{name} fields it cleanly!")
            self.log_play(f"{name} throws to first...")
            if reason == HitReason.THROWING_ERROR:
                self.log_play("The throw is wide!")
            self.log_play("Safe at first!")
        else:
            raise ValueError(f"Unhandled hit reason: {reason}")

    # --- Resolutions ----------------------------------------------------

    def _resolve_hit(self, batted_ball, fielder_missed):
        bases = determine_hit_bases(batted_ball, fielder_missed)
        batter = self.current_batter
        self.log_play(f"{batter.name} hits a {HIT_NAMES[bases]}!", important=True)

        scored = self.state.bases.advance_on_hit(bases, batter.id)
        rbis = len(scored)
        self._add_runs(rbis)
        if rbis > 0:
            self.state.game_events.rbis += rbis
            self.log_play(f"{rbis} RBI{'s' if rbis > 1 else ''}!", important=True)

        self._end_plate_appearance()
        return PlayResult(PlayType.HIT, bases=bases, rbis=rbis, runs=rbis)

    def _resolve_home_run(self):
        self.log_play("IT'S GOING... GOING... GONE! HOME RUN!", important=True)
        runs = len(self.state.bases.clear_on_home_run()) + 1
        self._add_runs(runs)
        self.state.game_events.home_runs += 1
        self.state.game_events.rbis += runs
        self.log_play(f"{runs} run{'s' if runs > 1 else ''} score!", important=True)

        self._end_plate_appearance()
        return PlayResult(PlayType.HOME_RUN, runs=runs, rbis=runs)

    def _resolve_strikeout(self):
        self.log_play(f"{self.current_batter.name} strikes out!", important=True)
        self.state.game_events.strikeouts += 1
        return self._resolve_out(OutType.STRIKEOUT)

    def _resolve_walk(self):
        batter = self.current_batter
        self.log_play(f"{batter.name} walks.")
        runs = len(self.state.bases.force_walk(batter.id))
        if runs:
            self._add_runs(runs)
            self.state.game_events.rbis += runs
            self.log_play("Runner scores from third!", important=True)

        self._end_plate_appearance()
        return PlayResult(PlayType.WALK, runs=runs, rbis=runs)

    def _resolve_out(self, out_type):
        self.state.outs += 1
        self.log_play(f"{self.state.outs} out{'s' if self.state.outs > 1 else ''}.")
        self._reset_count()
        self._advance_lineup()

        if self.state.outs >= OUTS_PER_HALF:
            self._end_half_inning()
        else:
            self._next_batter()
        return PlayResult(PlayType.OUT, out_type=out_type)

    # --- Transitions --------------------------------------------------

    def _add_runs(self, runs):
        if runs:
            self.state.score[self.state.batting_side] += runs
            logger.debug(f"{self.batting_team.name} score {runs}. Score: {self.state.score}")

    def _reset_count(self):
        self.state.balls = 0
        self.state.strikes = 0

    def _advance_lineup(self):
        side = self.state.batting_side
        self.state.batter_index[side] = (self.state.batter_index[side] + 1) % len(self.batting_team.lineup)

    def _next_batter(self):
        self._refresh_participants()
        self.log_play(f"{self.current_batter.name} steps up to the plate.")

    def _end_plate_appearance(self):
        logger.debug(f"Bases: {self.state.bases.describe(lambda runner: self.batting_team.get_player(runner).name)}")
        self._reset_count()
        self._advance_lineup()
        self._next_batter()

    def _end_half_inning(self):
        state = self.state
        self.log_play(f"End of {'top' if state.is_top_half else 'bottom'} of inning {state.inning}.", important=True)
        state.bases.clear()
        state.outs = 0
        self._reset_count()

        if state.is_top_half:
            state.is_top_half = False
            self.log_play(f"Bottom of the {state.inning}{ordinal_suffix(state.inning)} inning...")
        else:
            if state.inning >= self.sim_params['regulation_innings'] and state.score["home"] != state.score["away"]:
                self._end_game()
                return
            state.inning += 1
            state.is_top_half = True
            self.log_play(f"Top of the {state.inning}{ordinal_suffix(state.inning)} inning...")

        self._next_batter()

    def _end_game(self):
        self.state.is_game_over = True
        score = self.state.score
        self.log_play(f"FINAL SCORE: {self.away_team.name} {score['away']}, {self.home_team.name} {score['home']}",
                      important=True)
        self.log_play(f"{self.winner.name} wins!", important=True)

    def _check_incineration(self, player, team):
        """Rolls for incineration. On a hit, replaces the player and returns the replacement."""
        if not roll(self.rng, self.sim_params['incineration_chance']):
            return None
        new_player = team.incinerate_and_replace(player)
        self.log_play(f"⚡ {player.name} HAS BEEN INCINERATED! ⚡", important=True, incineration=True)
        self.log_play(f"{new_player.name} emerges from the ashes to take their place.", important=True)
        self.state.game_events.incinerations += 1

        # Drop every reference to the old id
        self.state.bases.remove(player.id)
        self._refresh_participants()
        return new_player

    def _incinerate_fielder(self, fielder):
        return self._check_incineration(fielder, self.fielding_team)

    def _check_invariants(self):
        state = self.state
        if not (0 <= state.balls < BALLS_FOR_WALK and 0 <= state.strikes < STRIKES_FOR_OUT):
            raise AssertionError(f"Count out of bounds: {state.balls}-{state.strikes}")
        if not 0 <= state.outs < OUTS_PER_HALF:
            raise AssertionError(f"Outs out of bounds: {state.outs}")

    # --- Read-only views ------------------------------------------------

    @property
    def winner(self):
        score = self.state.score
        if score["home"] == score["away"]:
            return None
        return self.home_team if score["home"] > score["away"] else self.away_team

    def get_game_state(self):
        """Snapshot for the presentation layer; exposes names, never runner ids."""
        state = self.state
        first, second, third = state.bases.occupied()
        return {
            "inning": state.inning,
            "is_top_half": state.is_top_half,
            "outs": state.outs,
            "balls": state.balls,
            "strikes": state.strikes,
            "bases": {"first": first, "second": second, "third": third},
            "score": dict(state.score),
            "current_batter": self.current_batter.name,
            "current_pitcher": self.current_pitcher.name,
            "is_game_over": state.is_game_over,
        }

    def game_events_snapshot(self):
        """Final counters for payouts; only valid once the game is over."""
        if not self.state.is_game_over:
            raise GameNotFinishedError(f"Game {self.game_id} is still in progress.")
        return self.state.game_events.to_dict()

    def run_game(self, max_pitches=None):
        """Simulates pitches until the game ends."""
        limit = self.sim_params['max_pitches_per_game'] if max_pitches is None else max_pitches
        while not self.state.is_game_over:
            if self.state.pitch_count >= limit:
                raise ValueError(f"Game {self.game_id} exceeded {limit} pitches without finishing.")
            self.simulate_pitch()
        logger.info(f"Game {self.game_id} over. {self.away_team.name} {self.state.score['away']}, "
                    f"{self.home_team.name} {self.state.score['home']}")
        return {
            "game_id": self.game_id,
            "final_score": dict(self.state.score),
            "winner": self.winner.name if self.winner else None,
            "innings": self.state.inning,
            "pitches": self.state.pitch_count,
            "game_events": self.game_events_snapshot(),
            "log": [entry.message for entry in self.state.play_log] if self.sim_params.get('verbose', True) else [],
        }


def new_game(home_team, away_team, sim_params=None, rng=None):
    """Validates both teams and returns a game ready for its first pitch."""
    return Game(home_team, away_team, sim_params=sim_params, rng=rng)
