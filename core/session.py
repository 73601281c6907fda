"""Trial state machine: tile placement, checking, retry and advance."""

import logging
import random
from typing import Callable, Optional

from .config import DEFAULT_WORD_LENGTH
from .evaluator import is_correct
from .generator import generate_trial
from .interfaces import AdaptiveSelector, ReverseModeController, StatsSink
from .models import BottomBarState, Direction, Pool, Trial
from .reverse_mode import SmartReverseMode
from .stopwatch import Stopwatch

logger = logging.getLogger(__name__)


class SessionOptions:
    """Host-supplied overrides, resolved once when the session is built.

    direction_override fixes the direction for the whole session; the reverse
    mode controller is then never consulted. on_correct receives the unit ids
    of a solved trial when the learner advances past it, on_wrong fires after
    each wrong check.
    """

    def __init__(self, direction_override: Optional[Direction] = None,
                 on_correct: Optional[Callable[[list[str]], None]] = None,
                 on_wrong: Optional[Callable[[], None]] = None,
                 initial_score: int = 0):
        self.direction_override = direction_override
        self.on_correct = on_correct
        self.on_wrong = on_wrong
        self.initial_score = initial_score


class ScoreBoard:
    """Running score and wrong streak."""

    def __init__(self, score: int = 0):
        self.score = max(0, score)
        self.wrong_streak = 0

    def apply_correct(self, unit_count: int) -> int:
        """Add one point per unit. Returns the delta."""
        self.score += unit_count
        self.wrong_streak = 0
        return unit_count

    def apply_wrong(self) -> int:
        """Take one point, never going below zero. Returns the delta."""
        delta = -1 if self.score > 0 else 0
        self.score += delta
        self.wrong_streak += 1
        return delta


class TrialStateMachine:
    """Drives one learner through trials of a pool.

    States follow the bottom bar: CHECK while the learner builds an answer,
    CORRECT after a right answer (advance to the next trial) and WRONG after
    a wrong one (retry the same trial).
    """

    def __init__(self, pool: Pool, selector: AdaptiveSelector, stats: StatsSink,
                 reverse_mode: ReverseModeController | None = None,
                 options: SessionOptions | None = None,
                 word_length: int = DEFAULT_WORD_LENGTH,
                 stopwatch: Stopwatch | None = None,
                 rng: random.Random | None = None):
        self.pool = pool
        self.selector = selector
        self.stats = stats
        self.options = options or SessionOptions()
        self.reverse_mode = reverse_mode or SmartReverseMode(rng)
        self.word_length = word_length
        self.stopwatch = stopwatch or Stopwatch()
        self.rng = rng
        self.scoreboard = ScoreBoard(self.options.initial_score)

        self.trial: Trial = Trial.empty(self.direction, word_length)
        self.placed: list[str] = []
        self.state = BottomBarState.CHECK
        self.is_checking = False
        self.is_celebrating = False
        self.is_hidden = False
        self.last_result: bool | None = None

        self.new_trial()

    @property
    def controls_direction(self) -> bool:
        """True when the reverse mode controller, not the host, picks the direction."""
        return self.options.direction_override is None

    @property
    def direction(self) -> Direction:
        if not self.controls_direction:
            return self.options.direction_override
        return Direction.from_reverse(self.reverse_mode.is_reverse)

    @property
    def score(self) -> int:
        return self.scoreboard.score

    @property
    def wrong_streak(self) -> int:
        return self.scoreboard.wrong_streak

    @property
    def is_available(self) -> bool:
        """False when the pool cannot produce a trial; the host should hide the game."""
        return len(self.pool) >= self.word_length and not self.trial.is_empty

    @property
    def can_check(self) -> bool:
        return bool(self.placed) and not self.is_checking

    @property
    def feedback(self) -> str | None:
        """Correct answer text, shown once the trial has been checked."""
        if self.state is BottomBarState.CHECK:
            return None
        return ' '.join(self.trial.answer)

    def tile_states(self) -> list[tuple[str, bool]]:
        """Tiles in bag order with their placed flag."""
        return [(tile, tile in self.placed) for tile in self.trial.tiles]

    def new_trial(self) -> Trial:
        """Discard the current trial and generate a fresh one."""
        self.trial = generate_trial(self.pool, self.direction, self.word_length,
                                    self.selector, self.rng)
        self.placed = []
        self.is_checking = False
        self.is_celebrating = False
        self.last_result = None
        self._set_state(BottomBarState.CHECK)
        self._restart_timer()
        return self.trial

    def set_direction_override(self, direction: Direction | None) -> Trial:
        """Fix (or release) the direction and regenerate the trial."""
        self.options.direction_override = direction
        return self.new_trial()

    def set_word_length(self, word_length: int) -> Trial:
        """Change the word length. Below 1 the game becomes unavailable."""
        self.word_length = word_length
        return self.new_trial()

    def set_pool(self, pool: Pool) -> Trial:
        self.pool = pool
        return self.new_trial()

    def set_hidden(self, hidden: bool) -> None:
        """Pause answer timing while the game is hidden."""
        self.is_hidden = hidden
        if hidden:
            self.stopwatch.pause()
        elif self.state is BottomBarState.CHECK and not self.is_checking and self.is_available:
            self.stopwatch.start()

    def tap_tile(self, token: str) -> bool:
        """Toggle a tile in the placed sequence. Returns True if the tap applied."""
        if token not in self.trial.tiles:
            return False
        if self.is_checking and self.state is not BottomBarState.WRONG:
            return False

        if self.state is BottomBarState.WRONG:
            # Tapping after a wrong answer unlocks editing without clearing
            self.is_checking = False
            self._set_state(BottomBarState.CHECK)
            self._restart_timer()

        if token in self.placed:
            self.placed = [t for t in self.placed if t != token]
        else:
            self.placed.append(token)
        return True

    def clear_placed(self) -> bool:
        if self.is_checking:
            return False
        self.placed = []
        return True

    def submit(self) -> bool | None:
        """Check the placed tiles. Returns the result, or None if nothing was checked."""
        if not self.placed or self.is_checking or self.state is not BottomBarState.CHECK:
            return None
        if not self.is_available:
            return None

        self.stopwatch.pause()
        elapsed = self.stopwatch.elapsed_seconds
        self.is_checking = True
        correct = is_correct(self.placed, self.trial)
        self.last_result = correct

        if correct:
            self._apply_correct(elapsed)
        else:
            self._apply_wrong()
        logger.info(
            f"Checked {self.placed} against {self.trial.answer}: "
            f"{'correct' if correct else 'wrong'}, score {self.score}"
        )
        return correct

    def retry(self) -> bool:
        """Start over on the same trial after a wrong answer."""
        if self.state is not BottomBarState.WRONG:
            return False
        self.placed = []
        self.is_checking = False
        self._set_state(BottomBarState.CHECK)
        self._restart_timer()
        return True

    def advance(self) -> Trial | None:
        """Move past a correct trial to a newly generated one."""
        if self.state is not BottomBarState.CORRECT:
            return None
        if self.options.on_correct is not None:
            self.options.on_correct(list(self.trial.unit_ids))
        return self.new_trial()

    def primary_action(self) -> str | None:
        """The single bottom-bar button: check, continue or try again."""
        if self.state is BottomBarState.CORRECT:
            self.advance()
            return 'continue'
        if self.state is BottomBarState.WRONG:
            self.retry()
            return 'retry'
        if self.submit() is None:
            return None
        return 'check'

    def _set_state(self, state: BottomBarState) -> None:
        if state is not self.state:
            logger.debug(f"Bottom bar {self.state.value} -> {state.value}")
        self.state = state

    def _restart_timer(self) -> None:
        if self.is_hidden:
            self.stopwatch.reset()
        else:
            self.stopwatch.restart()

    def _apply_correct(self, elapsed: float) -> None:
        unit_ids = self.trial.unit_ids
        self.stats.record_answer_time(elapsed)
        self.stopwatch.reset()

        for unit_id in unit_ids:
            self.stats.record_unit_result(unit_id, True)
            self.selector.update_character_weight(unit_id, True)
        self.stats.record_answer(True, len(unit_ids), self.pool.name)

        delta = self.scoreboard.apply_correct(len(unit_ids))
        self.stats.record_score(self.score, delta)
        self.stats.record_wrong_streak(self.wrong_streak)

        self._set_state(BottomBarState.CORRECT)
        self.is_celebrating = True
        if self.controls_direction:
            self.reverse_mode.decide_next_mode()

    def _apply_wrong(self) -> None:
        self.stopwatch.reset()
        for unit_id in self.trial.unit_ids:
            self.stats.record_unit_result(unit_id, False)
            self.selector.update_character_weight(unit_id, False)
        self.stats.record_answer(False, len(self.trial.unit_ids), self.pool.name)

        delta = self.scoreboard.apply_wrong()
        self.stats.record_score(self.score, delta)
        self.stats.record_wrong_streak(self.wrong_streak)

        self._set_state(BottomBarState.WRONG)
        if self.controls_direction:
            self.reverse_mode.record_wrong_answer()
        if self.options.on_wrong is not None:
            self.options.on_wrong()
