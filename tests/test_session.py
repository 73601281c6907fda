"""Tests for the trial state machine."""

import unittest

from core.interfaces import AdaptiveSelector, ReverseModeController, StatsSink
from core.models import BottomBarState, Direction, Pool, Unit
from core.session import ScoreBoard, SessionOptions, TrialStateMachine
from core.stopwatch import Stopwatch


# ============================================================================
# Mock Implementations
# ============================================================================

class MockSelector(AdaptiveSelector):
    """Always picks the first candidate and records weight updates."""

    def __init__(self):
        self.seen_calls = []
        self.update_calls = []

    def select_weighted_character(self, candidates: list[str]) -> str | None:
        return candidates[0] if candidates else None

    def mark_character_seen(self, unit_id: str) -> None:
        self.seen_calls.append(unit_id)

    def update_character_weight(self, unit_id: str, success: bool) -> None:
        self.update_calls.append((unit_id, success))


class MockReverseMode(ReverseModeController):
    """Reverse mode controller whose next decision is set by the test."""

    def __init__(self):
        self.reverse = False
        self.next_reverse = False
        self.decide_calls = 0
        self.wrong_calls = 0

    @property
    def is_reverse(self) -> bool:
        return self.reverse

    def decide_next_mode(self) -> None:
        self.decide_calls += 1
        self.reverse = self.next_reverse

    def record_wrong_answer(self) -> None:
        self.wrong_calls += 1
        self.reverse = False


class MockStatsSink(StatsSink):
    """Records every event as (name, args)."""

    def __init__(self):
        self.events = []

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def record_unit_result(self, unit_id: str, correct: bool) -> None:
        self.events.append(('unit_result', (unit_id, correct)))

    def record_answer(self, correct: bool, unit_count: int, collection: str | None = None) -> None:
        self.events.append(('answer', (correct, unit_count, collection)))

    def record_score(self, score: int, delta: int) -> None:
        self.events.append(('score', (score, delta)))

    def record_wrong_streak(self, streak: int) -> None:
        self.events.append(('wrong_streak', (streak,)))

    def record_answer_time(self, seconds: float) -> None:
        self.events.append(('answer_time', (seconds,)))


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_pool() -> Pool:
    return Pool([
        Unit('山', '山', 'mountain', hints=['サン']),
        Unit('川', '川', 'river', hints=['セン']),
        Unit('日', '日', 'sun', hints=['ニチ']),
        Unit('月', '月', 'moon'),
        Unit('火', '火', 'fire'),
    ], name='test')


ANSWER = ['mountain', 'river', 'sun']


# ============================================================================
# Test Cases
# ============================================================================

class SessionTestCase(unittest.TestCase):
    """Builds a state machine around mock collaborators."""

    def setUp(self):
        self.clock = FakeClock()
        self.selector = MockSelector()
        self.stats = MockStatsSink()
        self.reverse_mode = MockReverseMode()
        self.solved = []
        self.wrong_count = 0

    def make_game(self, word_length=3, direction_override=None, initial_score=0, pool=None):
        options = SessionOptions(
            direction_override=direction_override,
            on_correct=self.solved.append,
            on_wrong=self._on_wrong,
            initial_score=initial_score
        )
        return TrialStateMachine(
            pool or make_pool(), self.selector, self.stats,
            reverse_mode=self.reverse_mode, options=options,
            word_length=word_length, stopwatch=Stopwatch(self.clock)
        )

    def _on_wrong(self):
        self.wrong_count += 1

    def place(self, game, tokens):
        for token in tokens:
            self.assertTrue(game.tap_tile(token))


class TestInitialTrial(SessionTestCase):

    def test_starts_in_check(self):
        game = self.make_game()
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertEqual(game.trial.answer, ANSWER)
        self.assertEqual(game.placed, [])
        self.assertFalse(game.can_check)
        self.assertIsNone(game.feedback)
        self.assertTrue(game.is_available)
        self.assertTrue(game.stopwatch.running)

    def test_zero_word_length_is_unavailable(self):
        game = self.make_game(word_length=0)
        self.assertTrue(game.trial.is_empty)
        self.assertFalse(game.is_available)
        self.assertIsNone(game.submit())
        self.assertIsNone(game.primary_action())
        self.assertEqual(self.selector.seen_calls, [])

    def test_direction_from_controller(self):
        self.reverse_mode.reverse = True
        game = self.make_game()
        self.assertEqual(game.direction, Direction.REVERSE)
        self.assertEqual(game.trial.answer, ['山', '川', '日'])

    def test_tile_states(self):
        game = self.make_game()
        game.tap_tile('river')
        states = dict(game.tile_states())
        self.assertTrue(states['river'])
        self.assertFalse(states['mountain'])
        self.assertEqual(len(states), 5)


class TestPlacement(SessionTestCase):

    def test_toggle_preserves_order(self):
        game = self.make_game()
        self.place(game, ['river', 'mountain', 'sun'])
        self.assertTrue(game.tap_tile('river'))
        self.assertEqual(game.placed, ['mountain', 'sun'])
        self.assertTrue(game.tap_tile('river'))
        self.assertEqual(game.placed, ['mountain', 'sun', 'river'])

    def test_unknown_token_ignored(self):
        game = self.make_game()
        self.assertFalse(game.tap_tile('water'))
        self.assertEqual(game.placed, [])

    def test_clear(self):
        game = self.make_game()
        self.place(game, ['river', 'moon'])
        self.assertTrue(game.clear_placed())
        self.assertEqual(game.placed, [])

    def test_empty_submit_is_noop(self):
        game = self.make_game()
        self.assertIsNone(game.submit())
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertEqual(self.stats.events, [])
        self.assertEqual(self.selector.update_calls, [])


class TestCorrectAnswer(SessionTestCase):

    def test_correct_path(self):
        game = self.make_game(initial_score=2)
        self.clock.advance(4)
        self.place(game, ANSWER)

        self.assertTrue(game.submit())
        self.assertEqual(game.state, BottomBarState.CORRECT)
        self.assertTrue(game.last_result)
        self.assertTrue(game.is_celebrating)
        self.assertEqual(game.score, 5)
        self.assertEqual(game.wrong_streak, 0)
        self.assertEqual(game.feedback, 'mountain river sun')
        self.assertEqual(self.selector.update_calls, [('山', True), ('川', True), ('日', True)])
        self.assertEqual(self.reverse_mode.decide_calls, 1)
        self.assertEqual(self.reverse_mode.wrong_calls, 0)

        self.assertEqual(self.stats.events[0], ('answer_time', (4.0,)))
        self.assertIn(('answer', (True, 3, 'test')), self.stats.events)
        self.assertIn(('score', (5, 3)), self.stats.events)
        self.assertEqual(self.stats.names().count('unit_result'), 3)

    def test_locked_after_correct(self):
        game = self.make_game()
        self.place(game, ANSWER)
        game.submit()
        self.assertFalse(game.tap_tile('moon'))
        self.assertFalse(game.clear_placed())
        self.assertIsNone(game.submit())
        self.assertEqual(game.placed, ANSWER)

    def test_timer_stops_on_check(self):
        game = self.make_game()
        self.place(game, ANSWER)
        game.submit()
        self.assertFalse(game.stopwatch.running)

    def test_advance_fires_on_correct(self):
        game = self.make_game()
        self.place(game, ANSWER)
        game.submit()
        self.assertEqual(self.solved, [])

        self.assertIsNotNone(game.advance())
        self.assertEqual(self.solved, [['山', '川', '日']])
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertEqual(game.placed, [])
        self.assertFalse(game.is_celebrating)
        self.assertIsNone(game.last_result)
        self.assertTrue(game.stopwatch.running)

    def test_next_trial_uses_decided_direction(self):
        self.reverse_mode.next_reverse = True
        game = self.make_game()
        self.place(game, ANSWER)
        game.submit()
        game.advance()
        self.assertEqual(game.trial.direction, Direction.REVERSE)

    def test_advance_only_after_correct(self):
        game = self.make_game()
        self.assertIsNone(game.advance())
        self.assertEqual(self.solved, [])


class TestWrongAnswer(SessionTestCase):

    def test_wrong_order_is_wrong(self):
        game = self.make_game()
        trial = game.trial
        self.place(game, ['river', 'mountain', 'sun'])

        self.assertFalse(game.submit())
        self.assertEqual(game.state, BottomBarState.WRONG)
        self.assertFalse(game.last_result)
        self.assertIs(game.trial, trial)
        self.assertEqual(game.placed, ['river', 'mountain', 'sun'])
        self.assertEqual(game.feedback, 'mountain river sun')
        self.assertFalse(game.is_celebrating)

    def test_score_floor_at_zero(self):
        game = self.make_game()
        self.place(game, ['moon'])
        game.submit()
        self.assertEqual(game.score, 0)
        self.assertEqual(game.wrong_streak, 1)
        self.assertIn(('score', (0, 0)), self.stats.events)

    def test_wrong_takes_one_point(self):
        game = self.make_game(initial_score=5)
        self.place(game, ['moon'])
        game.submit()
        self.assertEqual(game.score, 4)
        self.assertIn(('score', (4, -1)), self.stats.events)

    def test_wrong_side_effects(self):
        game = self.make_game()
        self.place(game, ['moon'])
        game.submit()
        self.assertEqual(self.wrong_count, 1)
        self.assertEqual(self.reverse_mode.wrong_calls, 1)
        self.assertEqual(self.reverse_mode.decide_calls, 0)
        self.assertEqual(self.selector.update_calls, [('山', False), ('川', False), ('日', False)])
        self.assertIn(('answer', (False, 3, 'test')), self.stats.events)
        self.assertIn(('wrong_streak', (1,)), self.stats.events)
        self.assertNotIn('answer_time', self.stats.names())

    def test_streak_resets_on_correct(self):
        game = self.make_game()
        for _ in range(2):
            self.place(game, ['moon'])
            game.submit()
            game.retry()
        self.assertEqual(game.wrong_streak, 2)
        self.place(game, ANSWER)
        game.submit()
        self.assertEqual(game.wrong_streak, 0)

    def test_tap_after_wrong_unlocks_editing(self):
        game = self.make_game()
        self.place(game, ['river', 'mountain'])
        game.submit()
        self.clock.advance(5)

        self.assertTrue(game.tap_tile('moon'))
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertFalse(game.is_checking)
        self.assertEqual(game.placed, ['river', 'mountain', 'moon'])
        self.assertTrue(game.stopwatch.running)
        self.assertEqual(game.stopwatch.elapsed_seconds, 0)

    def test_tap_after_wrong_removes_placed_tile(self):
        game = self.make_game()
        self.place(game, ['river', 'mountain'])
        game.submit()
        game.tap_tile('river')
        self.assertEqual(game.placed, ['mountain'])

    def test_retry_clears_placed(self):
        game = self.make_game()
        trial = game.trial
        self.place(game, ['moon'])
        game.submit()

        self.assertTrue(game.retry())
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertEqual(game.placed, [])
        self.assertIs(game.trial, trial)
        self.assertTrue(game.stopwatch.running)

    def test_retry_only_after_wrong(self):
        game = self.make_game()
        self.assertFalse(game.retry())

    def test_second_attempt_can_succeed(self):
        game = self.make_game()
        self.place(game, ['moon'])
        game.submit()
        game.retry()
        self.place(game, ANSWER)
        self.assertTrue(game.submit())
        self.assertEqual(game.score, 3)


class TestPrimaryAction(SessionTestCase):

    def test_dispatch(self):
        game = self.make_game()
        self.assertIsNone(game.primary_action())

        self.place(game, ['moon'])
        self.assertEqual(game.primary_action(), 'check')
        self.assertEqual(game.state, BottomBarState.WRONG)

        self.assertEqual(game.primary_action(), 'retry')
        self.assertEqual(game.state, BottomBarState.CHECK)

        self.place(game, ANSWER)
        self.assertEqual(game.primary_action(), 'check')
        self.assertEqual(game.state, BottomBarState.CORRECT)

        self.assertEqual(game.primary_action(), 'continue')
        self.assertEqual(game.state, BottomBarState.CHECK)
        self.assertEqual(len(self.solved), 1)


class TestDirectionOverride(SessionTestCase):

    def test_override_fixes_direction(self):
        self.reverse_mode.reverse = True
        game = self.make_game(direction_override=Direction.FORWARD)
        self.assertFalse(game.controls_direction)
        self.assertEqual(game.trial.direction, Direction.FORWARD)

    def test_override_never_consults_controller(self):
        game = self.make_game(direction_override=Direction.REVERSE)
        self.place(game, ['山', '川', '日'])
        game.submit()
        game.advance()
        self.place(game, ['月'])
        game.submit()
        self.assertEqual(self.reverse_mode.decide_calls, 0)
        self.assertEqual(self.reverse_mode.wrong_calls, 0)
        self.assertEqual(self.wrong_count, 1)

    def test_set_override_regenerates(self):
        game = self.make_game()
        first = game.trial
        game.set_direction_override(Direction.REVERSE)
        self.assertIsNot(game.trial, first)
        self.assertEqual(game.trial.direction, Direction.REVERSE)

        game.set_direction_override(None)
        self.assertTrue(game.controls_direction)
        self.assertEqual(game.trial.direction, Direction.FORWARD)


class TestVisibility(SessionTestCase):

    def test_hidden_time_not_counted(self):
        game = self.make_game()
        self.clock.advance(1)
        game.set_hidden(True)
        self.clock.advance(30)
        game.set_hidden(False)
        self.clock.advance(2)
        self.assertEqual(game.stopwatch.elapsed_seconds, 3)

    def test_no_resume_after_check(self):
        game = self.make_game()
        self.place(game, ANSWER)
        game.submit()
        game.set_hidden(True)
        game.set_hidden(False)
        self.assertFalse(game.stopwatch.running)

    def test_retry_while_hidden_stays_paused(self):
        game = self.make_game()
        self.place(game, ['moon'])
        game.submit()
        game.set_hidden(True)
        game.retry()
        self.clock.advance(5)
        self.assertFalse(game.stopwatch.running)
        self.assertEqual(game.stopwatch.elapsed_seconds, 0)

        game.set_hidden(False)
        self.clock.advance(2)
        self.assertEqual(game.stopwatch.elapsed_seconds, 2)

    def test_new_trial_while_hidden_stays_paused(self):
        game = self.make_game()
        game.set_hidden(True)
        game.set_word_length(2)
        self.assertFalse(game.stopwatch.running)
        game.set_hidden(False)
        self.assertTrue(game.stopwatch.running)


class TestReconfigure(SessionTestCase):

    def test_set_word_length(self):
        game = self.make_game()
        game.set_word_length(5)
        self.assertEqual(len(game.trial.answer), 5)
        self.assertEqual(sorted(game.trial.tiles), sorted(game.trial.answer))

    def test_set_word_length_zero(self):
        game = self.make_game()
        game.set_word_length(0)
        self.assertFalse(game.is_available)
        self.assertEqual(game.trial.tiles, [])
        self.assertFalse(game.tap_tile('mountain'))

        game.set_word_length(3)
        self.assertTrue(game.is_available)
        self.assertEqual(game.trial.answer, ['mountain', 'river', 'sun'])

    def test_pool_too_small(self):
        game = self.make_game()
        game.set_word_length(6)
        self.assertFalse(game.is_available)
        self.assertEqual(game.trial.tiles, [])
        self.assertFalse(game.tap_tile('mountain'))
        self.assertIsNone(game.submit())

    def test_set_pool(self):
        game = self.make_game()
        pool = Pool([Unit('東', '東', 'east'), Unit('西', '西', 'west')], name='direction')
        game.set_pool(pool)
        self.assertFalse(game.is_available)
        game.set_word_length(2)
        self.assertTrue(game.is_available)
        self.assertEqual(game.trial.answer, ['east', 'west'])

        self.place(game, ['east', 'west'])
        game.submit()
        self.assertIn(('answer', (True, 2, 'direction')), self.stats.events)


class TestScoreBoard(unittest.TestCase):

    def test_negative_initial_score(self):
        self.assertEqual(ScoreBoard(-3).score, 0)

    def test_apply(self):
        board = ScoreBoard(1)
        self.assertEqual(board.apply_wrong(), -1)
        self.assertEqual(board.apply_wrong(), 0)
        self.assertEqual(board.wrong_streak, 2)
        self.assertEqual(board.apply_correct(4), 4)
        self.assertEqual(board.score, 4)
        self.assertEqual(board.wrong_streak, 0)


if __name__ == '__main__':
    unittest.main()
